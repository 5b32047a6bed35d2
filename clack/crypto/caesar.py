"""
Caesar (shift) cipher over a configurable alphabet.

Each character found in the alphabet is moved a fixed number of places
along it, wrapping around at the end. Characters outside the alphabet
pass through untouched. This obscures message text; it is not secure.
"""

from typing import Optional

from clack.common.exceptions import InvalidConfiguration


class CaesarCipher:
    """
    Keyed shift transform along an ordered alphabet of distinct characters.
    """

    DEFAULT_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

    def __init__(self, key: int, alphabet: str = DEFAULT_ALPHABET):
        """
        Initialize the cipher.
        
        Args:
            key: Non-zero shift; any sign or size, reduced modulo len(alphabet)
            alphabet: Characters the cipher acts on
        
        Raises:
            InvalidConfiguration: If key is zero, or alphabet is empty
                or contains a duplicate character
        """
        if key == 0:
            raise InvalidConfiguration("key of zero not allowed")
        if not alphabet:
            raise InvalidConfiguration("empty alphabet not allowed")
        if len(set(alphabet)) != len(alphabet):
            raise InvalidConfiguration("duplicate chars in alphabet")
        
        # Python's % is floored, so negative keys land in 0 .. len - 1
        self._key = key % len(alphabet)
        self._alphabet = alphabet
        self._index = {ch: i for i, ch in enumerate(alphabet)}

    @property
    def key(self) -> int:
        return self._key

    @property
    def alphabet(self) -> str:
        return self._alphabet

    def encrypt(self, clear_text: Optional[str]) -> Optional[str]:
        """
        Encrypt a string. Characters not in the alphabet are preserved.
        
        Args:
            clear_text: String to encrypt (None passes through)
        
        Returns:
            The encrypted string
        """
        return self._shift_chars(clear_text, self._key)

    def decrypt(self, cipher_text: Optional[str]) -> Optional[str]:
        """
        Decrypt a string. Characters not in the alphabet are preserved.
        
        Args:
            cipher_text: String to decrypt (None passes through)
        
        Returns:
            The decrypted string
        """
        return self._shift_chars(cipher_text, -self._key)

    def _shift_chars(self, text: Optional[str], shift: int) -> Optional[str]:
        if text is None:
            return None
        
        size = len(self._alphabet)
        shift %= size
        
        shifted = []
        for ch in text:
            loc = self._index.get(ch)
            if loc is None:
                shifted.append(ch)
            else:
                shifted.append(self._alphabet[(loc + shift) % size])
        return "".join(shifted)

    def __eq__(self, other):
        if not isinstance(other, CaesarCipher):
            return NotImplemented
        return self._key == other._key and self._alphabet == other._alphabet

    def __hash__(self):
        return hash((self._key, self._alphabet))

    def __repr__(self):
        return f"CaesarCipher(key={self._key}, alphabet={self._alphabet!r})"


# Test function for development
if __name__ == "__main__":
    cipher = CaesarCipher(3)
    test_message = "HELLO, CLACK!"
    
    print(f"Original: {test_message}")
    
    encrypted = cipher.encrypt(test_message)
    print(f"Encrypted: {encrypted}")
    
    decrypted = cipher.decrypt(encrypted)
    print(f"Decrypted: {decrypted}")
    
    assert decrypted == test_message, "Encryption/Decryption test failed!"
    print("\n[✓] Caesar cipher test passed!")
