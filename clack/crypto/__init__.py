"""
Payload obfuscation for Clack.

This package provides:
- A Caesar (shift) cipher over a configurable alphabet
"""

from .caesar import CaesarCipher

__all__ = [
    'CaesarCipher',
]
