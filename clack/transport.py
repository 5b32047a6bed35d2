"""
Message exchange with the peer.

The session loop only needs to hand a message over and get a reply back.
LoopbackTransport stands in for a network connection: it pushes every
message through the wire encoding and returns what comes out the other
side, so replies are equal to, but never the same object as, the request.
"""

from abc import ABC, abstractmethod
from typing import Optional

from clack.common.protocol import Message, decode_message, encode_message
from clack.crypto import CaesarCipher


class Transport(ABC):
    """One exchange in flight at a time: send a message, receive the reply."""

    @abstractmethod
    def exchange(self, message: Message) -> Message:
        """Deliver a message and return the peer's reply."""

    def close(self) -> None:
        """Release any underlying connection."""


class LoopbackTransport(Transport):
    """
    Echoes each message back through the wire codec.

    Args:
        cipher: Optional cipher applied to payload text on the wire
    """

    def __init__(self, cipher: Optional[CaesarCipher] = None):
        self.cipher = cipher
        self.last_wire = None

    def exchange(self, message: Message) -> Message:
        self.last_wire = encode_message(message, self.cipher)
        return decode_message(self.last_wire, self.cipher)
