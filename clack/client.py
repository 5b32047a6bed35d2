#!/usr/bin/env python3
"""
Clack Client

Read a line, turn it into a message, exchange it with the peer, show
the reply; repeat until the user logs out.
"""

import argparse
import os
import sys
from typing import Optional, TextIO

from dotenv import load_dotenv

from clack.common.exceptions import FileUnavailable, ProtocolViolation
from clack.common.protocol import FileMessage, Message, MessageType
from clack.common.utils import is_truthy
from clack.crypto import CaesarCipher
from clack.interpreter import interpret
from clack.transport import LoopbackTransport, Transport


class ClackClient:
    """
    Interactive session for one user.

    Input and output streams default to the console; pass others to
    script a session.
    """

    # An "unassigned" port in the IANA service name and port registry
    DEFAULT_SERVER_PORT = 4466
    DEFAULT_SERVER_NAME = "localhost"

    def __init__(
        self,
        username: str,
        server_name: str = DEFAULT_SERVER_NAME,
        server_port: int = DEFAULT_SERVER_PORT,
        transport: Optional[Transport] = None,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None,
        debug: bool = False,
    ):
        if not username:
            raise ValueError("username is required")

        self.username = username
        self.server_name = server_name
        self.server_port = server_port
        self.prompt = f"{server_name}> "
        self.transport = transport if transport is not None else LoopbackTransport()
        self.input = input_stream if input_stream is not None else sys.stdin
        self.output = output_stream if output_stream is not None else sys.stdout
        self.debug = debug

        self.message_to_send = None
        self.message_received = None

    @classmethod
    def from_env(cls, username: Optional[str] = None, **kwargs) -> "ClackClient":
        """
        Build a client configured from the environment (and any .env file).

        Raises:
            InvalidConfiguration: If the cipher settings are unusable
            ValueError: If no username is given or configured
        """
        load_dotenv()

        cipher = None
        key = os.getenv('CLACK_CIPHER_KEY')
        if key:
            alphabet = os.getenv('CLACK_CIPHER_ALPHABET', CaesarCipher.DEFAULT_ALPHABET)
            cipher = CaesarCipher(int(key), alphabet)

        kwargs.setdefault('transport', LoopbackTransport(cipher))
        kwargs.setdefault('debug', is_truthy(os.getenv('CLACK_DEBUG')))

        return cls(
            username or os.getenv('CLACK_USERNAME'),
            os.getenv('CLACK_SERVER_HOST', cls.DEFAULT_SERVER_NAME),
            int(os.getenv('CLACK_SERVER_PORT', cls.DEFAULT_SERVER_PORT)),
            **kwargs,
        )

    def _print(self, *args):
        print(*args, file=self.output)

    def start(self):
        """
        Run the session loop until a LOGOUT message has been sent or
        input runs out.

        Raises:
            ProtocolViolation: If a reply arrives that cannot be rendered
        """
        try:
            while True:
                self.message_to_send = self.read_user_input()
                if self.message_to_send is None:
                    self._print("\n[*] End of input")
                    break

                # Help is answered locally, never sent
                if self.message_to_send.type == MessageType.HELP:
                    self._print(self.message_to_send.data()[0])
                    continue

                self.message_received = self.transport.exchange(self.message_to_send)
                self.render(self.message_received)

                if self.debug:
                    self._print(f"data received    : {self.message_received.data()}")
                    self._print(f"message received : {self.message_received}")
                    self._print(f"received class   : {type(self.message_received).__name__}")

                if self.message_to_send.type == MessageType.LOGOUT:
                    break
        finally:
            self.transport.close()

    def read_user_input(self) -> Optional[Message]:
        """
        Prompt until a non-blank line is entered and interpret it.

        Returns:
            The message built from the line, or None at end of input
        """
        while True:
            self.output.write(self.prompt)
            self.output.flush()

            line = self.input.readline()
            if not line:
                return None

            message = interpret(self.username, line.rstrip("\r\n"))
            if message is not None:
                return message

    def render(self, message: Message):
        """Show a reply to the user, writing out any file it carries."""
        data = message.data()

        if message.type == MessageType.FILE:
            self.save_file(message)
        elif message.type == MessageType.LOGOUT:
            self._print("Logged out.")
        elif message.type == MessageType.LISTUSERS:
            self._print("In production this will be a users list.")
        elif message.type == MessageType.TEXT:
            self._print(data[0])
        else:
            raise ProtocolViolation(f"No rendering for message type {message.type}")

    def save_file(self, message: FileMessage):
        self._print(f"Writing file {message.save_as_name} ...")
        try:
            message.write_file()
            self._print("File written.")
        except FileUnavailable as e:
            self._print(f"Could not write file {message.save_as_name}. {e}")

    def __str__(self):
        return (f"{{class=ClackClient"
                f"|username={self.username}"
                f"|server_name={self.server_name}"
                f"|server_port={self.server_port}"
                f"|message_to_send={self.message_to_send}"
                f"|message_received={self.message_received}}}")


def main(argv=None):
    ap = argparse.ArgumentParser(description="Clack chat client")
    ap.add_argument("username", nargs="?", help="Name to put on your messages (default: $CLACK_USERNAME)")
    args = ap.parse_args(argv)

    try:
        client = ClackClient.from_env(args.username)
    except ValueError as e:
        print(f"[!] Error: {e}")
        return 1

    print(f"[*] Clack client for {client.username}")
    print(f"    Peer: {client.server_name}:{client.server_port}")
    print("    Type HELP for commands.\n")

    try:
        client.start()
    except KeyboardInterrupt:
        print("\n[*] Interrupted")
    except ProtocolViolation as e:
        print(f"\n[!] Error: {e}")
        import traceback
        traceback.print_exc()
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
