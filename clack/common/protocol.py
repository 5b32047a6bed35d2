"""
Protocol message definitions using Pydantic.

Every message shares an envelope (timestamp, username, type tag) and
exposes its payload as an ordered list of strings via data(). Messages
are serialized to/from one line of JSON for transmission.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Callable, ClassVar, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from clack.common.exceptions import FileUnavailable, ProtocolViolation
from clack.common.utils import bare_file_name, utc_now


class MessageType(str, Enum):
    """Closed set of message type tags."""
    TEXT = "TEXT"
    FILE = "FILE"
    HELP = "HELP"
    LOGOUT = "LOGOUT"
    LISTUSERS = "LISTUSERS"


class Message(BaseModel, ABC):
    """
    Common envelope for every message variant. Abstract: only the
    concrete variants below are instantiated.

    Equality holds between messages of the same class with equal
    timestamp, username and data(); the hash is that of str(message).
    """
    model_config = ConfigDict(validate_assignment=True)

    type: MessageType = Field(..., frozen=True)
    timestamp: datetime = Field(default_factory=utc_now, frozen=True)
    username: str = Field(..., min_length=1, frozen=True)

    # Fields carrying user text; these are what a cipher obscures on the wire
    PAYLOAD_FIELDS: ClassVar[Tuple[str, ...]] = ()

    @field_validator("timestamp")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        # One instant, one rendering: str() and hash() must agree with ==
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @abstractmethod
    def data(self) -> List[str]:
        """Return the variant-specific payload as an ordered list of strings."""

    def _details(self) -> str:
        return ""

    def __str__(self) -> str:
        rendered = (f"{{class={type(self).__name__}"
                    f"|timestamp={self.timestamp.isoformat()}"
                    f"|username={self.username}")
        details = self._details()
        if details:
            rendered += "|" + details
        return rendered + "}"

    def __eq__(self, other):
        if not isinstance(other, Message):
            return NotImplemented
        return (type(self) is type(other)
                and self.timestamp == other.timestamp
                and self.username == other.username
                and self.data() == other.data())

    def __hash__(self):
        return hash(str(self))


class TextMessage(Message):
    """Text entered from the keyboard."""
    type: Literal["TEXT"] = Field(default="TEXT", frozen=True)
    text: str = Field(..., frozen=True)

    PAYLOAD_FIELDS: ClassVar[Tuple[str, ...]] = ("text",)

    def data(self) -> List[str]:
        return [self.text]

    def _details(self) -> str:
        return f"text={self.text}"


class FileMessage(Message):
    """
    Name and contents of a text file.

    Constructing the message does not touch the file system. Contents are
    loaded by read_file() and saved by write_file(); until a successful
    read, contents is None. save_as_name never holds directory components:
    only the final component of whatever is supplied is kept, on
    construction and on assignment.
    """
    type: Literal["FILE"] = Field(default="FILE", frozen=True)
    source_path: str
    save_as_name: str
    contents: Optional[str] = None

    PAYLOAD_FIELDS: ClassVar[Tuple[str, ...]] = ("contents",)

    def __init__(self, **data):
        # Save under the source file's own name unless told otherwise
        if data.get("save_as_name") is None:
            data["save_as_name"] = data.get("source_path")
        super().__init__(**data)

    @field_validator("save_as_name")
    @classmethod
    def _strip_directories(cls, value: str) -> str:
        name = bare_file_name(value)
        if name in ("", ".", ".."):
            raise ValueError(f"not a file name: {value!r}")
        return name

    @property
    def is_loaded(self) -> bool:
        """Whether read_file() has populated the contents."""
        return self.contents is not None

    def data(self) -> List[str]:
        return [self.source_path, self.save_as_name, self.contents or ""]

    def read_file(self) -> None:
        """
        Read the whole text file at source_path into contents.

        Raises:
            FileUnavailable: If the file does not exist, cannot be opened
                for reading, or is not valid UTF-8 text
        """
        try:
            with open(self.source_path, "r", encoding="utf-8", newline="") as f:
                self.contents = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FileUnavailable(str(e), cause=e) from e

    def write_file(self) -> None:
        """
        Write contents verbatim to save_as_name in the current directory.

        Raises:
            FileUnavailable: If nothing has been read yet, or the file cannot
                be created or opened for writing
        """
        if self.contents is None:
            raise FileUnavailable(f"No contents read for {self.source_path}")

        try:
            with open(self.save_as_name, "w", encoding="utf-8", newline="") as f:
                f.write(self.contents)
        except OSError as e:
            raise FileUnavailable(str(e), cause=e) from e

    def _details(self) -> str:
        return (f"source_path={self.source_path}"
                f"|save_as_name={self.save_as_name}"
                f"|contents={self.contents or ''}")


class HelpMessage(Message):
    """
    The user asked for help, or typed something that needs correcting.
    Rendered locally; never sent to the peer.
    """
    HELP: ClassVar[str] = ("Commands: \n"
                           "    HELP\n"
                           "    LIST USERS\n"
                           "    LOGOUT\n"
                           "    SEND FILE filepath {AS filename}\n"
                           "  Anything else is a text message.")

    type: Literal["HELP"] = Field(default="HELP", frozen=True)
    extra_text: str = Field(default="", frozen=True)

    PAYLOAD_FIELDS: ClassVar[Tuple[str, ...]] = ("extra_text",)

    def data(self) -> List[str]:
        if self.extra_text:
            return [self.extra_text + "\n" + self.HELP]
        return [self.HELP]

    def _details(self) -> str:
        return f"help={self.data()[0]}"


class LogoutMessage(Message):
    """The user is ending the session."""
    type: Literal["LOGOUT"] = Field(default="LOGOUT", frozen=True)

    def data(self) -> List[str]:
        return []


class ListUsersMessage(Message):
    """Request for the list of connected users."""
    type: Literal["LISTUSERS"] = Field(default="LISTUSERS", frozen=True)

    def data(self) -> List[str]:
        return []


AnyMessage = Annotated[
    Union[TextMessage, FileMessage, HelpMessage, LogoutMessage, ListUsersMessage],
    Field(discriminator="type"),
]

_message_adapter = TypeAdapter(AnyMessage)


# Helper functions for serialization

def serialize_message(msg: Message) -> str:
    """Serialize a message to a single-line JSON string."""
    return msg.model_dump_json()


def deserialize_message(json_data: Union[str, bytes]) -> Message:
    """
    Deserialize JSON into the message variant named by its type tag.

    Raises:
        ProtocolViolation: If the data is not valid JSON, names an unknown
            type, or is missing required fields
    """
    try:
        return _message_adapter.validate_json(json_data)
    except ValidationError as e:
        raise ProtocolViolation(f"Malformed message: {e}") from e


def _transform_payload(msg: Message, transform: Callable[[Optional[str]], Optional[str]]) -> Message:
    if not msg.PAYLOAD_FIELDS:
        return msg
    update = {name: transform(getattr(msg, name)) for name in msg.PAYLOAD_FIELDS}
    return msg.model_copy(update=update)


def encode_message(msg: Message, cipher=None) -> bytes:
    """
    Encode a message as one newline-terminated UTF-8 line.

    Args:
        msg: Message to encode
        cipher: Optional cipher applied to payload text fields

    Returns:
        Wire bytes
    """
    if cipher is not None:
        msg = _transform_payload(msg, cipher.encrypt)
    return (serialize_message(msg) + "\n").encode("utf-8")


def decode_message(line: bytes, cipher=None) -> Message:
    """
    Decode one line produced by encode_message().

    Args:
        line: Wire bytes, with or without the trailing newline
        cipher: Cipher the sender applied, if any

    Returns:
        The decoded message

    Raises:
        ProtocolViolation: If the line is not a valid message
    """
    msg = deserialize_message(line.rstrip(b"\r\n"))
    if cipher is not None:
        msg = _transform_payload(msg, cipher.decrypt)
    return msg


# Test function
if __name__ == "__main__":
    print("[*] Testing protocol messages")

    text = TextMessage(username="alice", text="Hello world")
    print(f"\n[1] TextMessage:")
    print(f"    {text}")

    help_msg = HelpMessage(username="alice", extra_text="Invalid SEND FILE syntax.")
    print(f"\n[2] HelpMessage:")
    print(f"    {help_msg.data()[0]}")

    wire = encode_message(text)
    reconstructed = decode_message(wire)

    print(f"\n[3] Serialization test:")
    print(f"    Wire: {wire!r}")
    print(f"    Reconstructed: {reconstructed}")
    assert text == reconstructed

    print("\n[✓] Protocol message test passed!")
