"""
Command Interpreter

Turns one line of user input into exactly one message. The first
whitespace-separated token, in any case, selects the command:

    HELP                              -> HelpMessage
    LIST USERS                        -> ListUsersMessage
    LOGOUT                            -> LogoutMessage
    SEND FILE filepath {AS filename}  -> FileMessage (file read in)

Anything else, including a keyword followed by something it does not
recognise, is sent as a TextMessage carrying the whole line.
"""

from typing import List, Optional

from pydantic import ValidationError

from clack.common.exceptions import FileUnavailable, MalformedCommand
from clack.common.protocol import (
    FileMessage, HelpMessage, ListUsersMessage, LogoutMessage, Message, TextMessage
)

INVALID_SEND_FILE = "Invalid SEND FILE syntax."
INVALID_FILE_NAME = "Invalid file name to save as: {}"


def interpret(username: str, line: str) -> Optional[Message]:
    """
    Build the message a line of input asks for.

    Problems with the input never raise: a malformed SEND FILE or an
    unreadable file comes back as a HelpMessage explaining what went wrong.

    Args:
        username: Name to put on the message
        line: Raw line as typed

    Returns:
        The message, or None if the line is blank and more input is needed
    """
    tokens = line.split()
    if not tokens:
        return None

    keyword = tokens[0].upper()

    if keyword == "HELP":
        return HelpMessage(username=username)

    if keyword == "LIST":
        if len(tokens) > 1 and tokens[1].upper() == "USERS":
            return ListUsersMessage(username=username)
        return TextMessage(username=username, text=line)

    if keyword == "LOGOUT":
        return LogoutMessage(username=username)

    if keyword == "SEND":
        if len(tokens) == 1 or tokens[1].upper() != "FILE":
            return TextMessage(username=username, text=line)
        try:
            return _send_file(username, tokens)
        except (MalformedCommand, FileUnavailable) as e:
            return HelpMessage(username=username, extra_text=str(e))

    return TextMessage(username=username, text=line)


def _send_file(username: str, tokens: List[str]) -> FileMessage:
    """Handle 'SEND FILE ...'; the shape is decided by token count alone."""
    if len(tokens) == 3:
        source_path, save_as_name = tokens[2], tokens[2]
    elif len(tokens) == 5 and tokens[3].upper() == "AS":
        source_path, save_as_name = tokens[2], tokens[4]
    else:
        raise MalformedCommand(INVALID_SEND_FILE)

    try:
        msg = FileMessage(username=username, source_path=source_path, save_as_name=save_as_name)
    except ValidationError as e:
        raise MalformedCommand(INVALID_FILE_NAME.format(save_as_name)) from e

    msg.read_file()
    return msg
