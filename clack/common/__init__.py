"""
Common utilities and protocol definitions for Clack.
"""

from .protocol import *
from .utils import utc_now, bare_file_name
from .exceptions import *

__all__ = [
    'MessageType',
    'Message',
    'TextMessage',
    'FileMessage',
    'HelpMessage',
    'LogoutMessage',
    'ListUsersMessage',
    'serialize_message',
    'deserialize_message',
    'encode_message',
    'decode_message',
    'ClackException',
    'InvalidConfiguration',
    'FileUnavailable',
    'MalformedCommand',
    'ProtocolViolation',
    'utc_now',
    'bare_file_name',
]
