"""
Tests for the command interpreter.
"""

import pytest

from clack.common.protocol import (
    FileMessage, HelpMessage, ListUsersMessage, LogoutMessage, TextMessage
)
from clack.interpreter import INVALID_SEND_FILE, INVALID_FILE_NAME, interpret


@pytest.fixture
def a_txt(workdir):
    (workdir / "a.txt").write_text("file body\n", encoding="utf-8")
    return workdir / "a.txt"


class TestKeywords:
    @pytest.mark.parametrize("line", ["HELP", "help", "  Help  ", "HELP me please"])
    def test_help(self, line):
        msg = interpret("alice", line)
        assert isinstance(msg, HelpMessage)
        assert msg.data()[0] == HelpMessage.HELP

    @pytest.mark.parametrize("line", ["LIST USERS", "list users", "List Users now"])
    def test_list_users(self, line):
        msg = interpret("alice", line)
        assert isinstance(msg, ListUsersMessage)
        assert msg.username == "alice"

    @pytest.mark.parametrize("line", ["LIST", "LIST files", "list the users"])
    def test_list_anything_else_is_text(self, line):
        msg = interpret("alice", line)
        assert isinstance(msg, TextMessage)
        assert msg.text == line

    @pytest.mark.parametrize("line", ["LOGOUT", "logout", "LogOut"])
    def test_logout(self, line):
        assert isinstance(interpret("alice", line), LogoutMessage)


class TestText:
    @pytest.mark.parametrize("line", [
        "hello world",
        "  leading and trailing  ",
        "SEND",
        "SEND a postcard",
        "send help",
        "HELPFUL hint",
        "files: SEND FILE a.txt",
    ])
    def test_whole_line_is_payload(self, line):
        msg = interpret("alice", line)
        assert isinstance(msg, TextMessage)
        assert msg.text == line
        assert msg.username == "alice"

    @pytest.mark.parametrize("line", ["", "   ", "\t  \t"])
    def test_blank_line_needs_more_input(self, line):
        assert interpret("alice", line) is None


class TestSendFile:
    def test_send_file(self, a_txt):
        msg = interpret("alice", "SEND FILE a.txt")
        assert isinstance(msg, FileMessage)
        assert msg.source_path == "a.txt"
        assert msg.save_as_name == "a.txt"
        assert msg.contents == "file body\n"

    def test_send_file_as(self, a_txt):
        msg = interpret("alice", "SEND FILE a.txt AS b.txt")
        assert isinstance(msg, FileMessage)
        assert msg.source_path == "a.txt"
        assert msg.save_as_name == "b.txt"
        assert msg.contents == "file body\n"

    def test_keywords_case_insensitive(self, a_txt):
        msg = interpret("alice", "send file a.txt as b.txt")
        assert isinstance(msg, FileMessage)
        assert msg.save_as_name == "b.txt"

    def test_file_names_keep_their_case(self, workdir):
        (workdir / "Notes.TXT").write_text("n", encoding="utf-8")
        msg = interpret("alice", "SEND FILE Notes.TXT AS Copy.TXT")
        assert msg.source_path == "Notes.TXT"
        assert msg.save_as_name == "Copy.TXT"

    def test_save_as_path_stripped(self, a_txt):
        msg = interpret("alice", "SEND FILE a.txt AS ../../b.txt")
        assert msg.save_as_name == "b.txt"

    def test_send_file_from_subdirectory(self, workdir):
        (workdir / "docs").mkdir()
        (workdir / "docs" / "c.txt").write_text("c", encoding="utf-8")

        msg = interpret("alice", "SEND FILE docs/c.txt")
        assert msg.source_path == "docs/c.txt"
        assert msg.save_as_name == "c.txt"

    def test_missing_file_gives_help(self, workdir):
        msg = interpret("alice", "SEND FILE missing.txt")
        assert isinstance(msg, HelpMessage)
        assert "missing.txt" in msg.data()[0]
        assert msg.data()[0].endswith(HelpMessage.HELP)

    def test_missing_file_with_as_gives_help(self, workdir):
        msg = interpret("alice", "SEND FILE missing.txt AS b.txt")
        assert isinstance(msg, HelpMessage)
        assert "missing.txt" in msg.data()[0]

    @pytest.mark.parametrize("line", [
        "SEND FILE",
        "send file",
        "SEND FILE a.txt b.txt",
        "SEND FILE a.txt TO b.txt",
        "SEND FILE a.txt AS",
        "SEND FILE a.txt AS b.txt extra",
        "SEND FILE a.txt AS b.txt AS c.txt",
    ])
    def test_bad_syntax_gives_help(self, a_txt, line):
        msg = interpret("alice", line)
        assert isinstance(msg, HelpMessage)
        assert msg.data()[0] == INVALID_SEND_FILE + "\n" + HelpMessage.HELP

    @pytest.mark.parametrize("line, name", [
        ("SEND FILE a.txt AS ..", ".."),
        ("SEND FILE a.txt AS sub/", "sub/"),
        ("SEND FILE sub/", "sub/"),
    ])
    def test_save_as_without_file_name_gives_help(self, a_txt, line, name):
        msg = interpret("alice", line)
        assert isinstance(msg, HelpMessage)
        assert msg.extra_text == INVALID_FILE_NAME.format(name)

    def test_as_only_counts_in_fourth_position(self, a_txt):
        msg = interpret("alice", "SEND FILE AS a.txt b.txt")
        assert isinstance(msg, HelpMessage)
        assert msg.extra_text == INVALID_SEND_FILE
