import pytest

from rvkit.constants import OpenFlag
from rvkit.sh import (
    BackCmd,
    ExecCmd,
    ListCmd,
    PipeCmd,
    RedirCmd,
    ShellSyntaxError,
    bang_message,
    parse_cmd,
)

TRUNC_WRITE = OpenFlag.WRONLY | OpenFlag.CREATE | OpenFlag.TRUNC


def test_simple_exec():
    assert parse_cmd("echo hi there\n") == ExecCmd(["echo", "hi", "there"])


def test_empty_line_gives_empty_exec():
    assert parse_cmd("   \n") == ExecCmd([])


def test_redirections_wrap_in_order():
    cmd = parse_cmd("cat < in > out")
    assert cmd == RedirCmd(
        RedirCmd(ExecCmd(["cat"]), "in", OpenFlag.RDONLY, 0),
        "out",
        TRUNC_WRITE,
        1,
    )


def test_append_redirection():
    cmd = parse_cmd("echo x >> log")
    assert cmd == RedirCmd(
        ExecCmd(["echo", "x"]), "log", OpenFlag.WRONLY | OpenFlag.CREATE, 1
    )


def test_word_adjacent_to_symbol():
    cmd = parse_cmd("echo a>b")
    assert cmd == RedirCmd(ExecCmd(["echo", "a"]), "b", TRUNC_WRITE, 1)


def test_pipe_is_right_associative():
    cmd = parse_cmd("a | b | c")
    assert cmd == PipeCmd(
        ExecCmd(["a"]), PipeCmd(ExecCmd(["b"]), ExecCmd(["c"]))
    )


def test_list_and_background():
    assert parse_cmd("a ; b") == ListCmd(ExecCmd(["a"]), ExecCmd(["b"]))
    assert parse_cmd("a &") == BackCmd(ExecCmd(["a"]))
    assert parse_cmd("a & ; b") == ListCmd(BackCmd(ExecCmd(["a"])), ExecCmd(["b"]))


def test_block_with_redirection():
    cmd = parse_cmd("(a ; b) > f")
    assert cmd == RedirCmd(
        ListCmd(ExecCmd(["a"]), ExecCmd(["b"])), "f", TRUNC_WRITE, 1
    )


@pytest.mark.parametrize(
    "line, message",
    [
        ("(a", "syntax - missing )"),
        ("cat <", "missing file for redirection"),
        ("cat > |", "missing file for redirection"),
    ],
)
def test_syntax_errors(line, message):
    with pytest.raises(ShellSyntaxError, match=message.replace("(", r"\(").replace(")", r"\)")):
        parse_cmd(line)


def test_leftovers_are_rejected():
    with pytest.raises(ShellSyntaxError, match="leftovers"):
        parse_cmd("a & b")
    with pytest.raises(ShellSyntaxError, match="leftovers"):
        parse_cmd(")")


def test_argument_limit():
    nine = " ".join(f"w{i}" for i in range(9))
    assert parse_cmd(nine) == ExecCmd(nine.split())
    with pytest.raises(ShellSyntaxError, match="too many args"):
        parse_cmd(nine + " w9")


def test_bang_message_highlights_os():
    assert (
        bang_message(["hello", "os", "world"])
        == "hello \033[1;34mos\033[0m world \n"
    )


def test_bang_message_plain_and_empty():
    assert bang_message(["osx", "a"]) == "osx a \n"
    assert bang_message([]) == "\n"


def test_bang_message_too_long_still_prints():
    words = ["x" * 100] * 6
    out = bang_message(words)
    assert out.startswith("Message too long\n")
    assert out.endswith(" ".join(words) + " \n")