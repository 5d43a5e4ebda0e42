"""Command-line parser for the shell, plus the ``!`` message builtin."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .constants import OpenFlag

MAXARGS = 10
WHITESPACE = " \t\r\n\v"
SYMBOLS = "<|>&;()"

_HIGHLIGHT_WORD = "os"
_HIGHLIGHT_START = "\033[1;34m"
_HIGHLIGHT_END = "\033[0m"
_MAX_MESSAGE = 512


class ShellSyntaxError(ValueError):
    """The command line could not be parsed."""


@dataclass
class ExecCmd:
    """Run a program with its arguments; ``argv[0]`` names the program."""

    argv: list[str] = field(default_factory=list)


@dataclass
class RedirCmd:
    """Run *cmd* with descriptor *fd* reopened on *file* using *mode*."""

    cmd: "Command"
    file: str
    mode: OpenFlag
    fd: int


@dataclass
class PipeCmd:
    """Connect the output of *left* to the input of *right*."""

    left: "Command"
    right: "Command"


@dataclass
class ListCmd:
    """Run *left*, wait for it, then run *right*."""

    left: "Command"
    right: "Command"


@dataclass
class BackCmd:
    """Run *cmd* without waiting for it."""

    cmd: "Command"


Command = Union[ExecCmd, RedirCmd, PipeCmd, ListCmd, BackCmd]


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.end = len(text)

    def _skip_blanks(self) -> None:
        while self.pos < self.end and self.text[self.pos] in WHITESPACE:
            self.pos += 1

    def peek(self, toks: str) -> bool:
        self._skip_blanks()
        return self.pos < self.end and self.text[self.pos] in toks

    def gettoken(self) -> tuple[str, str]:
        """Return the token kind and its text.

        The kind is "" at the end of input, "a" for a word, "+" for ">>"
        and otherwise the symbol itself.
        """
        self._skip_blanks()
        text, start = self.text, self.pos
        if self.pos >= self.end:
            kind = ""
        else:
            c = text[self.pos]
            if c in "|();&<":
                self.pos += 1
                kind = c
            elif c == ">":
                self.pos += 1
                kind = ">"
                if self.pos < self.end and text[self.pos] == ">":
                    kind = "+"
                    self.pos += 1
            else:
                kind = "a"
                while (
                    self.pos < self.end
                    and text[self.pos] not in WHITESPACE
                    and text[self.pos] not in SYMBOLS
                ):
                    self.pos += 1
        word = text[start:self.pos]
        self._skip_blanks()
        return kind, word

    def parse_line(self) -> Command:
        cmd = self.parse_pipe()
        while self.peek("&"):
            self.gettoken()
            cmd = BackCmd(cmd)
        if self.peek(";"):
            self.gettoken()
            cmd = ListCmd(cmd, self.parse_line())
        return cmd

    def parse_pipe(self) -> Command:
        cmd = self.parse_exec()
        if self.peek("|"):
            self.gettoken()
            cmd = PipeCmd(cmd, self.parse_pipe())
        return cmd

    def parse_redirs(self, cmd: Command) -> Command:
        while self.peek("<>"):
            tok, _ = self.gettoken()
            kind, file = self.gettoken()
            if kind != "a":
                raise ShellSyntaxError("missing file for redirection")
            if tok == "<":
                cmd = RedirCmd(cmd, file, OpenFlag.RDONLY, 0)
            elif tok == ">":
                cmd = RedirCmd(
                    cmd, file, OpenFlag.WRONLY | OpenFlag.CREATE | OpenFlag.TRUNC, 1
                )
            else:
                cmd = RedirCmd(cmd, file, OpenFlag.WRONLY | OpenFlag.CREATE, 1)
        return cmd

    def parse_block(self) -> Command:
        if not self.peek("("):
            raise ShellSyntaxError("parseblock")
        self.gettoken()
        cmd = self.parse_line()
        if not self.peek(")"):
            raise ShellSyntaxError("syntax - missing )")
        self.gettoken()
        return self.parse_redirs(cmd)

    def parse_exec(self) -> Command:
        if self.peek("("):
            return self.parse_block()
        exec_cmd = ExecCmd()
        ret = self.parse_redirs(exec_cmd)
        while not self.peek("|)&;"):
            kind, word = self.gettoken()
            if kind == "":
                break
            if kind != "a":
                raise ShellSyntaxError("syntax")
            exec_cmd.argv.append(word)
            if len(exec_cmd.argv) >= MAXARGS:
                raise ShellSyntaxError("too many args")
            ret = self.parse_redirs(ret)
        return ret


def parse_cmd(s: str) -> Command:
    """Parse a whole command line into a command tree."""
    parser = _Parser(s)
    cmd = parser.parse_line()
    parser.peek("")
    if parser.pos != parser.end:
        raise ShellSyntaxError(f"syntax: leftovers: {s[parser.pos:]}")
    return cmd


def bang_message(args: list[str]) -> str:
    """Return what the ``!`` builtin prints for its arguments.

    Words are echoed each followed by a blank, the word "os" is shown
    in bold blue, and the line ends with a newline. A message longer
    than 512 characters is preceded by a warning line.
    """
    message = " ".join(args)
    out = []
    if len(message) > _MAX_MESSAGE:
        out.append("Message too long\n")
    for token in message.split(" "):
        if not token:
            continue
        if token == _HIGHLIGHT_WORD:
            out.append(f"{_HIGHLIGHT_START}{token}{_HIGHLIGHT_END} ")
        else:
            out.append(f"{token} ")
    out.append("\n")
    return "".join(out)