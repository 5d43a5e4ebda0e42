"""grep with a tiny regular-expression matcher: ^ . * $ only."""

from __future__ import annotations

import sys
from typing import IO, Sequence


def _matchhere(re: str, ri: int, text: str, ti: int) -> bool:
    if ri == len(re):
        return True
    if ri + 1 < len(re) and re[ri + 1] == "*":
        return _matchstar(re[ri], re, ri + 2, text, ti)
    if re[ri] == "$" and ri + 1 == len(re):
        return ti == len(text)
    if ti < len(text) and (re[ri] == "." or re[ri] == text[ti]):
        return _matchhere(re, ri + 1, text, ti + 1)
    return False


def _matchstar(c: str, re: str, ri: int, text: str, ti: int) -> bool:
    while True:
        if _matchhere(re, ri, text, ti):
            return True
        if ti < len(text) and (text[ti] == c or c == "."):
            ti += 1
        else:
            return False


def match(re: str, text: str) -> bool:
    """Search for *re* anywhere in *text*."""
    if re.startswith("^"):
        return _matchhere(re, 1, text, 0)
    return any(_matchhere(re, 0, text, ti) for ti in range(len(text) + 1))


def grep(pattern: str, stream: IO[str], out: IO[str]) -> int:
    """Copy newline-terminated lines that match to *out*.

    A final line without a newline is not considered. Returns the number
    of lines written.
    """
    written = 0
    for line in stream:
        if line.endswith("\n") and match(pattern, line[:-1]):
            out.write(line)
            written += 1
    return written


def main(argv: Sequence[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        sys.stderr.write("usage: grep pattern [file ...]\n")
        return 1
    pattern, paths = args[0], args[1:]
    if not paths:
        grep(pattern, sys.stdin, sys.stdout)
        return 0
    for path in paths:
        try:
            stream = open(path, encoding="utf-8", errors="surrogateescape", newline="")
        except OSError:
            sys.stdout.write(f"grep: cannot open {path}\n")
            return 1
        with stream:
            grep(pattern, stream, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())