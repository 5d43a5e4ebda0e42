"""Count lines, words and bytes."""

from __future__ import annotations

import sys
from functools import partial
from typing import IO, NamedTuple, Sequence

from .printf import fprintf

# NUL counts as a separator too, as in the byte scanner this mirrors.
_SEPARATORS = frozenset(b" \r\t\n\v\0")
_CHUNK = 512


class Counts(NamedTuple):
    lines: int
    words: int
    chars: int


def count(stream: IO[bytes]) -> Counts:
    """Count newlines, words and bytes in a binary stream."""
    lines = words = chars = 0
    inword = False
    for chunk in iter(partial(stream.read, _CHUNK), b""):
        chars += len(chunk)
        lines += chunk.count(b"\n")
        for byte in chunk:
            if byte in _SEPARATORS:
                inword = False
            elif not inword:
                words += 1
                inword = True
    return Counts(lines, words, chars)


def wc(stream: IO[bytes], name: str, out: IO[str]) -> Counts:
    """Count *stream* and write ``lines words chars name`` to *out*."""
    counts = count(stream)
    fprintf(out, "%d %d %d %s\n", counts.lines, counts.words, counts.chars, name)
    return counts


def main(argv: Sequence[str] | None = None) -> int:
    paths = list(sys.argv[1:] if argv is None else argv)
    try:
        if not paths:
            wc(sys.stdin.buffer, "", sys.stdout)
            return 0
        for path in paths:
            try:
                stream = open(path, "rb")
            except OSError:
                sys.stdout.write(f"wc: cannot open {path}\n")
                return 1
            with stream:
                wc(stream, path, sys.stdout)
    except OSError:
        sys.stdout.write("wc: read error\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())