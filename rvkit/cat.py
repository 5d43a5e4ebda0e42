"""cat and echo."""

from __future__ import annotations

import sys
from typing import IO, Sequence

_CHUNK = 512


def cat(stream: IO[bytes], out: IO[bytes]) -> int:
    """Copy *stream* to *out*; return the number of bytes copied."""
    total = 0
    while True:
        try:
            chunk = stream.read(_CHUNK)
        except OSError as exc:
            raise OSError("cat: read error") from exc
        if not chunk:
            return total
        try:
            written = out.write(chunk)
        except OSError as exc:
            raise OSError("cat: write error") from exc
        if written is not None and written != len(chunk):
            raise OSError("cat: write error")
        total += len(chunk)


def main(argv: Sequence[str] | None = None) -> int:
    paths = list(sys.argv[1:] if argv is None else argv)
    sys.stdout.flush()
    out = sys.stdout.buffer
    try:
        if not paths:
            cat(sys.stdin.buffer, out)
            return 0
        for path in paths:
            try:
                stream = open(path, "rb")
            except OSError:
                sys.stderr.write(f"cat: cannot open {path}\n")
                return 1
            with stream:
                cat(stream, out)
    except OSError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1
    finally:
        out.flush()
    return 0


def echo_main(argv: Sequence[str] | None = None) -> int:
    """Write the arguments separated by blanks and ended by a newline."""
    args = list(sys.argv[1:] if argv is None else argv)
    if args:
        sys.stdout.write(" ".join(args) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())