"""A minimal printf understanding %d, %u, %x (with l/ll), %p, %s and %%."""

from __future__ import annotations

import sys
from typing import IO, Iterator

_DIGITS = "0123456789ABCDEF"
_MASK32 = (1 << 32) - 1

# Conversions in the order they are recognised: (spelling, base, signed).
_INT_CONVERSIONS = (
    ("d", 10, True),
    ("ld", 10, True),
    ("lld", 10, True),
    ("u", 10, False),
    ("lu", 10, False),
    ("llu", 10, False),
    ("x", 16, False),
    ("lx", 16, False),
    ("llx", 16, False),
)


def _int32(value: int) -> int:
    value = int(value) & _MASK32
    return value - (1 << 32) if value >= 1 << 31 else value


def _printint(value: int, base: int, signed: bool) -> str:
    xx = _int32(value)
    negative = signed and xx < 0
    x = -xx if negative else xx & _MASK32
    digits = []
    while True:
        digits.append(_DIGITS[x % base])
        x //= base
        if x == 0:
            break
    if negative:
        digits.append("-")
    return "".join(reversed(digits))


def _printptr(value: int) -> str:
    return "0x" + "".join(
        _DIGITS[(int(value) >> shift) & 0xF] for shift in range(60, -4, -4)
    )


def _next_arg(args: Iterator[object]) -> object:
    try:
        return next(args)
    except StopIteration:
        raise TypeError("not enough arguments for format string") from None


def format(fmt: str, *args: object) -> str:
    """Return *fmt* with its conversions replaced by *args*."""
    out = []
    arg_iter = iter(args)
    i = 0
    while i < len(fmt):
        c = fmt[i]
        i += 1
        if c != "%":
            out.append(c)
            continue
        if i >= len(fmt):
            break
        rest = fmt[i:i + 3]
        for spelling, base, signed in _INT_CONVERSIONS:
            if rest.startswith(spelling):
                out.append(_printint(_next_arg(arg_iter), base, signed))
                i += len(spelling)
                break
        else:
            c0 = fmt[i]
            i += 1
            if c0 == "p":
                out.append(_printptr(_next_arg(arg_iter)))
            elif c0 == "s":
                s = _next_arg(arg_iter)
                out.append("(null)" if s is None else str(s))
            elif c0 == "%":
                out.append("%")
            else:
                out.append("%" + c0)
    return "".join(out)


def fprintf(stream: IO[str], fmt: str, *args: object) -> None:
    """Write the formatted text to *stream*."""
    stream.write(format(fmt, *args))


def printf(fmt: str, *args: object) -> None:
    """Write the formatted text to standard output."""
    fprintf(sys.stdout, fmt, *args)