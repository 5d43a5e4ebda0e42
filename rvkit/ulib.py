"""Small string and input helpers used by the user programs."""

from __future__ import annotations

from itertools import takewhile
from typing import IO, AnyStr

_INT_BITS = 32


def _to_int32(value: int) -> int:
    value &= (1 << _INT_BITS) - 1
    if value >= 1 << (_INT_BITS - 1):
        value -= 1 << _INT_BITS
    return value


def atoi(s: str) -> int:
    """Convert the leading decimal digits of *s* to a 32-bit int.

    No sign and no leading blanks are accepted; parsing stops at the
    first character that is not a digit.
    """
    n = 0
    for ch in takewhile(lambda c: "0" <= c <= "9", s):
        n = n * 10 + ord(ch) - ord("0")
    return _to_int32(n)


def gets(stream: IO[AnyStr], maximum: int) -> AnyStr:
    """Read one line of at most ``maximum - 1`` characters.

    Reading stops after a newline or carriage return, which is kept, or
    at end of input. The result has the stream's own type.
    """
    empty = stream.read(0)
    parts = []
    while len(parts) + 1 < maximum:
        c = stream.read(1)
        if not c:
            break
        parts.append(c)
        if c in ("\n", "\r", b"\n", b"\r"):
            break
    return empty.join(parts)