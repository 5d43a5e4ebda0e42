"""Park–Miller minimal standard pseudo-random numbers."""

from __future__ import annotations

from typing import Iterator

_MASK64 = (1 << 64) - 1
_MODULUS = 0x7FFFFFFF
_MULTIPLIER = 16807
_Q = 127773  # _MODULUS // _MULTIPLIER
_R = 2836  # _MODULUS % _MULTIPLIER


def do_rand(ctx: int) -> int:
    """Advance the generator state *ctx* and return the new state.

    The state is an unsigned 64-bit value; the result lies in
    [0, 0x7ffffffd] and is also the state for the following call.
    """
    x = ((ctx & _MASK64) % 0x7FFFFFFE) + 1
    hi, lo = divmod(x, _Q)
    x = _MULTIPLIER * lo - _R * hi
    if x < 0:
        x += _MODULUS
    return x - 1


class ParkMiller:
    """A stateful generator; each call to :meth:`next` advances it."""

    def __init__(self, seed: int = 1) -> None:
        self.state = seed & _MASK64

    def next(self) -> int:
        self.state = do_rand(self.state)
        return self.state

    def __iter__(self) -> Iterator[int]:
        while True:
            yield self.next()