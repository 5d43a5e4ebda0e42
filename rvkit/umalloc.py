"""A first-fit free-list allocator over a simulated program break."""

from __future__ import annotations

HEADER_SIZE = 16  # bytes per header unit
MIN_CORE = 4096  # fewest units requested from the break at once


class Heap:
    """Circular free list of blocks measured in header-sized units.

    Addresses are byte offsets. The list sentinel lives at unit 0 and the
    break starts right after it. *limit_units* caps how many units the
    break may grow by; None means no cap.
    """

    def __init__(self, limit_units: int | None = None) -> None:
        self._limit = limit_units
        self._base = 0
        self._brk = 1
        self._size: dict[int, int] = {}
        self._next: dict[int, int] = {}
        self._allocated: set[int] = set()
        self._freep: int | None = None

    def _morecore(self, nu: int) -> int:
        nu = max(nu, MIN_CORE)
        if self._limit is not None and self._brk - 1 + nu > self._limit:
            raise MemoryError("heap exhausted")
        hp = self._brk
        self._brk += nu
        self._size[hp] = nu
        self._allocated.add(hp)
        self.free((hp + 1) * HEADER_SIZE)
        assert self._freep is not None
        return self._freep

    def malloc(self, nbytes: int) -> int:
        """Return the address of a block of at least *nbytes* bytes."""
        if nbytes < 0:
            raise ValueError("negative size")
        nunits = (nbytes + HEADER_SIZE - 1) // HEADER_SIZE + 1
        if self._freep is None:
            self._next[self._base] = self._base
            self._size[self._base] = 0
            self._freep = self._base
        prevp = self._freep
        p = self._next[prevp]
        while True:
            if self._size[p] >= nunits:
                if self._size[p] == nunits:
                    self._next[prevp] = self._next.pop(p)
                else:
                    self._size[p] -= nunits
                    self._next.pop(p) if False else None
                    p += self._size[p]
                    self._size[p] = nunits
                self._freep = prevp
                self._allocated.add(p)
                return (p + 1) * HEADER_SIZE
            if p == self._freep:
                p = self._morecore(nunits)
            prevp, p = p, self._next[p]

    def free(self, ap: int) -> None:
        """Return a block obtained from :meth:`malloc`."""
        if ap % HEADER_SIZE:
            raise ValueError(f"bad address {ap}")
        bp = ap // HEADER_SIZE - 1
        if bp not in self._allocated or self._freep is None:
            raise ValueError(f"address {ap} was not allocated")
        self._allocated.remove(bp)
        nxt = self._next
        size = self._size
        p = self._freep
        while not (p < bp < nxt[p]):
            if p >= nxt[p] and (bp > p or bp < nxt[p]):
                break
            p = nxt[p]
        following = nxt[p]
        if bp + size[bp] == following:
            size[bp] += size.pop(following)
            nxt[bp] = nxt.pop(following)
        else:
            nxt[bp] = following
        if p + size[p] == bp:
            size[p] += size.pop(bp)
            nxt[p] = nxt.pop(bp)
        else:
            nxt[p] = bp
        self._freep = p

    def free_units(self) -> int:
        """Total units currently on the free list."""
        if self._freep is None:
            return 0
        total = 0
        p = self._next[self._base]
        while p != self._base:
            total += self._size[p]
            p = self._next[p]
        return total