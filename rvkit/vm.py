"""Sv39 page tables over a simulated pool of physical pages."""

from __future__ import annotations

from .riscv import (
    MAXVA,
    PGSIZE,
    PTE_R,
    PTE_U,
    PTE_V,
    PTE_W,
    PTE_X,
    pa2pte,
    pg_round_down,
    pg_round_up,
    pte2pa,
    pte_flags,
    px,
)

DEFAULT_BASE = 0x80000000
_PTE_SIZE = 8


class VMPanic(RuntimeError):
    """An invariant of the memory system was violated."""


class OutOfMemory(MemoryError):
    """No physical page was available."""


class BadAddress(ValueError):
    """A user virtual address is unmapped or not accessible."""


class PhysicalMemory:
    """A contiguous range of physical pages with a page allocator."""

    def __init__(self, npages: int, base: int = DEFAULT_BASE) -> None:
        if npages <= 0:
            raise ValueError("npages must be positive")
        if base % PGSIZE:
            raise ValueError("base must be page-aligned")
        self.base = base
        self.end = base + npages * PGSIZE
        self._data = bytearray(npages * PGSIZE)
        self._free = list(range(base, self.end, PGSIZE))
        self._allocated: set[int] = set()

    def alloc(self) -> int:
        """Hand out one physical page and return its address."""
        if not self._free:
            raise OutOfMemory("out of physical pages")
        pa = self._free.pop()
        self._allocated.add(pa)
        return pa

    def free(self, pa: int) -> None:
        """Return a page obtained from :meth:`alloc`."""
        if pa % PGSIZE or pa not in self._allocated:
            raise VMPanic("kfree")
        self._allocated.remove(pa)
        self._free.append(pa)

    def _offset(self, pa: int, n: int) -> int:
        if pa < self.base or pa + n > self.end:
            raise VMPanic(f"bad physical address {pa:#x}")
        return pa - self.base

    def read(self, pa: int, n: int) -> bytes:
        start = self._offset(pa, n)
        return bytes(self._data[start:start + n])

    def write(self, pa: int, data: bytes) -> None:
        start = self._offset(pa, len(data))
        self._data[start:start + len(data)] = data

    def read_word(self, pa: int) -> int:
        """Read a little-endian 64-bit word."""
        return int.from_bytes(self.read(pa, 8), "little")

    def write_word(self, pa: int, value: int) -> None:
        """Write a little-endian 64-bit word."""
        self.write(pa, (value & ((1 << 64) - 1)).to_bytes(8, "little"))

    def free_count(self) -> int:
        return len(self._free)


class PageTable:
    """A three-level Sv39 page table stored in physical memory."""

    def __init__(self, memory: PhysicalMemory) -> None:
        self.memory = memory
        self.root = memory.alloc()
        self._zero_page(self.root)

    def _zero_page(self, pa: int) -> None:
        self.memory.write(pa, bytes(PGSIZE))

    def walk(self, va: int, alloc: bool = False) -> int | None:
        """Return the physical address of the leaf PTE for *va*.

        With *alloc*, missing page-table pages are created. Returns None
        when a level is missing and cannot or may not be allocated.
        """
        if va >= MAXVA:
            raise VMPanic("walk")
        mem = self.memory
        table = self.root
        for level in (2, 1):
            slot = table + _PTE_SIZE * px(level, va)
            pte = mem.read_word(slot)
            if pte & PTE_V:
                table = pte2pa(pte)
                continue
            if not alloc:
                return None
            try:
                table = mem.alloc()
            except OutOfMemory:
                return None
            self._zero_page(table)
            mem.write_word(slot, pa2pte(table) | PTE_V)
        return table + _PTE_SIZE * px(0, va)

    def walkaddr(self, va: int) -> int | None:
        """Translate a user virtual address; None if not user-mapped."""
        if va >= MAXVA:
            return None
        slot = self.walk(va, False)
        if slot is None:
            return None
        pte = self.memory.read_word(slot)
        if not pte & PTE_V or not pte & PTE_U:
            return None
        return pte2pa(pte)

    def map_pages(self, va: int, size: int, pa: int, perm: int) -> None:
        """Map [va, va+size) to physical pages starting at *pa*."""
        if va % PGSIZE:
            raise VMPanic("mappages: va not aligned")
        if size % PGSIZE:
            raise VMPanic("mappages: size not aligned")
        if size == 0:
            raise VMPanic("mappages: size")
        mem = self.memory
        for offset in range(0, size, PGSIZE):
            slot = self.walk(va + offset, True)
            if slot is None:
                raise OutOfMemory("mappages: no memory for page-table page")
            if mem.read_word(slot) & PTE_V:
                raise VMPanic("mappages: remap")
            mem.write_word(slot, pa2pte(pa + offset) | int(perm) | PTE_V)

    def kvmmap(self, va: int, pa: int, size: int, perm: int) -> None:
        """Add a boot-time mapping; failure is fatal."""
        try:
            self.map_pages(va, size, pa, perm)
        except OutOfMemory as exc:
            raise VMPanic("kvmmap") from exc

    def unmap(self, va: int, npages: int, do_free: bool) -> None:
        """Remove *npages* existing mappings, optionally freeing the pages."""
        if va % PGSIZE:
            raise VMPanic("uvmunmap: not aligned")
        mem = self.memory
        for a in range(va, va + npages * PGSIZE, PGSIZE):
            slot = self.walk(a, False)
            if slot is None:
                raise VMPanic("uvmunmap: walk")
            pte = mem.read_word(slot)
            if not pte & PTE_V:
                raise VMPanic("uvmunmap: not mapped")
            if pte_flags(pte) == PTE_V:
                raise VMPanic("uvmunmap: not a leaf")
            if do_free:
                mem.free(pte2pa(pte))
            mem.write_word(slot, 0)

    def load_first(self, src: bytes) -> None:
        """Place initial code of less than a page at virtual address 0."""
        if len(src) >= PGSIZE:
            raise VMPanic("uvmfirst: more than a page")
        page = self.memory.alloc()
        self._zero_page(page)
        self.map_pages(0, PGSIZE, page, PTE_W | PTE_R | PTE_X | PTE_U)
        self.memory.write(page, bytes(src))

    def grow(self, oldsz: int, newsz: int, xperm: int) -> int:
        """Allocate zeroed user pages to grow from *oldsz* to *newsz*."""
        if newsz < oldsz:
            return oldsz
        mem = self.memory
        oldsz = pg_round_up(oldsz)
        for a in range(oldsz, newsz, PGSIZE):
            try:
                page = mem.alloc()
            except OutOfMemory:
                self.shrink(a, oldsz)
                raise
            self._zero_page(page)
            try:
                self.map_pages(a, PGSIZE, page, PTE_R | PTE_U | int(xperm))
            except OutOfMemory:
                mem.free(page)
                self.shrink(a, oldsz)
                raise
        return newsz

    def shrink(self, oldsz: int, newsz: int) -> int:
        """Free user pages to bring the size from *oldsz* down to *newsz*."""
        if newsz >= oldsz:
            return oldsz
        new_top, old_top = pg_round_up(newsz), pg_round_up(oldsz)
        if new_top < old_top:
            self.unmap(new_top, (old_top - new_top) // PGSIZE, True)
        return newsz

    def _freewalk(self, table: int) -> None:
        mem = self.memory
        for slot in range(table, table + PGSIZE, _PTE_SIZE):
            pte = mem.read_word(slot)
            if pte & PTE_V and not pte & (PTE_R | PTE_W | PTE_X):
                self._freewalk(pte2pa(pte))
                mem.write_word(slot, 0)
            elif pte & PTE_V:
                raise VMPanic("freewalk: leaf")
        mem.free(table)

    def free(self, sz: int) -> None:
        """Free *sz* bytes of user memory and then all page-table pages."""
        if sz > 0:
            self.unmap(0, pg_round_up(sz) // PGSIZE, True)
        self._freewalk(self.root)

    def copy_to(self, other: PageTable, sz: int) -> None:
        """Copy the first *sz* bytes of mappings and memory into *other*."""
        src_mem = self.memory
        dst_mem = other.memory
        for va in range(0, sz, PGSIZE):
            slot = self.walk(va, False)
            if slot is None:
                raise VMPanic("uvmcopy: pte should exist")
            pte = src_mem.read_word(slot)
            if not pte & PTE_V:
                raise VMPanic("uvmcopy: page not present")
            try:
                page = dst_mem.alloc()
            except OutOfMemory:
                other.unmap(0, va // PGSIZE, True)
                raise
            dst_mem.write(page, src_mem.read(pte2pa(pte), PGSIZE))
            try:
                other.map_pages(va, PGSIZE, page, pte_flags(pte))
            except OutOfMemory:
                dst_mem.free(page)
                other.unmap(0, va // PGSIZE, True)
                raise

    def clear_user(self, va: int) -> None:
        """Revoke user access to the page holding *va*."""
        slot = self.walk(va, False)
        if slot is None:
            raise VMPanic("uvmclear")
        self.memory.write_word(slot, self.memory.read_word(slot) & ~PTE_U)

    def copy_out(self, dstva: int, data: bytes) -> None:
        """Copy *data* to user virtual address *dstva*."""
        mem = self.memory
        data = bytes(data)
        pos = 0
        while pos < len(data):
            va0 = pg_round_down(dstva)
            if va0 >= MAXVA:
                raise BadAddress(f"copyout: {dstva:#x}")
            slot = self.walk(va0, False)
            pte = 0 if slot is None else mem.read_word(slot)
            required = PTE_V | PTE_U | PTE_W
            if pte & required != required:
                raise BadAddress(f"copyout: {dstva:#x}")
            offset = dstva - va0
            n = min(PGSIZE - offset, len(data) - pos)
            mem.write(pte2pa(pte) + offset, data[pos:pos + n])
            pos += n
            dstva = va0 + PGSIZE

    def copy_in(self, srcva: int, length: int) -> bytes:
        """Copy *length* bytes from user virtual address *srcva*."""
        chunks = []
        while length > 0:
            va0 = pg_round_down(srcva)
            pa0 = self.walkaddr(va0)
            if pa0 is None:
                raise BadAddress(f"copyin: {srcva:#x}")
            offset = srcva - va0
            n = min(PGSIZE - offset, length)
            chunks.append(self.memory.read(pa0 + offset, n))
            length -= n
            srcva = va0 + PGSIZE
        return b"".join(chunks)

    def copy_in_str(self, srcva: int, maximum: int) -> bytes:
        """Copy a NUL-terminated string of at most *maximum* bytes.

        The terminating NUL is not included in the result.
        """
        out = bytearray()
        while maximum > 0:
            va0 = pg_round_down(srcva)
            pa0 = self.walkaddr(va0)
            if pa0 is None:
                raise BadAddress(f"copyinstr: {srcva:#x}")
            offset = srcva - va0
            n = min(PGSIZE - offset, maximum)
            chunk = self.memory.read(pa0 + offset, n)
            nul = chunk.find(0)
            if nul >= 0:
                out += chunk[:nul]
                return bytes(out)
            out += chunk
            maximum -= n
            srcva = va0 + PGSIZE
        raise BadAddress("copyinstr: string not terminated")