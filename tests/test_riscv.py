import pytest

from rvkit.riscv import (
    MAXVA,
    PGSHIFT,
    PGSIZE,
    PTE_R,
    PTE_U,
    PTE_V,
    PTE_W,
    PTE_X,
    SATP_SV39,
    make_satp,
    pa2pte,
    pg_round_down,
    pg_round_up,
    pte2pa,
    pte_flags,
    px,
)


def test_round_up():
    assert pg_round_up(0) == 0
    assert pg_round_up(1) == PGSIZE
    assert pg_round_up(PGSIZE) == PGSIZE
    assert pg_round_up(PGSIZE + 1) == 2 * PGSIZE


def test_round_down():
    assert pg_round_down(0) == 0
    assert pg_round_down(PGSIZE - 1) == 0
    assert pg_round_down(PGSIZE + 5) == PGSIZE
    assert pg_round_down(MAXVA - 1) == MAXVA - PGSIZE


@pytest.mark.parametrize("value", [0, 1, 4095, 4096, 123456, 0x80001234])
def test_rounding_brackets_value(value):
    down = pg_round_down(value)
    up = pg_round_up(value)
    assert down <= value <= up
    assert down % PGSIZE == 0
    assert up % PGSIZE == 0
    assert up - down in (0, PGSIZE)


def test_pa2pte_pinned():
    assert pa2pte(0x80000000) == 0x20000000


@pytest.mark.parametrize("pa", [0, PGSIZE, 0x80000000, 0x87FFF000])
def test_pte_round_trip(pa):
    pte = pa2pte(pa) | PTE_V | PTE_R | PTE_W
    assert pte2pa(pte) == pa
    assert pte_flags(pte) == PTE_V | PTE_R | PTE_W


def test_pte_flags_masks_address():
    pte = pa2pte(0x80000000) | PTE_X | PTE_U
    assert pte_flags(pte) == PTE_X | PTE_U


@pytest.mark.parametrize("va", [0, 0x1234, 0x40201ABC, MAXVA - 1, 0x3FFFFFE000])
def test_px_reassembles_address(va):
    rebuilt = va & (PGSIZE - 1)
    for level in range(3):
        index = px(level, va)
        assert 0 <= index < 512
        rebuilt |= index << (PGSHIFT + 9 * level)
    assert rebuilt == va


def test_px_top_index_of_last_address():
    # MAXVA is one bit short of Sv39, so the top index stops at half.
    assert px(2, MAXVA - 1) == 255
    assert px(0, MAXVA - 1) == 511


def test_make_satp():
    root = 0x80042000
    satp = make_satp(root)
    assert satp & SATP_SV39 == SATP_SV39
    assert satp >> 60 == 8
    assert (satp & ((1 << 44) - 1)) << 12 == root