import pytest

from rvsix.memlayout import (
    CLINT,
    KERNBASE,
    PHYSTOP,
    PLIC,
    TRAMPOLINE,
    TRAPFRAME,
    UART0,
    VIRTIO0,
    clint_mtimecmp,
    kstack,
    plic_mclaim,
    plic_menable,
    plic_mpriority,
    plic_sclaim,
    plic_senable,
    plic_spriority,
)
from rvsix.riscv import MAXVA, PGSIZE, pg_round_down, pg_round_up, px


def test_fixed_addresses():
    assert KERNBASE == 0x80000000
    assert UART0 == 0x10000000
    assert VIRTIO0 == 0x10001000
    assert clint_mtimecmp(0) == 0x2004000
    assert plic_mpriority(0) == 0x0C200000
    assert plic_sclaim(0) == 0x0C201004


def test_ram_size():
    assert pg_round_up(PHYSTOP - KERNBASE) == 128 * 1024 * 1024
    assert pg_round_down(PHYSTOP) == PHYSTOP
    assert px(2, KERNBASE) == 2
    assert px(2, PHYSTOP - 1) == 2


def test_trampoline_and_trapframe():
    assert TRAMPOLINE == MAXVA - PGSIZE
    assert TRAPFRAME == TRAMPOLINE - PGSIZE
    assert px(2, TRAMPOLINE) == 255
    assert px(1, TRAMPOLINE) == 511
    assert px(0, TRAMPOLINE) == 511
    assert px(0, TRAPFRAME) == 510
    assert pg_round_down(TRAPFRAME + 100) == TRAPFRAME


@pytest.mark.parametrize("p", range(8))
def test_kstack_guard_pages(p):
    assert kstack(p) % PGSIZE == 0
    assert kstack(p) - kstack(p + 1) == 2 * PGSIZE
    assert kstack(p) < TRAMPOLINE


def test_kstack_first_slot():
    assert kstack(0) == TRAMPOLINE - 2 * PGSIZE


@pytest.mark.parametrize("hart", range(4))
def test_plic_registers(hart):
    assert plic_mclaim(hart) == plic_mpriority(hart) + 4
    assert plic_sclaim(hart) == plic_spriority(hart) + 4
    assert plic_senable(hart) - plic_menable(hart) == 0x80
    assert plic_menable(hart) > PLIC


def test_clint_timecmp_stride():
    assert clint_mtimecmp(0) == CLINT + 0x4000
    assert clint_mtimecmp(1) - clint_mtimecmp(0) == 8