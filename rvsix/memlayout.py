"""Physical and virtual memory layout of the qemu virt machine."""

from .riscv import MAXVA, PGSIZE

UART0 = 0x10000000
UART0_IRQ = 10

VIRTIO0 = 0x10001000
VIRTIO0_IRQ = 1

CLINT = 0x2000000
CLINT_MTIME = CLINT + 0xBFF8

PLIC = 0x0C000000
PLIC_PRIORITY = PLIC + 0x0
PLIC_PENDING = PLIC + 0x1000

KERNBASE = 0x80000000
PHYSTOP = KERNBASE + 128 * 1024 * 1024

TRAMPOLINE = MAXVA - PGSIZE
TRAPFRAME = TRAMPOLINE - PGSIZE


def clint_mtimecmp(hartid):
    """Address of the timer compare register for a hart."""
    return CLINT + 0x4000 + 8 * hartid


def plic_menable(hart):
    """Machine-mode interrupt enable bits of a hart."""
    return PLIC + 0x2000 + hart * 0x100


def plic_senable(hart):
    """Supervisor-mode interrupt enable bits of a hart."""
    return PLIC + 0x2080 + hart * 0x100


def plic_mpriority(hart):
    """Machine-mode priority threshold of a hart."""
    return PLIC + 0x200000 + hart * 0x2000


def plic_spriority(hart):
    """Supervisor-mode priority threshold of a hart."""
    return PLIC + 0x201000 + hart * 0x2000


def plic_mclaim(hart):
    """Machine-mode claim/complete register of a hart."""
    return PLIC + 0x200004 + hart * 0x2000


def plic_sclaim(hart):
    """Supervisor-mode claim/complete register of a hart."""
    return PLIC + 0x201004 + hart * 0x2000


def kstack(p):
    """Virtual address of process slot p's kernel stack, below the trampoline."""
    return TRAMPOLINE - (p + 1) * 2 * PGSIZE