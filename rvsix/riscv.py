"""Sv39 paging arithmetic and RISC-V control-register bit definitions."""

MASK64 = (1 << 64) - 1

# Machine status register.
MSTATUS_MPP_MASK = 3 << 11
MSTATUS_MPP_M = 3 << 11
MSTATUS_MPP_S = 1 << 11
MSTATUS_MPP_U = 0 << 11
MSTATUS_MIE = 1 << 3

# Supervisor status register.
SSTATUS_SPP = 1 << 8
SSTATUS_SPIE = 1 << 5
SSTATUS_UPIE = 1 << 4
SSTATUS_SIE = 1 << 1
SSTATUS_UIE = 1 << 0

# Supervisor interrupt enable.
SIE_SEIE = 1 << 9
SIE_STIE = 1 << 5
SIE_SSIE = 1 << 1

# Machine-mode interrupt enable.
MIE_MEIE = 1 << 11
MIE_MTIE = 1 << 7
MIE_MSIE = 1 << 3

SATP_SV39 = 8 << 60

PGSIZE = 4096
PGSHIFT = 12

PTE_V = 1 << 0
PTE_R = 1 << 1
PTE_W = 1 << 2
PTE_X = 1 << 3
PTE_U = 1 << 4

PXMASK = 0x1FF

# One beyond the highest virtual address; one bit less than Sv39 allows,
# so addresses never need sign extension.
MAXVA = 1 << (9 + 9 + 9 + 12 - 1)

PTES_PER_PAGE = 512
PTE_SIZE = 8


def pg_round_up(sz):
    """Round a size up to the next page boundary."""
    return ((sz + PGSIZE - 1) & ~(PGSIZE - 1)) & MASK64


def pg_round_down(a):
    """Round an address down to the start of its page."""
    return (a & ~(PGSIZE - 1)) & MASK64


def pa_to_pte(pa):
    """Shift a physical address into the PPN field of a PTE."""
    return ((pa >> 12) << 10) & MASK64


def pte_to_pa(pte):
    """Extract the physical address a PTE refers to."""
    return ((pte >> 10) << 12) & MASK64


def pte_flags(pte):
    """Return the low ten flag bits of a PTE."""
    return pte & 0x3FF


def px_shift(level):
    """Bit position of the page-table index for the given level."""
    return PGSHIFT + 9 * level


def px(level, va):
    """Extract the 9-bit page-table index for a level from a virtual address."""
    return ((va & MASK64) >> px_shift(level)) & PXMASK


def make_satp(pagetable):
    """Build a satp value selecting Sv39 with the given root table."""
    return SATP_SV39 | ((pagetable & MASK64) >> 12)