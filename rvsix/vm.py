"""Three-level Sv39 page tables over a simulated pool of physical pages."""

from .memlayout import KERNBASE
from .riscv import (
    MASK64,
    MAXVA,
    PGSIZE,
    PTE_R,
    PTE_SIZE,
    PTE_U,
    PTE_V,
    PTE_W,
    PTE_X,
    PTES_PER_PAGE,
    pa_to_pte,
    pg_round_down,
    pg_round_up,
    pte_flags,
    pte_to_pa,
    px,
)


class VMPanic(RuntimeError):
    """An invariant of the virtual-memory system was broken."""


class OutOfMemory(MemoryError):
    """No physical page was free."""


class PhysicalMemory:
    """A contiguous range of physical RAM handed out one page at a time."""

    def __init__(self, npages=256, base=KERNBASE):
        if npages <= 0:
            raise ValueError("physical memory needs at least one page")
        if base % PGSIZE:
            raise ValueError("physical memory base must be page-aligned")
        self.base = base
        self.size = npages * PGSIZE
        self._ram = bytearray(self.size)
        self._free = [base + i * PGSIZE for i in reversed(range(npages))]
        self._allocated = set()

    def _offset(self, pa, n):
        if n < 0 or pa < self.base or pa + n > self.base + self.size:
            raise ValueError(f"physical address {pa:#x}+{n} out of range")
        return pa - self.base

    def kalloc(self):
        """Allocate one zeroed page and return its physical address."""
        if not self._free:
            raise OutOfMemory("out of physical pages")
        pa = self._free.pop()
        off = self._offset(pa, PGSIZE)
        self._ram[off:off + PGSIZE] = bytes(PGSIZE)
        self._allocated.add(pa)
        return pa

    def kfree(self, pa):
        """Return an allocated page to the pool."""
        if pa not in self._allocated:
            raise VMPanic("kfree")
        self._allocated.remove(pa)
        self._free.append(pa)

    def read(self, pa, n):
        off = self._offset(pa, n)
        return bytes(self._ram[off:off + n])

    def write(self, pa, data):
        off = self._offset(pa, len(data))
        self._ram[off:off + len(data)] = data

    def read_word(self, pa):
        return int.from_bytes(self.read(pa, PTE_SIZE), "little")

    def write_word(self, pa, value):
        self.write(pa, (value & MASK64).to_bytes(PTE_SIZE, "little"))

    def free_pages(self):
        """Number of pages not currently allocated."""
        return len(self._free)


class PageTable:
    """A process or kernel page table rooted at a physical page."""

    def __init__(self, memory, root):
        self.memory = memory
        self.root = root

    @classmethod
    def create(cls, memory):
        """Create an empty page table; raises OutOfMemory if no page is free."""
        return cls(memory, memory.kalloc())

    def walk(self, va, alloc=False):
        """Return the physical address of the level-0 PTE for va.

        Returns None when an intermediate table is missing and alloc is false.
        """
        if va >= MAXVA:
            raise VMPanic("walk")
        mem = self.memory
        table = self.root
        for level in (2, 1):
            pte_addr = table + PTE_SIZE * px(level, va)
            pte = mem.read_word(pte_addr)
            if pte & PTE_V:
                table = pte_to_pa(pte)
            else:
                if not alloc:
                    return None
                table = mem.kalloc()
                mem.write_word(pte_addr, pa_to_pte(table) | PTE_V)
        return table + PTE_SIZE * px(0, va)

    def walkaddr(self, va):
        """Physical address of a user page, or None if it is not mapped for users."""
        if va >= MAXVA:
            return None
        pte_addr = self.walk(va)
        if pte_addr is None:
            return None
        pte = self.memory.read_word(pte_addr)
        if not pte & PTE_V or not pte & PTE_U:
            return None
        return pte_to_pa(pte)

    def map_pages(self, va, size, pa, perm):
        """Map [va, va+size) to physical memory starting at pa."""
        if size == 0:
            raise VMPanic("mappages: size")
        a = pg_round_down(va)
        last = pg_round_down(va + size - 1)
        while True:
            pte_addr = self.walk(a, True)
            if self.memory.read_word(pte_addr) & PTE_V:
                raise VMPanic("mappages: remap")
            self.memory.write_word(pte_addr, pa_to_pte(pa) | perm | PTE_V)
            if a == last:
                break
            a += PGSIZE
            pa += PGSIZE

    def unmap(self, va, npages, do_free):
        """Remove npages of existing mappings from page-aligned va."""
        if va % PGSIZE:
            raise VMPanic("uvmunmap: not aligned")
        mem = self.memory
        for a in range(va, va + npages * PGSIZE, PGSIZE):
            pte_addr = self.walk(a)
            if pte_addr is None:
                raise VMPanic("uvmunmap: walk")
            pte = mem.read_word(pte_addr)
            if not pte & PTE_V:
                raise VMPanic("uvmunmap: not mapped")
            if pte_flags(pte) == PTE_V:
                raise VMPanic("uvmunmap: not a leaf")
            if do_free:
                mem.kfree(pte_to_pa(pte))
            mem.write_word(pte_addr, 0)

    def load_first(self, src):
        """Place initial code, smaller than a page, at virtual address 0."""
        if len(src) >= PGSIZE:
            raise VMPanic("uvmfirst: more than a page")
        page = self.memory.kalloc()
        self.map_pages(0, PGSIZE, page, PTE_W | PTE_R | PTE_X | PTE_U)
        self.memory.write(page, bytes(src))

    def grow(self, oldsz, newsz, xperm=0):
        """Allocate zeroed user pages to grow from oldsz to newsz; return newsz."""
        if newsz < oldsz:
            return oldsz
        mem = self.memory
        oldsz = pg_round_up(oldsz)
        for a in range(oldsz, newsz, PGSIZE):
            try:
                page = mem.kalloc()
            except OutOfMemory:
                self.shrink(a, oldsz)
                raise
            try:
                self.map_pages(a, PGSIZE, page, PTE_R | PTE_U | xperm)
            except OutOfMemory:
                mem.kfree(page)
                self.shrink(a, oldsz)
                raise
        return newsz

    def shrink(self, oldsz, newsz):
        """Free user pages to bring the size from oldsz down to newsz."""
        if newsz >= oldsz:
            return oldsz
        if pg_round_up(newsz) < pg_round_up(oldsz):
            npages = (pg_round_up(oldsz) - pg_round_up(newsz)) // PGSIZE
            self.unmap(pg_round_up(newsz), npages, True)
        return newsz

    def _free_walk(self, table):
        mem = self.memory
        for i in range(PTES_PER_PAGE):
            pte_addr = table + PTE_SIZE * i
            pte = mem.read_word(pte_addr)
            if pte & PTE_V and not pte & (PTE_R | PTE_W | PTE_X):
                self._free_walk(pte_to_pa(pte))
                mem.write_word(pte_addr, 0)
            elif pte & PTE_V:
                raise VMPanic("freewalk: leaf")
        mem.kfree(table)

    def free_walk(self):
        """Free the page-table pages; every leaf must already be unmapped."""
        self._free_walk(self.root)

    def free(self, sz):
        """Free the user pages below sz, then the page table itself."""
        if sz > 0:
            self.unmap(0, pg_round_up(sz) // PGSIZE, True)
        self.free_walk()

    def copy_to(self, other, sz):
        """Copy the first sz bytes of mappings and their memory into other."""
        mem = self.memory
        for i in range(0, sz, PGSIZE):
            pte_addr = self.walk(i)
            if pte_addr is None:
                raise VMPanic("uvmcopy: pte should exist")
            pte = mem.read_word(pte_addr)
            if not pte & PTE_V:
                raise VMPanic("uvmcopy: page not present")
            try:
                page = mem.kalloc()
            except OutOfMemory:
                other.unmap(0, i // PGSIZE, True)
                raise
            mem.write(page, mem.read(pte_to_pa(pte), PGSIZE))
            try:
                other.map_pages(i, PGSIZE, page, pte_flags(pte))
            except OutOfMemory:
                mem.kfree(page)
                other.unmap(0, i // PGSIZE, True)
                raise

    def clear_user(self, va):
        """Make the page at va inaccessible to user mode."""
        pte_addr = self.walk(va)
        if pte_addr is None:
            raise VMPanic("uvmclear")
        self.memory.write_word(pte_addr, self.memory.read_word(pte_addr) & ~PTE_U)

    def _user_page(self, va0):
        pa0 = self.walkaddr(va0)
        if pa0 is None:
            raise ValueError(f"bad user address {va0:#x}")
        return pa0

    def copy_out(self, dstva, data):
        """Copy bytes into user memory at dstva."""
        view = memoryview(bytes(data))
        while view:
            va0 = pg_round_down(dstva)
            pa0 = self._user_page(va0)
            n = min(PGSIZE - (dstva - va0), len(view))
            self.memory.write(pa0 + (dstva - va0), view[:n])
            view = view[n:]
            dstva = va0 + PGSIZE

    def copy_in(self, srcva, length):
        """Copy length bytes out of user memory at srcva."""
        out = bytearray()
        while length > 0:
            va0 = pg_round_down(srcva)
            pa0 = self._user_page(va0)
            n = min(PGSIZE - (srcva - va0), length)
            out += self.memory.read(pa0 + (srcva - va0), n)
            length -= n
            srcva = va0 + PGSIZE
        return bytes(out)

    def copy_in_str(self, srcva, max_len):
        """Copy a NUL-terminated string from user memory, reading at most max_len bytes.

        Returns the bytes before the NUL; raises ValueError if none is found.
        """
        out = bytearray()
        while max_len > 0:
            va0 = pg_round_down(srcva)
            pa0 = self._user_page(va0)
            n = min(PGSIZE - (srcva - va0), max_len)
            chunk = self.memory.read(pa0 + (srcva - va0), n)
            end = chunk.find(0)
            if end >= 0:
                out += chunk[:end]
                return bytes(out)
            out += chunk
            max_len -= n
            srcva = va0 + PGSIZE
        raise ValueError("string not terminated within limit")