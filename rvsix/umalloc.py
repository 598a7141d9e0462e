"""First-fit heap allocator with a circular free list over a growable break."""

HEADER_SIZE = 16
MIN_MORECORE_UNITS = 4096

# The sentinel block of the free list lives below every heap address.
_BASE = 0


class Heap:
    """A heap that hands out addresses from a simulated program break.

    Every block carries a one-unit header; a unit is HEADER_SIZE bytes.
    Free blocks form a circular list in address order, anchored at a
    zero-sized sentinel, and adjacent free blocks are merged.
    """

    def __init__(self, start=4096, limit=None):
        if start <= _BASE or start % HEADER_SIZE:
            raise ValueError("heap start must be a positive multiple of the header size")
        self.start = start
        self.brk = start
        self.limit = limit
        self._next = {}
        self._size = {}
        self._freep = None
        self._allocated = set()

    def _sbrk(self, nbytes):
        if self.limit is not None and self.brk + nbytes - self.start > self.limit:
            return None
        old = self.brk
        self.brk += nbytes
        return old

    def _end(self, p):
        return p + self._size[p] * HEADER_SIZE

    def _insert(self, bp):
        """Put the block headed at bp on the free list, merging neighbours."""
        nxt = self._next
        size = self._size
        p = self._freep
        while not (p < bp < nxt[p]):
            if p >= nxt[p] and (bp > p or bp < nxt[p]):
                break
            p = nxt[p]
        succ = nxt[p]
        if self._end(bp) == succ:
            size[bp] += size.pop(succ)
            nxt[bp] = nxt.pop(succ)
        else:
            nxt[bp] = succ
        if self._end(p) == bp:
            size[p] += size.pop(bp)
            nxt[p] = nxt.pop(bp)
        else:
            nxt[p] = bp
        self._freep = p

    def _morecore(self, nunits):
        nunits = max(nunits, MIN_MORECORE_UNITS)
        hp = self._sbrk(nunits * HEADER_SIZE)
        if hp is None:
            return None
        self._size[hp] = nunits
        self._insert(hp)
        return self._freep

    def malloc(self, nbytes):
        """Allocate nbytes and return the address of the usable memory.

        Raises MemoryError when the break cannot grow far enough.
        """
        if nbytes < 0:
            raise ValueError("cannot allocate a negative number of bytes")
        nunits = (nbytes + HEADER_SIZE - 1) // HEADER_SIZE + 1
        nxt = self._next
        size = self._size
        if self._freep is None:
            nxt[_BASE] = _BASE
            size[_BASE] = 0
            self._freep = _BASE
        prevp = self._freep
        p = nxt[prevp]
        while True:
            if size[p] >= nunits:
                if size[p] == nunits:
                    nxt[prevp] = nxt.pop(p)
                else:
                    size[p] -= nunits
                    p = self._end(p)
                    size[p] = nunits
                self._freep = prevp
                self._allocated.add(p)
                return p + HEADER_SIZE
            if p == self._freep:
                p = self._morecore(nunits)
                if p is None:
                    raise MemoryError(f"cannot allocate {nbytes} bytes")
            prevp, p = p, nxt[p]

    def free(self, addr):
        """Return memory obtained from malloc to the heap."""
        bp = addr - HEADER_SIZE
        if bp not in self._allocated:
            raise ValueError(f"address {addr:#x} was not allocated")
        self._allocated.remove(bp)
        self._insert(bp)

    def free_units(self):
        """Total size, in header units, of the blocks on the free list."""
        if self._freep is None:
            return 0
        total = 0
        p = self._next[_BASE]
        while p != _BASE:
            total += self._size[p]
            p = self._next[p]
        return total