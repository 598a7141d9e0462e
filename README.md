# rvsix

Pieces of a small RISC-V teaching operating system, usable from Python:

- **Sv39 paging** – address arithmetic and control-register bits
  (`rvsix.riscv`), the physical memory map of the qemu `virt` machine
  (`rvsix.memlayout`), and a working three-level page table over a
  simulated pool of physical pages (`rvsix.vm`).
- **ELF headers** – read and write 64-bit file and program headers
  (`rvsix.elf`).
- **User-level tools** – the `^ . * $` matcher and `grep`
  (`rvsix.grep`), the shell command parser (`rvsix.shell`), a minimal
  `printf` (`rvsix.printf`), `cat`, `echo` and `wc`
  (`rvsix.coreutils`), `ls` (`rvsix.ls`), `kill`, `ln`, `mkdir` and `rm`
  (`rvsix.fileutils`), a first-fit heap (`rvsix.umalloc`), the
  Park–Miller random generator (`rvsix.prng`) and a scheduler benchmark
  (`rvsix.schedtest`).

Python 3.10 or later; no runtime dependencies.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Paging helpers

```python
from rvsix.riscv import pg_round_up, pg_round_down, px, pa_to_pte, pte_to_pa

pg_round_up(4097)                 # 8192
pg_round_down(8191)               # 4096
px(0, 0x1000)                     # 1
pte_to_pa(pa_to_pte(0x80001000))  # 0x80001000
```

`rvsix.memlayout` holds the device addresses (`UART0`, `VIRTIO0`,
`CLINT`, `PLIC`, `KERNBASE`, `PHYSTOP`, `TRAMPOLINE`, `TRAPFRAME`) and
functions such as `kstack(p)` for the kernel stack of process slot `p`
and `plic_sclaim(hart)` for a hart's supervisor claim register.

## Page tables

`rvsix.vm.PhysicalMemory(npages=256, base=KERNBASE)` is a page allocator
over a byte array: `kalloc()` returns the address of a zeroed page,
`kfree(pa)` returns it, `read`/`write` and `read_word`/`write_word`
access the bytes, and `free_pages()` counts what is left.

`rvsix.vm.PageTable` builds Sv39 tables inside that memory:

- `PageTable.create(memory)` makes an empty table;
- `walk`, `walkaddr`, `map_pages` and `unmap` work on single mappings;
- `load_first`, `grow`, `shrink`, `free`, `free_walk`, `copy_to` and
  `clear_user` manage a process image;
- `copy_out`, `copy_in` and `copy_in_str` move bytes to and from user
  virtual addresses, raising `ValueError` on an unmapped or non-user
  page, or when no NUL is found within the limit.

Broken invariants (remapping a page, unmapping a missing one, freeing a
table that still has leaves) raise `VMPanic`; running out of pages
raises `OutOfMemory`, after `grow` and `copy_to` have released what they
had allocated.

```python
from rvsix.riscv import PTE_R, PTE_W
from rvsix.vm import PageTable, PhysicalMemory

mem = PhysicalMemory(64)
pt = PageTable.create(mem)
pt.grow(0, 8192, PTE_W)
pt.copy_out(100, b"hello\0")
pt.copy_in_str(100, 64)  # b"hello"
pt.free(8192)
```

## ELF

```python
from rvsix.elf import ElfHeader, program_headers

with open("a.out", "rb") as f:
    data = f.read()
header = ElfHeader.unpack(data)
for ph in program_headers(data):
    print(ph.vaddr, ph.memsz, ph.loadable)
```

Data that is too short or lacks the ELF magic raises `ElfFormatError`.
`pack()` turns either header back into bytes.

## Shell parsing

```python
from rvsix.shell import parse_cmd

cmd = parse_cmd("cat < in | grep foo > out; echo done &")
```

The result is a tree of `ExecCmd`, `RedirCmd`, `PipeCmd`, `ListCmd` and
`BackCmd`. Redirections carry an `OpenMode` and the descriptor they
replace (`<` is 0; `>` and `>>` are 1). Malformed lines, and commands
with ten or more words, raise `ShellSyntaxError`.

## Matching, formatting and allocation

```python
from rvsix.grep import match
from rvsix.printf import format_string
from rvsix.prng import ParkMiller
from rvsix.umalloc import Heap

match("^ab*c", "abbbc")          # True
format_string("%d %x", -5, 255)  # "-5 FF"

rng = ParkMiller(seed=1)
rng.next()

heap = Heap(start=4096, limit=1 << 20)
addr = heap.malloc(100)
heap.free(addr)
```

`format_string` understands `%d %l %x %p %s %c %%`, treats integers as
32-bit values and echoes unknown conversions. `Heap.malloc` raises
`MemoryError` when the break cannot grow past `limit`; `Heap.free`
raises `ValueError` for an address it did not hand out.

## Commands

Installing the package puts these commands on the path:

| Command           | Does                                                      |
|-------------------|-----------------------------------------------------------|
| `rvsix-grep`      | print newline-terminated lines matching a `^ . * $` pattern |
| `rvsix-cat`       | copy files (or standard input) to standard output         |
| `rvsix-echo`      | print its arguments                                       |
| `rvsix-wc`        | count lines, words and bytes                              |
| `rvsix-ls`        | list name, type (1 dir, 2 file, 3 other), inode and size  |
| `rvsix-kill`      | send a kill signal to the given process ids               |
| `rvsix-ln`        | make a hard link: `rvsix-ln old new`                      |
| `rvsix-mkdir`     | create directories, stopping at the first failure         |
| `rvsix-rm`        | remove files or empty directories                         |
| `rvsix-schedtest` | run the scheduler workload and report timings             |

For example:

```
rvsix-grep '^def ' rvsix/vm.py
rvsix-echo hello world | rvsix-wc
rvsix-schedtest 3
```

`rvsix-schedtest N` runs N workloads (sieve, file I/O, and both) as
cooperative tasks under round-robin, FIFO and LIFO policies, counting
one step as one clock tick. It writes its I/O to a file named `data` in
the current directory.

## What it does not do

There is no kernel to boot and no processes of its own: the page tables
live in a simulated memory pool and are never loaded into hardware, and
the scheduler benchmark simulates its policies rather than changing how
the host schedules. `rvsix.shell` parses command lines but does not run
them, and there is no tool for building a file-system image.