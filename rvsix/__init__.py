"""Sv39 paging over simulated memory, ELF headers, shell parsing and small Unix-style tools."""

__version__ = "0.1.0"

__all__ = [
    "coreutils",
    "elf",
    "fileutils",
    "grep",
    "ls",
    "memlayout",
    "printf",
    "prng",
    "riscv",
    "schedtest",
    "shell",
    "umalloc",
    "vm",
]