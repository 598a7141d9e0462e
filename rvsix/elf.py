"""Reading and writing ELF64 file and program headers."""

import struct
from dataclasses import astuple, dataclass
from enum import IntFlag
from typing import ClassVar, List

ELF_MAGIC = 0x464C457F  # "\x7FELF" read as a little-endian word

ELF_PROG_LOAD = 1


class ProgFlag(IntFlag):
    EXEC = 1
    WRITE = 2
    READ = 4


class ElfFormatError(ValueError):
    """Raised when bytes do not hold a well-formed ELF header."""


_ELF_STRUCT = struct.Struct("<I12sHHIQQQIHHHHHH")
_PROG_STRUCT = struct.Struct("<IIQQQQQQ")


@dataclass
class ElfHeader:
    """The ELF file header."""

    magic: int = ELF_MAGIC
    elf: bytes = bytes(12)
    type: int = 0
    machine: int = 0
    version: int = 0
    entry: int = 0
    phoff: int = 0
    shoff: int = 0
    flags: int = 0
    ehsize: int = 0
    phentsize: int = 0
    phnum: int = 0
    shentsize: int = 0
    shnum: int = 0
    shstrndx: int = 0

    SIZE: ClassVar[int] = _ELF_STRUCT.size

    @classmethod
    def unpack(cls, data):
        if len(data) < cls.SIZE:
            raise ElfFormatError("truncated ELF header")
        header = cls(*_ELF_STRUCT.unpack_from(data, 0))
        if header.magic != ELF_MAGIC:
            raise ElfFormatError(f"bad ELF magic {header.magic:#x}")
        return header

    def pack(self):
        return _ELF_STRUCT.pack(*astuple(self))


@dataclass
class ProgramHeader:
    """One program section header."""

    type: int = 0
    flags: int = 0
    off: int = 0
    vaddr: int = 0
    paddr: int = 0
    filesz: int = 0
    memsz: int = 0
    align: int = 0

    SIZE: ClassVar[int] = _PROG_STRUCT.size

    @classmethod
    def unpack(cls, data, offset=0):
        if offset < 0 or offset + cls.SIZE > len(data):
            raise ElfFormatError(f"truncated program header at offset {offset}")
        return cls(*_PROG_STRUCT.unpack_from(data, offset))

    def pack(self):
        return _PROG_STRUCT.pack(*astuple(self))

    @property
    def loadable(self):
        return self.type == ELF_PROG_LOAD


def program_headers(data) -> List[ProgramHeader]:
    """Return the program headers listed in an ELF image."""
    header = ElfHeader.unpack(data)
    return [
        ProgramHeader.unpack(data, header.phoff + i * ProgramHeader.SIZE)
        for i in range(header.phnum)
    ]