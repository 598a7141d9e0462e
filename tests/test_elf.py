import pytest

from rvsix.elf import (
    ELF_MAGIC,
    ELF_PROG_LOAD,
    ElfFormatError,
    ElfHeader,
    ProgFlag,
    ProgramHeader,
    program_headers,
)


def test_magic_bytes():
    assert ELF_MAGIC.to_bytes(4, "little") == b"\x7fELF"
    assert ElfHeader().pack()[:4] == b"\x7fELF"


def test_header_size():
    assert len(ElfHeader().pack()) == ElfHeader.SIZE == 64


def test_header_round_trip():
    header = ElfHeader(elf=b"\x02\x01\x01" + bytes(9), type=2, machine=0xF3,
                       version=1, entry=0x1000, phoff=ElfHeader.SIZE, phnum=3)
    assert ElfHeader.unpack(header.pack()) == header


def test_bad_magic():
    data = b"\x00ELF" + ElfHeader().pack()[4:]
    with pytest.raises(ElfFormatError):
        ElfHeader.unpack(data)


def test_truncated_header():
    with pytest.raises(ElfFormatError):
        ElfHeader.unpack(ElfHeader().pack()[:-1])


def test_program_header_round_trip_at_offset():
    ph = ProgramHeader(type=ELF_PROG_LOAD, flags=ProgFlag.READ | ProgFlag.EXEC,
                       off=0x1000, vaddr=0, filesz=0x200, memsz=0x300, align=0x1000)
    data = b"pad" + ph.pack()
    assert ProgramHeader.unpack(data, 3) == ph
    assert ProgramHeader.unpack(data, 3).loadable


def test_program_header_truncated():
    with pytest.raises(ElfFormatError):
        ProgramHeader.unpack(ProgramHeader().pack(), 1)


def test_program_headers_from_image():
    first = ProgramHeader(type=ELF_PROG_LOAD, vaddr=0, memsz=0x10)
    second = ProgramHeader(type=ELF_PROG_LOAD + 1, vaddr=0x2000)
    header = ElfHeader(phoff=ElfHeader.SIZE, phnum=2)
    image = header.pack() + first.pack() + second.pack()
    assert program_headers(image) == [first, second]
    assert [ph.loadable for ph in program_headers(image)] == [True, False]


def test_program_headers_none():
    assert program_headers(ElfHeader().pack()) == []