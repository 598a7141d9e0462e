"""Directory listing showing name, type, inode number and size."""

import os
import stat
import sys
from enum import IntEnum

from .printf import format_string

DIRSIZ = 14
BUFSIZE = 512


class FileType(IntEnum):
    DIR = 1
    FILE = 2
    DEVICE = 3


def _file_type(st):
    if stat.S_ISDIR(st.st_mode):
        return FileType.DIR
    if stat.S_ISREG(st.st_mode):
        return FileType.FILE
    return FileType.DEVICE


def fmtname(path):
    """Last component of path, padded with blanks to DIRSIZ characters."""
    name = path.rsplit("/", 1)[-1]
    if len(name) >= DIRSIZ:
        return name
    return name.ljust(DIRSIZ)


def _line(path, st, size_spec):
    return format_string(
        f"%s %d %d {size_spec}\n",
        fmtname(path),
        int(_file_type(st)),
        st.st_ino,
        st.st_size,
    )


def ls(path, out):
    """Write a listing of path, a file or a directory, to out."""
    try:
        st = os.stat(path)
    except OSError:
        sys.stderr.write(f"ls: cannot open {path}\n")
        return
    if _file_type(st) is not FileType.DIR:
        out.write(_line(path, st, "%l"))
        return
    if len(path) + 1 + DIRSIZ + 1 > BUFSIZE:
        out.write("ls: path too long\n")
        return
    try:
        names = sorted(os.listdir(path))
    except OSError:
        sys.stderr.write(f"ls: cannot open {path}\n")
        return
    for name in [".", "..", *names]:
        full = f"{path}/{name}"
        try:
            entry = os.stat(full)
        except OSError:
            out.write(f"ls: cannot stat {full}\n")
            continue
        out.write(_line(full, entry, "%d"))


def main(argv=None):
    """List each named path, or the current directory."""
    args = sys.argv[1:] if argv is None else list(argv)
    for path in args or ["."]:
        ls(path, sys.stdout)
    return 0