"""Small text utilities: cat, echo, wc, and string helpers they share."""

import sys
from dataclasses import dataclass

BUFSIZE = 512

# NUL counts as a separator too, as the word scanner treats it so.
_WORD_SEPARATORS = frozenset(b" \r\t\n\v\0")


@dataclass(frozen=True)
class WordCount:
    """Line, word and byte counts of a stream."""

    lines: int
    words: int
    chars: int


def atoi(s):
    """Value of the leading decimal digits of s; 0 if there are none."""
    n = 0
    for ch in s:
        if not "0" <= ch <= "9":
            break
        n = n * 10 + ord(ch) - ord("0")
    return n


def _cstring(value):
    data = value.encode("utf-8") if isinstance(value, str) else bytes(value)
    return data.split(b"\0", 1)[0] + b"\0"


def strcmp(p, q):
    """Compare two strings byte by byte; return the difference at the first mismatch."""
    for x, y in zip(_cstring(p), _cstring(q)):
        if x == 0 or x != y:
            return x - y
    return 0


def gets(stream, max_len):
    """Read a line from a text stream, keeping its terminator, at most max_len - 1 characters."""
    chars = []
    while len(chars) + 1 < max_len:
        c = stream.read(1)
        if not c:
            break
        chars.append(c)
        if c in ("\n", "\r"):
            break
    return "".join(chars)


def cat(stream, out):
    """Copy stream to out."""
    while chunk := stream.read(BUFSIZE):
        out.write(chunk)


def echo(args):
    """Return the arguments joined by spaces and ended with a newline."""
    return " ".join(args) + "\n" if args else ""


def wc(stream):
    """Count lines, words and bytes of a binary stream."""
    lines = words = chars = 0
    in_word = False
    while chunk := stream.read(BUFSIZE):
        chars += len(chunk)
        lines += chunk.count(b"\n")
        for byte in chunk:
            if byte in _WORD_SEPARATORS:
                in_word = False
            elif not in_word:
                words += 1
                in_word = True
    return WordCount(lines, words, chars)


def _args(argv):
    return sys.argv[1:] if argv is None else list(argv)


def cat_main(argv=None):
    """Concatenate the named files, or standard input, to standard output."""
    args = _args(argv)
    sys.stdout.flush()
    out = sys.stdout.buffer
    if not args:
        cat(sys.stdin.buffer, out)
        out.flush()
        return 0
    for path in args:
        try:
            handle = open(path, "rb")
        except OSError:
            out.flush()
            sys.stderr.write(f"cat: cannot open {path}\n")
            return 1
        with handle:
            cat(handle, out)
    out.flush()
    return 0


def echo_main(argv=None):
    """Print the arguments."""
    sys.stdout.write(echo(_args(argv)))
    return 0


def wc_main(argv=None):
    """Print counts for each named file, or for standard input."""
    args = _args(argv)
    if not args:
        count = wc(sys.stdin.buffer)
        sys.stdout.write(f"{count.lines} {count.words} {count.chars} \n")
        return 0
    for path in args:
        try:
            handle = open(path, "rb")
        except OSError:
            sys.stdout.write(f"wc: cannot open {path}\n")
            return 1
        with handle:
            count = wc(handle)
        sys.stdout.write(f"{count.lines} {count.words} {count.chars} {path}\n")
    return 0