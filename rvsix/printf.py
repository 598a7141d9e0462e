"""Minimal formatted output understanding %d %l %x %p %s %c and %%."""

DIGITS = "0123456789ABCDEF"

_MASK32 = 0xFFFFFFFF
_MASK64 = (1 << 64) - 1


def _int32(value):
    value &= _MASK32
    return value - (1 << 32) if value & 0x80000000 else value


def _format_int(value, base, signed):
    xx = _int32(value)
    negative = signed and xx < 0
    x = -xx if negative else xx & _MASK32
    digits = []
    while True:
        digits.append(DIGITS[x % base])
        x //= base
        if x == 0:
            break
    if negative:
        digits.append("-")
    return "".join(reversed(digits))


def _format_ptr(value):
    return "0x" + format(value & _MASK64, "016X")


def _format_str(value):
    if value is None:
        return "(null)"
    if isinstance(value, (bytes, bytearray)):
        value = bytes(value).decode("latin-1")
    return str(value).split("\0", 1)[0]


def _format_char(value):
    if isinstance(value, str):
        return value[:1]
    return chr(value & 0xFF)


def format_string(fmt, *args):
    """Format args according to fmt and return the text.

    Integers are taken as 32-bit values, as the formatter converts every
    integer through a machine int; %l therefore shows the low 32 bits
    unsigned. Unknown conversions are echoed with their percent sign.
    """
    values = iter(args)

    def take(spec):
        try:
            return next(values)
        except StopIteration:
            raise TypeError(f"not enough arguments for %{spec}") from None

    out = []
    in_spec = False
    for c in fmt:
        if not in_spec:
            if c == "%":
                in_spec = True
            else:
                out.append(c)
            continue
        in_spec = False
        if c == "d":
            out.append(_format_int(take(c), 10, True))
        elif c == "l":
            out.append(_format_int(take(c), 10, False))
        elif c == "x":
            out.append(_format_int(take(c), 16, False))
        elif c == "p":
            out.append(_format_ptr(take(c)))
        elif c == "s":
            out.append(_format_str(take(c)))
        elif c == "c":
            out.append(_format_char(take(c)))
        elif c == "%":
            out.append("%")
        else:
            out.append("%" + c)
    return "".join(out)


def fprintf(stream, fmt, *args):
    """Write formatted text to a text stream."""
    stream.write(format_string(fmt, *args))