"""Line filter with a small regular-expression matcher supporting ^ . * $."""

import sys

BUFSIZE = 1024


def match(regex, text):
    """Return True if regex matches anywhere in text."""
    if regex.startswith("^"):
        return match_here(regex[1:], text)
    # The empty tail must be tried too, so "$" and "x*" can match.
    return any(match_here(regex, text[i:]) for i in range(len(text) + 1))


def match_here(regex, text):
    """Return True if regex matches at the beginning of text."""
    if not regex:
        return True
    if len(regex) > 1 and regex[1] == "*":
        return match_star(regex[0], regex[2:], text)
    if regex == "$":
        return text == ""
    if text and regex[0] in (".", text[0]):
        return match_here(regex[1:], text[1:])
    return False


def match_star(c, regex, text):
    """Return True if c* followed by regex matches at the beginning of text."""
    i = 0
    while True:
        if match_here(regex, text[i:]):
            return True
        if i < len(text) and (text[i] == c or c == "."):
            i += 1
        else:
            return False


def grep(pattern, stream, out):
    """Write to out every newline-terminated line of stream that matches pattern.

    Lines are read through a buffer of BUFSIZE characters; a line that does
    not fit ends the search, and a final line without a newline is ignored.
    """
    pending = ""
    while True:
        chunk = stream.read(BUFSIZE - 1 - len(pending))
        if not chunk:
            break
        pending += chunk
        *lines, pending = pending.split("\n")
        for line in lines:
            if match(pattern, line):
                out.write(line + "\n")


def main(argv=None):
    """Run grep over the named files, or standard input; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        sys.stderr.write("usage: grep pattern [file ...]\n")
        return 1
    pattern, files = args[0], args[1:]
    if not files:
        grep(pattern, sys.stdin, sys.stdout)
        return 0
    for path in files:
        try:
            handle = open(path, encoding="utf-8", errors="surrogateescape", newline="")
        except OSError:
            sys.stdout.write(f"grep: cannot open {path}\n")
            return 1
        with handle:
            grep(pattern, handle, sys.stdout)
    return 0