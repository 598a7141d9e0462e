"""Commands that kill processes and link, create and remove files."""

import os
import signal
import sys

from .coreutils import atoi

_KILL_SIGNAL = getattr(signal, "SIGKILL", signal.SIGTERM)


def _args(argv):
    return sys.argv[1:] if argv is None else list(argv)


def kill_main(argv=None):
    """Kill each process whose id is given; unknown ids are ignored."""
    args = _args(argv)
    if not args:
        sys.stderr.write("usage: kill pid...\n")
        return 1
    for arg in args:
        pid = atoi(arg)
        if pid <= 0:
            continue
        try:
            os.kill(pid, _KILL_SIGNAL)
        except OSError:
            pass
    return 0


def ln_main(argv=None):
    """Create a hard link new pointing to old."""
    args = _args(argv)
    if len(args) != 2:
        sys.stderr.write("Usage: ln old new\n")
        return 1
    old, new = args
    try:
        os.link(old, new)
    except OSError:
        sys.stderr.write(f"link {old} {new}: failed\n")
    return 0


def mkdir_main(argv=None):
    """Create each named directory, stopping at the first failure."""
    args = _args(argv)
    if not args:
        sys.stderr.write("Usage: mkdir files...\n")
        return 1
    for path in args:
        try:
            os.mkdir(path)
        except OSError:
            sys.stderr.write(f"mkdir: {path} failed to create\n")
            break
    return 0


def _unlink(path):
    if os.path.isdir(path) and not os.path.islink(path):
        os.rmdir(path)
    else:
        os.unlink(path)


def rm_main(argv=None):
    """Remove each named file or empty directory, stopping at the first failure."""
    args = _args(argv)
    if not args:
        sys.stderr.write("Usage: rm files...\n")
        return 1
    for path in args:
        try:
            _unlink(path)
        except OSError:
            sys.stderr.write(f"rm: {path} failed to delete\n")
            break
    return 0