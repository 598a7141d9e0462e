"""Scheduler benchmark comparing turnaround and response times of mixed workloads.

Workloads run as cooperative tasks; one step of a task is one clock tick.
The round-robin policy switches task after every tick, FIFO runs tasks to
completion in creation order and LIFO in reverse creation order.
"""

import itertools
import math
import os
import sys
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional

from .coreutils import atoi

DATA_PATH = "data"
_CHUNK = bytes(100)


class Scheduler(Enum):
    RR = "RR"
    FIFO = "FIFO"
    LIFO = "LIFO"


@dataclass(frozen=True)
class ChildStats:
    """Timing of one finished child, in clock ticks."""

    pid: int
    ctime: int
    stime: int
    etime: int
    rtime: int

    def turnaround(self):
        return self.etime - self.ctime

    def response(self):
        return self.stime - self.ctime


@dataclass(frozen=True)
class RunSummary:
    """Totals and integer averages over the children of one run."""

    processes: int
    total_turnaround: int
    avg_turnaround: int
    total_response: int
    avg_response: int


def sieve_of_eratosthenes(n):
    """Return the primes up to and including n."""
    if n < 2:
        return []
    marks = bytearray([1]) * (n + 1)
    marks[0] = marks[1] = 0
    for i in range(2, math.isqrt(n) + 1):
        if marks[i]:
            marks[2 * i::i] = bytes(len(range(2 * i, n + 1, i)))
    return [i for i, m in enumerate(marks) if m]


def _io_steps(path, repeats, writes, sieve=False):
    for _ in range(repeats):
        with os.fdopen(os.open(path, os.O_RDWR | os.O_CREAT, 0o666), "r+b") as handle:
            for i in range(writes):
                handle.write(_CHUNK)
                handle.flush()
                if sieve:
                    sieve_of_eratosthenes((i + 1) * 1000)
                yield


def heavy_io(path):
    """Rewrite the start of path with 30 blocks of 100 bytes, 15 times over."""
    deque(_io_steps(path, 15, 30), maxlen=0)


def heavy_io_with_sieve(path):
    """Rewrite path with 20 blocks of 100 bytes, sieving after each, 5 times over."""
    deque(_io_steps(path, 5, 20, sieve=True), maxlen=0)


def _trunc_div(a, b):
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def summarize(stats):
    """Total and average turnaround and response times of a run."""
    stats = list(stats)
    if not stats:
        raise ValueError("no child statistics to summarize")
    n = len(stats)
    total_turnaround = sum(s.turnaround() for s in stats)
    total_response = sum(s.response() for s in stats)
    return RunSummary(
        n,
        total_turnaround,
        _trunc_div(total_turnaround, n),
        total_response,
        _trunc_div(total_response, n),
    )


def format_report(stats):
    """Per-child lines followed by the totals of a run."""
    stats = list(stats)
    summary = summarize(stats)
    lines = [
        f"Child {s.pid} exited, ctime: {s.ctime}, stime: {s.stime}, "
        f"etime: {s.etime}, rtime: {s.rtime}\n"
        for s in stats
    ]
    lines.append(
        f"Total turnaround time: {summary.total_turnaround}, avg: {summary.avg_turnaround}\n"
    )
    lines.append(
        f"Total response time: {summary.total_response}, avg: {summary.avg_response}\n"
    )
    lines.append("\n")
    return "".join(lines)


@dataclass
class _Task:
    pid: int
    steps: Iterator[None]
    ctime: int
    stime: Optional[int] = None
    rtime: int = 0


def _workload(i, processes, pid, path, out):
    if i < processes // 3:
        out.write(f"Starting sieve {pid}...\n")
        for _ in range(50):
            sieve_of_eratosthenes((i + 1) * 1000000)
            yield
        out.write(f"Ending sieve {pid}.\n")
    elif i < 2 * processes // 3:
        out.write(f"Starting IO {pid}...\n")
        yield from _io_steps(path, 15, 30)
        out.write(f"Ending IO {pid}.\n")
    else:
        out.write(f"Starting sieve+IO {pid}...\n")
        yield from _io_steps(path, 5, 20, sieve=True)
        out.write(f"Ending sieve+IO {pid}.\n")


def _run(processes, scheduler, path, out, pids) -> List[ChildStats]:
    clock = 0
    ready = deque()
    for i in range(processes):
        out.write(f"Forking #{i}...\n")
        pid = next(pids)
        ready.append(_Task(pid, _workload(i, processes, pid, path, out), ctime=clock))
    finished = []
    while ready:
        task = ready.pop() if scheduler is Scheduler.LIFO else ready.popleft()
        if task.stime is None:
            task.stime = clock
        while True:
            clock += 1
            task.rtime += 1
            try:
                next(task.steps)
            except StopIteration:
                finished.append(
                    ChildStats(task.pid, task.ctime, task.stime, clock, task.rtime)
                )
                break
            if scheduler is Scheduler.RR:
                ready.append(task)
                break
    return finished


def main(argv=None):
    """Run the workload mix under each scheduler and report timings."""
    args = sys.argv[1:] if argv is None else list(argv)
    out = sys.stdout
    if len(args) != 1:
        out.write("Usage: schedtest <num of processes>\n")
        return 0
    processes = atoi(args[0])
    out.write(f"Running {processes} processes\n")
    if processes <= 0:
        sys.stderr.write("schedtest: need at least one process\n")
        return 1
    pids = itertools.count(1)
    for scheduler in (Scheduler.RR, Scheduler.FIFO, Scheduler.LIFO):
        out.write(f"With scheduler {scheduler.value}\n")
        out.write(format_report(_run(processes, scheduler, DATA_PATH, out, pids)))
    return 0