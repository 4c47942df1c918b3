"""
Timing helpers used to report processing times.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """Holds the elapsed time of a timed block."""

    def __init__(self):
        self.start = time.perf_counter()
        self.elapsed_ms = 0.0


@contextmanager
def timer() -> Iterator[Timer]:
    """
    Measure the wall time of a block.

    Example:
        >>> with timer() as t:
        ...     do_work()
        >>> t.elapsed_ms
    """
    t = Timer()
    try:
        yield t
    finally:
        t.elapsed_ms = (time.perf_counter() - t.start) * 1000
