"""
Utility functions for prosefmt.
"""

import os
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, List, Sequence, TypeVar


T = TypeVar("T")
R = TypeVar("R")


def normalize_path(path: str) -> str:
    """Resolve a path to a canonical absolute form, following symlinks."""
    return os.path.normpath(os.path.realpath(path))


def map_in_order(fn: Callable[[T], R], items: Sequence[T], max_workers: int = 1) -> List[R]:
    """
    Apply ``fn`` to every item, possibly in parallel, keeping input order.

    The first exception raised by any call propagates. Calls that have
    not started yet are cancelled; calls already running are allowed to
    finish before this function returns.
    """
    if max_workers <= 1 or len(items) <= 1:
        return [fn(item) for item in items]

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures: List[Future] = [executor.submit(fn, item) for item in items]
        try:
            return [future.result() for future in futures]
        except BaseException:
            for future in futures:
                future.cancel()
            raise
