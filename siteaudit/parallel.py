"""Fixed worker pool fan-out over pages."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, Optional, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")


def map_pages(
    func: Callable[[T], R], items: Sequence[T], *, workers: Optional[int] = None
) -> list[R]:
    """Run ``func`` once per item on a thread pool; results keep input order.

    Each task returns its own result object, so callers merge partial results
    after the pool has joined without any locking.
    """

    if not items:
        return []
    if workers == 1 or len(items) == 1:
        return [func(item) for item in items]
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(func, items))


def flat_map_pages(
    func: Callable[[T], Iterable[R]], items: Sequence[T], *, workers: Optional[int] = None
) -> list[R]:
    """Like :func:`map_pages` but concatenates the per-item iterables."""

    merged: list[R] = []
    for partial in map_pages(lambda item: list(func(item)), items, workers=workers):
        merged.extend(partial)
    return merged


__all__ = ["flat_map_pages", "map_pages"]
