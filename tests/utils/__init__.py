"""Common utilities for tests."""

import threading
import typing as t
from concurrent.futures import ThreadPoolExecutor

T = t.TypeVar("T")


def run_concurrently(func: t.Callable[[], T], workers: int) -> list[T]:
    """Call ``func`` from ``workers`` threads released together by a barrier; return all results."""
    barrier = threading.Barrier(workers)

    def task():
        barrier.wait(timeout=10)
        return func()

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(task) for _ in range(workers)]
        return [future.result(timeout=30) for future in futures]
