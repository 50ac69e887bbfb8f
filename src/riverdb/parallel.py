"""
Fan-out/fan-in helpers for independent sub-queries within one request.

Every call runs to completion before results are returned. If any call
raises, the first failure in call order is re-raised and no partial
result is returned.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, TypeVar

from riverdb.config import config

T = TypeVar("T")


def gather(*calls: Callable[[], T]) -> list[T]:
    """Run zero-argument callables concurrently, returning results in call order."""
    if not calls:
        return []
    if len(calls) == 1:
        return [calls[0]()]

    workers = max(1, min(len(calls), config.fanout_workers))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(call) for call in calls]
    # Leaving the executor block waits for every future
    return [future.result() for future in futures]


def gather_map(calls: dict[str, Callable[[], Any]]) -> dict[str, Any]:
    """Keyed variant of gather()."""
    keys = list(calls)
    results = gather(*(calls[key] for key in keys))
    return dict(zip(keys, results))
