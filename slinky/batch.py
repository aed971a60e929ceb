"""Run a callable many times in batches that grow while they succeed."""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor

SLOW_START_INITIAL_BATCH_SIZE = 1

_MAX_WORKERS = 32


class SlowStartError(Exception):
    """A batch failed; ``successes`` counts the calls that succeeded."""

    def __init__(self, successes: int, error: BaseException) -> None:
        super().__init__(str(error))
        self.successes = successes
        self.error = error


def slow_start_batch(count: int, initial_batch_size: int, fn: Callable[[int], object]) -> int:
    """Call ``fn(index)`` ``count`` times, doubling the batch size after each success.

    Calls within a batch run concurrently. If any call in a batch raises, the
    remaining batches are skipped and SlowStartError is raised, chained to the
    first failure. Returns the number of successful calls.
    """
    remaining = count
    successes = 0
    index = 0
    batch_size = min(remaining, initial_batch_size)
    while batch_size > 0:
        with ThreadPoolExecutor(max_workers=min(batch_size, _MAX_WORKERS)) as pool:
            futures = [pool.submit(fn, i) for i in range(index, index + batch_size)]
            errors = [exc for exc in (f.exception() for f in futures) if exc is not None]
        index += batch_size
        successes += batch_size - len(errors)
        if errors:
            raise SlowStartError(successes, errors[0]) from errors[0]
        remaining -= batch_size
        batch_size = min(2 * batch_size, remaining)
    return successes