"""Bounded worker pool for independent upload tasks.

Runs a sequence of zero-argument callables with at most ``concurrency``
in flight and returns their results in submission order. Every task is
allowed to settle; one failure never cancels the others.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Any, Generic, Optional, TypeVar

from ghupload.core.exceptions import BatchOperationError
from ghupload.core.validation import validate_concurrency

logger = logging.getLogger(__name__)

T = TypeVar("T")

ErrorHandler = Callable[[int, BaseException], Any]
CompletionCallback = Callable[[int, Any], None]


class BoundedScheduler(Generic[T]):
    """Thread-pool scheduler with a fixed concurrency cap."""

    def __init__(self, concurrency: int, *, thread_name_prefix: str = "ghupload") -> None:
        """Initialize the scheduler.

        Args:
            concurrency: Maximum tasks running at once.
            thread_name_prefix: Prefix for worker thread names.

        Raises:
            InvalidConcurrencyError: If concurrency is not an integer >= 1.
        """
        self.concurrency = validate_concurrency(concurrency)
        self.thread_name_prefix = thread_name_prefix
        self._lock = threading.Lock()
        self._in_flight = 0
        self.peak_in_flight = 0

    @property
    def in_flight(self) -> int:
        with self._lock:
            return self._in_flight

    def _wrap(self, task: Callable[[], T]) -> Callable[[], T]:
        def run() -> T:
            with self._lock:
                self._in_flight += 1
                self.peak_in_flight = max(self.peak_in_flight, self._in_flight)
            try:
                return task()
            finally:
                with self._lock:
                    self._in_flight -= 1

        return run

    def run(
        self,
        tasks: Sequence[Callable[[], T]],
        *,
        on_error: Optional[ErrorHandler] = None,
        on_complete: Optional[CompletionCallback] = None,
    ) -> list[T]:
        """Run all tasks and wait for every one to settle.

        Args:
            tasks: Zero-argument callables.
            on_error: Maps ``(index, exception)`` to a result for a task
                that raised. Without it, failures are collected and raised
                together once all tasks have settled.
            on_complete: Called with ``(index, result)`` as each task settles.
                Exceptions it raises are logged and do not affect results.

        Returns:
            Results where ``results[i]`` belongs to ``tasks[i]``.

        Raises:
            BatchOperationError: If tasks raised and no ``on_error`` was given.
        """
        if not tasks:
            return []

        results: list[Any] = [None] * len(tasks)
        errors: list[str] = []
        workers = min(self.concurrency, len(tasks))

        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix=self.thread_name_prefix
        ) as executor:
            futures: dict[Future[T], int] = {
                executor.submit(self._wrap(task)): index for index, task in enumerate(tasks)
            }

            for future in as_completed(futures):
                index = futures[future]
                try:
                    result = future.result()
                except Exception as e:
                    logger.debug("Task %d raised %s", index, e, exc_info=True)
                    if on_error is None:
                        errors.append(f"task {index}: {e}")
                        continue
                    result = on_error(index, e)

                results[index] = result
                if on_complete:
                    try:
                        on_complete(index, result)
                    except Exception as e:
                        logger.warning("Completion callback failed for task %d: %s", index, e)

        if errors:
            raise BatchOperationError(
                "run",
                succeeded=len(tasks) - len(errors),
                failed=len(errors),
                errors=errors,
            )
        return results


def run_bounded(
    tasks: Sequence[Callable[[], T]],
    concurrency: int,
    *,
    on_error: Optional[ErrorHandler] = None,
    on_complete: Optional[CompletionCallback] = None,
) -> list[T]:
    """Run tasks with at most ``concurrency`` in flight.

    See ``BoundedScheduler.run``.
    """
    return BoundedScheduler(concurrency).run(
        tasks, on_error=on_error, on_complete=on_complete
    )
