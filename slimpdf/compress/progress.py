"""Progress sinks receiving one notification per rebuilt page."""

from __future__ import annotations

import asyncio
from typing import Callable, Protocol

from .utils import get_logger

_LOGGER = get_logger("slimpdf.compress")


class ProgressSink(Protocol):
    def page_completed(self, completed: int, total: int) -> None:
        ...


class NullProgress:
    def page_completed(self, completed: int, total: int) -> None:
        return None


class CallbackProgress:
    """Adapts a plain ``callback(completed, total)`` function."""

    def __init__(self, callback: Callable[[int, int], object]) -> None:
        self._callback = callback

    def page_completed(self, completed: int, total: int) -> None:
        self._callback(completed, total)


class LoggingProgress:
    def __init__(self, label: str = "document") -> None:
        self.label = label

    def page_completed(self, completed: int, total: int) -> None:
        _LOGGER.debug("Processing page %d/%d of %s", completed, total, self.label)


class CountingProgress:
    """Wraps another sink and counts the notifications passed to it."""

    def __init__(self, sink: ProgressSink) -> None:
        self._sink = sink
        self.completed = 0

    def page_completed(self, completed: int, total: int) -> None:
        self.completed = completed
        self._sink.page_completed(completed, total)


class QueueProgress:
    """Pushes ``(completed, total)`` tuples onto an :class:`asyncio.Queue`.

    The queue is unbounded so the pipeline never waits on a slow consumer.
    """

    def __init__(self, queue: asyncio.Queue[tuple[int, int]] | None = None) -> None:
        self.queue: asyncio.Queue[tuple[int, int]] = queue if queue is not None else asyncio.Queue()

    def page_completed(self, completed: int, total: int) -> None:
        self.queue.put_nowait((completed, total))

    def drain(self) -> list[tuple[int, int]]:
        events: list[tuple[int, int]] = []
        while not self.queue.empty():
            events.append(self.queue.get_nowait())
        return events


def as_progress_sink(progress: ProgressSink | Callable[[int, int], object] | None) -> ProgressSink:
    """Normalise *progress* into a :class:`ProgressSink`."""

    if progress is None:
        return NullProgress()
    if hasattr(progress, "page_completed"):
        return progress  # type: ignore[return-value]
    if callable(progress):
        return CallbackProgress(progress)
    raise TypeError(f"Unsupported progress sink: {progress!r}")


__all__ = [
    "CallbackProgress",
    "CountingProgress",
    "LoggingProgress",
    "NullProgress",
    "ProgressSink",
    "QueueProgress",
    "as_progress_sink",
]
