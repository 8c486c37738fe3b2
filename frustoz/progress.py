"""Progress reporting for render tasks and splitting of work between them."""

from __future__ import annotations

import abc
from typing import Iterable, List, NamedTuple


class Progress(NamedTuple):
    """A number of iterations completed by one task."""

    iterations: int
    thread: int


class ProgressReporter(abc.ABC):
    """Receives progress from render tasks; built from the per-task iteration counts."""

    def __init__(self, iterations_per_thread: Iterable[int]) -> None:
        self.iterations_per_thread: List[int] = list(iterations_per_thread)

    @abc.abstractmethod
    def report(self, progress: Progress) -> None:
        """Record progress made by one task."""


class NoOpReporter(ProgressReporter):
    """A reporter that discards all progress."""

    def __init__(self, iterations_per_thread: Iterable[int] = ()) -> None:
        super().__init__(iterations_per_thread)

    def report(self, progress: Progress) -> None:
        return None


def split(iterations: int, parts: int) -> List[int]:
    """Share iterations between parts; the last part takes the remainder."""
    if parts < 1:
        raise ValueError("iterations must be split into at least one part")
    if parts == 1:
        return [iterations]
    share = iterations // parts
    result = [share] * (parts - 1)
    result.append(iterations - share * (parts - 1))
    return result