"""Terminal progress bars for render tasks."""

from __future__ import annotations

import queue
import threading
from typing import IO, Iterable, List, Optional

from tqdm import tqdm

from frustoz.progress import Progress, ProgressReporter

_BAR_FORMAT = "[{elapsed}] [{bar:40}] {n_fmt:>7}/{total_fmt:7} {desc}"


class SingleProgressBar(ProgressReporter):
    """One bar that counts the iterations of all tasks together."""

    def __init__(
        self, iterations_per_thread: Iterable[int], file: Optional[IO[str]] = None
    ) -> None:
        super().__init__(iterations_per_thread)
        self.remaining: int = sum(self.iterations_per_thread)
        self.bar = tqdm(total=self.remaining, file=file)
        self._lock = threading.Lock()
        self._finished = False

    def report(self, progress: Progress) -> None:
        """Advance the bar, never beyond the total."""
        with self._lock:
            increment = min(progress.iterations, self.remaining)
            self.bar.update(increment)
            self.remaining -= increment
            if self.remaining == 0 and not self._finished:
                self._finished = True
                self.bar.set_description_str("Rendering completed")
                self.bar.close()

    def close(self) -> None:
        """Close the bar whether or not all iterations were reported."""
        with self._lock:
            self._finished = True
            self.bar.close()


class MultiProgressBar(ProgressReporter):
    """One bar per task, updated from a background thread fed by a queue."""

    def __init__(
        self, iterations_per_thread: Iterable[int], file: Optional[IO[str]] = None
    ) -> None:
        super().__init__(iterations_per_thread)
        self.remaining_per_thread: List[int] = list(self.iterations_per_thread)
        self.remaining: int = sum(self.iterations_per_thread)
        tqdm.write("Rendering per thread:", file=file)
        self.bars: List[tqdm] = [
            tqdm(
                total=size,
                position=index,
                bar_format=_BAR_FORMAT,
                desc=f"Thread {index + 1}: ",
                file=file,
                leave=True,
            )
            for index, size in enumerate(self.iterations_per_thread)
        ]
        self._queue: "queue.Queue[Optional[Progress]]" = queue.Queue()
        self._closed = False
        self._worker = threading.Thread(target=self._consume, daemon=True)
        self._worker.start()

    def _consume(self) -> None:
        while self.remaining > 0:
            progress = self._queue.get()
            if progress is None:
                break
            increment, index = progress
            self.bars[index].update(increment)
            self.remaining_per_thread[index] -= min(
                increment, self.remaining_per_thread[index]
            )
            if self.remaining_per_thread[index] == 0:
                self.bars[index].set_description_str(f"Thread {index + 1} FINISHED")
            self.remaining -= min(increment, self.remaining)

    def report(self, progress: Progress) -> None:
        """Queue progress of one task for display."""
        if self._closed:
            raise RuntimeError("progress bar is closed")
        if not 0 <= progress.thread < len(self.bars):
            raise IndexError(f"no progress bar for thread {progress.thread}")
        self._queue.put(progress)

    def close(self) -> None:
        """Stop the display thread once queued progress is shown, and close the bars."""
        if self._closed:
            return
        self._closed = True
        self._queue.put(None)
        self._worker.join()
        for bar in self.bars:
            bar.close()

    def __enter__(self) -> MultiProgressBar:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()