"""Renderers that spread the chaos game over several worker threads."""

from __future__ import annotations

import asyncio
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List

from frustoz.flame import Flame, iterations as total_iterations, make_histogram_processor
from frustoz.histogram import Histogram
from frustoz.processor import HistogramProcessor
from frustoz.progress import NoOpReporter, split
from frustoz.tasks import ReporterFactory, SplitRenderTask

log = logging.getLogger(__name__)


def _prepare(
    flame: Flame, threads: int, reporter_factory: ReporterFactory
) -> tuple[HistogramProcessor, List[SplitRenderTask]]:
    started = time.perf_counter()
    processor = make_histogram_processor(flame)
    per_thread = split(total_iterations(flame.render), threads)
    reporter = reporter_factory(per_thread)
    tasks = [
        SplitRenderTask(flame, count, index, reporter)
        for index, count in enumerate(per_thread)
    ]
    log.info("Creating tasks took: %s", time.perf_counter() - started)
    return processor, tasks


@dataclass(frozen=True)
class ThreadedRenderer:
    """Renders with one task per thread on a thread pool."""

    threads: int

    def render(self, flame: Flame, reporter_factory: ReporterFactory = NoOpReporter) -> bytes:
        """Render the flame and return packed RGB bytes."""
        processor, tasks = _prepare(flame, self.threads, reporter_factory)
        with ThreadPoolExecutor(max_workers=len(tasks)) as pool:
            histograms = list(pool.map(SplitRenderTask.render, tasks))
        return processor.process_to_raw(histograms)


@dataclass(frozen=True)
class AsyncRenderer:
    """Renders with one task per worker thread, awaited from an event loop."""

    threads: int

    async def render(
        self, flame: Flame, reporter_factory: ReporterFactory = NoOpReporter
    ) -> bytes:
        """Render the flame and return packed RGB bytes; failed tasks are left out."""
        processor, tasks = _prepare(flame, self.threads, reporter_factory)
        results = await asyncio.gather(
            *(asyncio.to_thread(task.render) for task in tasks), return_exceptions=True
        )
        histograms: List[Histogram] = []
        for result in results:
            if isinstance(result, Histogram):
                histograms.append(result)
            else:
                log.error("Render task failed: %r", result)
        return processor.process_to_raw(histograms)