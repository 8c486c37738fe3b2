"""Chaos-game render tasks that fill a histogram for one flame."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, List, Optional

from frustoz.flame import (
    Flame,
    iterations as total_iterations,
    make_camera,
    make_histogram,
    make_histogram_processor,
)
from frustoz.geometry import RealPoint
from frustoz.histogram import Histogram
from frustoz.progress import NoOpReporter, Progress, ProgressReporter

SKIP_ITERATIONS = 20
REPORT_FREQUENCY_PERCENT = 1
SPLIT_FACTOR = 32

ReporterFactory = Callable[[List[int]], ProgressReporter]


class RenderTask:
    """Runs one chaos-game trajectory for a fixed number of iterations."""

    def __init__(
        self,
        flame: Flame,
        iterations: int,
        task_id: int,
        progress_reporter: ProgressReporter,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.camera = make_camera(flame.camera)
        self.canvas = make_histogram(flame.render, flame.filter.width)
        self.flame = flame
        self.iterations = iterations
        self.task_id = task_id
        self.progress_reporter = progress_reporter
        self._rng = rng if rng is not None else random.Random()

    def render(self) -> Histogram:
        """Iterate the system and return the filled histogram."""
        rng = self._rng
        transforms = self.flame.transforms
        palette = self.flame.palette
        report_frequency = max(1, self.iterations // 100 * REPORT_FREQUENCY_PERCENT)

        point = RealPoint(rng.random(), rng.random())
        color = rng.random()
        pending = 0

        for iteration in range(self.iterations):
            transform = transforms.get_transformation(rng.random())
            point, color = transform.apply(point, color, rng)
            pending += 1

            if pending % report_frequency == 0:
                self.progress_reporter.report(Progress(pending, self.task_id))
                pending = 0

            if iteration > SKIP_ITERATIONS:
                self.canvas.project_and_update(
                    self.camera.project(point), palette.get_color(color)
                )

        self.progress_reporter.report(Progress(pending, self.task_id))
        return self.canvas


@dataclass
class _State:
    point: RealPoint
    color: float


class SplitRenderTask:
    """Runs several interleaved trajectories, advancing them in lock step."""

    def __init__(
        self,
        flame: Flame,
        iterations: int,
        task_id: int,
        progress_reporter: ProgressReporter,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.camera = make_camera(flame.camera)
        self.canvas = make_histogram(flame.render, flame.filter.width)
        self.flame = flame
        self.iterations = iterations
        self.task_id = task_id
        self.progress_reporter = progress_reporter
        self._rng = rng if rng is not None else random.Random()

    def render(self) -> Histogram:
        """Iterate all trajectories and return the filled histogram."""
        rng = self._rng
        transforms = self.flame.transforms
        palette = self.flame.palette
        report_frequency = self.iterations // 100 * REPORT_FREQUENCY_PERCENT
        pending = 0

        states = [
            _State(RealPoint(rng.random(), rng.random()), rng.random())
            for _ in range(SPLIT_FACTOR)
        ]

        for iteration in range(0, self.iterations, SPLIT_FACTOR):
            for state in states:
                transform = transforms.get_transformation(rng.random())
                state.point, state.color = transform.apply(state.point, state.color, rng)
            pending += SPLIT_FACTOR

            if pending > report_frequency:
                self.progress_reporter.report(Progress(pending, self.task_id))
                pending -= report_frequency

            if iteration > SKIP_ITERATIONS * SPLIT_FACTOR:
                for state in states:
                    self.canvas.project_and_update(
                        self.camera.project(state.point), palette.get_color(state.color)
                    )

        self.progress_reporter.report(Progress(pending, self.task_id))
        return self.canvas


def render_simple(flame: Flame, reporter_factory: ReporterFactory = NoOpReporter) -> bytes:
    """Render a flame on the calling thread and return packed RGB bytes."""
    count = total_iterations(flame.render)
    reporter = reporter_factory([count])
    processor = make_histogram_processor(flame)
    histogram = RenderTask(flame, count, 0, reporter).render()
    return processor.process_to_raw([histogram])