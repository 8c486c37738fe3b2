"""Progressive rendering: workers run until stopped while frames are taken periodically."""

from __future__ import annotations

import asyncio
import enum
import io
import logging
import queue
import random
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Sequence, Tuple

from PIL import Image

from frustoz.flame import Flame, make_camera, make_histogram, make_histogram_processor
from frustoz.geometry import RealPoint
from frustoz.histogram import Histogram

log = logging.getLogger(__name__)

SKIP_ITERATIONS = 20
MIN_FRAME_DURATION = 0.005


@dataclass(frozen=True)
class Snapshot:
    """One encoded frame of a progressive render."""

    image_data: bytes
    frame_time: float
    steps: int
    complete: bool


class TaskCommand(enum.Enum):
    COMPLETED = "completed"
    FRAME_EXPECTED = "frame_expected"


class _ThreadSnapshot(NamedTuple):
    histogram: Histogram
    steps: int


class ProgressiveRenderTask:
    """Iterates a flame until told to stop, sending histogram copies on request."""

    def __init__(
        self,
        flame: Flame,
        commands: "queue.Queue[TaskCommand]",
        task_id: int,
        snapshots: "queue.Queue[_ThreadSnapshot]",
        rng: Optional[random.Random] = None,
    ) -> None:
        self.camera = make_camera(flame.camera)
        self.canvas = make_histogram(flame.render, flame.filter.width)
        self.flame = flame
        self.task_id = task_id
        self.commands = commands
        self.snapshots = snapshots
        self._rng = rng if rng is not None else random.Random()

    def run(self) -> None:
        """Iterate until a COMPLETED command arrives."""
        rng = self._rng
        transforms = self.flame.transforms
        palette = self.flame.palette
        point = RealPoint(rng.random(), rng.random())
        color = rng.random()
        iteration = 0
        log.info("Task %d started", self.task_id)

        while True:
            transform = transforms.get_transformation(rng.random())
            point, color = transform.apply(point, color, rng)
            iteration += 1

            if iteration > SKIP_ITERATIONS:
                self.canvas.project_and_update(
                    self.camera.project(point), palette.get_color(color)
                )

            try:
                command = self.commands.get_nowait()
            except queue.Empty:
                continue
            if command is TaskCommand.FRAME_EXPECTED:
                self.snapshots.put(_ThreadSnapshot(self.canvas.copy(), iteration))
            elif command is TaskCommand.COMPLETED:
                return


def encode_png(width: int, height: int, raw: bytes) -> bytes:
    """Encode packed 8-bit RGB data as a PNG image."""
    if len(raw) != width * height * 3:
        raise ValueError(
            f"expected {width * height * 3} bytes for {width}x{height} RGB, got {len(raw)}"
        )
    image = Image.frombytes("RGB", (width, height), bytes(raw))
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def _create_tasks(
    flame: Flame, threads: int, shared: "queue.Queue[_ThreadSnapshot]"
) -> Tuple[List[ProgressiveRenderTask], List["queue.Queue[TaskCommand]"]]:
    commands: List["queue.Queue[TaskCommand]"] = [queue.Queue() for _ in range(threads)]
    tasks = [
        ProgressiveRenderTask(flame, command_queue, task_id, shared)
        for task_id, command_queue in enumerate(commands)
    ]
    return tasks, commands


async def _receive(
    shared: "queue.Queue[_ThreadSnapshot]", running: Sequence[asyncio.Future]
) -> _ThreadSnapshot:
    while True:
        try:
            return await asyncio.to_thread(shared.get, True, 0.1)
        except queue.Empty:
            for future in running:
                if future.done() and future.exception() is not None:
                    raise RuntimeError("render task failed") from future.exception()


def _next_delta(frame_delta: float, actual: float) -> float:
    if actual > frame_delta:
        adjustment = actual - frame_delta
        if frame_delta > adjustment + MIN_FRAME_DURATION:
            return frame_delta - adjustment
    return frame_delta


async def render_progressive(
    flame: Flame,
    max_steps: int,
    frame_delta: float,
    threads: int,
    snapshot_queue: "asyncio.Queue[Snapshot]",
) -> None:
    """Render until ``max_steps`` iterations, putting a PNG snapshot every ``frame_delta`` seconds."""
    if threads < 1:
        raise ValueError("at least one thread is needed")
    log.info("Beginning rendering")
    started = time.monotonic()
    processor = make_histogram_processor(flame)
    shared: "queue.Queue[_ThreadSnapshot]" = queue.Queue()

    tasks, commands = await asyncio.to_thread(_create_tasks, flame, threads, shared)
    log.info("Created task definitions")

    loop = asyncio.get_running_loop()
    executor = ThreadPoolExecutor(max_workers=threads)
    running = [loop.run_in_executor(executor, task.run) for task in tasks]
    log.info("Spawned tasks")

    try:
        frame_start = time.monotonic()
        adjusted_delta = frame_delta
        total_steps = 0
        while total_steps < max_steps:
            await asyncio.sleep(adjusted_delta)
            for command_queue in commands:
                command_queue.put(TaskCommand.FRAME_EXPECTED)

            histograms: List[Histogram] = []
            total_steps = 0
            for _ in range(threads):
                snapshot = await _receive(shared, running)
                total_steps += snapshot.steps
                histograms.append(snapshot.histogram)

            raw = await asyncio.to_thread(processor.process_to_raw, histograms)
            image_data = encode_png(flame.render.width, flame.render.height, raw)
            actual = time.monotonic() - frame_start
            await snapshot_queue.put(
                Snapshot(
                    image_data=image_data,
                    frame_time=actual,
                    steps=total_steps,
                    complete=total_steps >= max_steps,
                )
            )
            adjusted_delta = _next_delta(frame_delta, actual)
            frame_start = time.monotonic()
    finally:
        for command_queue in commands:
            command_queue.put(TaskCommand.COMPLETED)
        await asyncio.gather(*running, return_exceptions=True)
        executor.shutdown(wait=False)
    log.info("Rendering took %s seconds", time.monotonic() - started)