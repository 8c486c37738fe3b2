"""Command line entry point: render flames to PNG files."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
import time
from typing import List, Optional, Sequence

from tqdm import tqdm

from frustoz.bars import MultiProgressBar
from frustoz.examples import spark
from frustoz.flame import Flame
from frustoz.output import write_png
from frustoz.parser import parse_file
from frustoz.renderers import AsyncRenderer, ThreadedRenderer

log = logging.getLogger(__name__)

PRESERVE_CPUS = 1
LOG_FILE = "frustoz.log"
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _TqdmHandler(logging.Handler):
    """Writes log records to stdout without breaking progress bars."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            tqdm.write(self.format(record), file=sys.stdout)
        except Exception:
            self.handleError(record)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="frustoz", description="Render fractal flames to PNG images."
    )
    parser.add_argument(
        "flame_file",
        nargs="?",
        help="XML flame file; the built-in example is rendered when omitted",
    )
    parser.add_argument(
        "--async-rendering",
        action="store_true",
        help="run render tasks from an event loop",
    )
    return parser.parse_args(list(argv))


def _render(flame: Flame, threads: int, use_async: bool) -> bytes:
    bars: List[MultiProgressBar] = []

    def reporter_factory(per_thread: List[int]) -> MultiProgressBar:
        bar = MultiProgressBar(per_thread)
        bars.append(bar)
        return bar

    try:
        if use_async:
            log.info("Running with async-rendering")
            return asyncio.run(AsyncRenderer(threads).render(flame, reporter_factory))
        log.info("Running without async-rendering")
        return ThreadedRenderer(threads).render(flame, reporter_factory)
    finally:
        for bar in bars:
            bar.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Render the flames of a file, or the built-in example, to fractal_N.png."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    root = logging.getLogger()
    previous_level = root.level
    console = _TqdmHandler(logging.DEBUG)
    console.setFormatter(logging.Formatter(_LOG_FORMAT))
    log_file = logging.FileHandler(LOG_FILE, mode="w")
    log_file.setLevel(logging.DEBUG)
    log_file.setFormatter(logging.Formatter(_LOG_FORMAT))
    root.addHandler(console)
    root.addHandler(log_file)
    root.setLevel(logging.DEBUG)

    try:
        started = time.perf_counter()
        threads = max(1, (os.cpu_count() or 1) - PRESERVE_CPUS)
        models = [spark()] if args.flame_file is None else parse_file(args.flame_file)

        for number, model in enumerate(models, start=1):
            width, height = model.render.width, model.render.height
            raw = _render(model, threads, args.async_rendering)
            write_png(f"fractal_{number}.png", raw, width, height)

        log.info("Time elapsed: %s", time.perf_counter() - started)
    finally:
        root.removeHandler(console)
        root.removeHandler(log_file)
        log_file.close()
        root.setLevel(previous_level)
    return 0


if __name__ == "__main__":
    sys.exit(main())