import io

import pytest

from frustoz.bars import MultiProgressBar, SingleProgressBar
from frustoz.progress import Progress


def test_single_bar_counts_and_finishes():
    bar = SingleProgressBar([10, 5], file=io.StringIO())
    bar.report(Progress(4, 0))
    assert bar.remaining == 11
    assert bar.bar.n == 4
    bar.report(Progress(20, 1))
    assert bar.remaining == 0
    assert bar.bar.n == 15
    assert bar.bar.desc == "Rendering completed"


def test_single_bar_ignores_progress_after_completion():
    bar = SingleProgressBar([3], file=io.StringIO())
    bar.report(Progress(3, 0))
    bar.report(Progress(5, 0))
    assert bar.remaining == 0
    assert bar.bar.n == 3


def test_multi_bar_tracks_each_thread():
    bar = MultiProgressBar([5, 5], file=io.StringIO())
    bar.report(Progress(3, 0))
    bar.report(Progress(10, 1))
    bar.report(Progress(2, 0))
    bar.close()
    assert bar.remaining == 0
    assert bar.remaining_per_thread == [0, 0]
    assert bar.bars[0].n == 5
    assert bar.bars[1].n == 10
    assert bar.bars[0].desc == "Thread 1 FINISHED"
    assert bar.bars[1].desc == "Thread 2 FINISHED"


def test_multi_bar_partial_progress_keeps_initial_message():
    with MultiProgressBar([5, 5], file=io.StringIO()) as bar:
        bar.report(Progress(2, 0))
    assert bar.remaining == 8
    assert bar.remaining_per_thread == [3, 5]
    assert bar.bars[0].desc == "Thread 1: "


def test_multi_bar_writes_header():
    out = io.StringIO()
    bar = MultiProgressBar([1], file=out)
    bar.close()
    assert "Rendering per thread:" in out.getvalue()


def test_multi_bar_rejects_unknown_thread():
    bar = MultiProgressBar([1, 1], file=io.StringIO())
    try:
        with pytest.raises(IndexError):
            bar.report(Progress(1, 2))
    finally:
        bar.close()


def test_multi_bar_rejects_report_after_close():
    bar = MultiProgressBar([4], file=io.StringIO())
    bar.close()
    with pytest.raises(RuntimeError):
        bar.report(Progress(1, 0))