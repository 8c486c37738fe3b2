import pytest

from frustoz.filters import FilterKernel, make_log_filter
from frustoz.geometry import CameraCoordinates, HDRPixel
from frustoz.histogram import Histogram, create_histogram
from frustoz.palette import RGB
from frustoz.processor import (
    HistogramProcessor,
    apply_spatial_filter,
    combine_histograms,
)

IDENTITY = FilterKernel(width=1, coefficients=[1.0])


def _sample_histogram():
    return Histogram(
        2,
        1,
        [HDRPixel(0.1, 0.2, 0.3, 1.0), HDRPixel(0.4, 0.5, 0.6, 2.0)],
    )


def test_combine_single_histogram_is_unchanged():
    histogram = _sample_histogram()
    assert combine_histograms([histogram]).data == histogram.data


def test_combine_with_empty_histogram_is_unchanged():
    histogram = _sample_histogram()
    combined = combine_histograms([histogram, Histogram(2, 1)])
    assert combined.data == histogram.data
    assert (combined.width, combined.height) == (2, 1)


def test_combine_same_histogram_twice_doubles():
    histogram = _sample_histogram()
    combined = combine_histograms([histogram, histogram])
    for original, doubled in zip(histogram.data, combined.data):
        assert doubled == pytest.approx(tuple(2 * v for v in original))


def test_combine_rejects_empty_list():
    with pytest.raises(ValueError):
        combine_histograms([])


def test_combine_rejects_mismatched_sizes():
    with pytest.raises(ValueError):
        combine_histograms([Histogram(2, 1), Histogram(1, 2)])


def test_identity_filter_clamps_values():
    histogram = Histogram(
        2,
        1,
        [HDRPixel(0.5, 2.0, -1.0, 0.25), HDRPixel(0.0, 0.0, 0.0, 0.0)],
    )
    result = apply_spatial_filter(IDENTITY, histogram, 2, 1, 1)
    assert result.data == [HDRPixel(0.5, 1.0, 0.0, 0.25), HDRPixel(0.0, 0.0, 0.0, 0.0)]


def test_box_filter_averages_oversampled_block():
    kernel = FilterKernel(width=2, coefficients=[0.25] * 4)
    histogram = create_histogram(1, 1, 2, 2)
    histogram.data = [HDRPixel(v, 0.0, 0.0, 0.0) for v in (0.2, 0.4, 0.6, 0.8)]
    result = apply_spatial_filter(kernel, histogram, 1, 1, 2)
    assert (result.width, result.height) == (1, 1)
    assert result.data[0].r == pytest.approx(0.5)


def test_spatial_filter_rejects_malformed_kernel():
    with pytest.raises(ValueError):
        apply_spatial_filter(FilterKernel(width=2, coefficients=[1.0]), Histogram(2, 2), 1, 1, 1)


def _processor():
    return HistogramProcessor(
        quality=1,
        image_width=2,
        image_height=1,
        view_width=1.0,
        view_height=1.0,
        oversampling=1,
        brightness=4.0,
        spatial_filter=IDENTITY,
    )


def test_processor_builds_log_filter():
    assert _processor().log_filter == make_log_filter(1, 1, 1.0, 1.0, 4.0)


def test_empty_histogram_renders_black():
    raw = _processor().process_to_raw([create_histogram(2, 1, 1, 1)])
    assert raw == bytes(6)


def test_dense_white_pixel_saturates():
    histogram = Histogram(
        2, 1, [HDRPixel(1e6, 1e6, 1e6, 1e6), HDRPixel(0.0, 0.0, 0.0, 0.0)]
    )
    raw = _processor().process_to_raw([histogram])
    assert raw == bytes([255, 255, 255, 0, 0, 0])


def test_hits_only_light_their_pixel():
    histogram = create_histogram(2, 1, 1, 1)
    for _ in range(50):
        histogram.project_and_update(CameraCoordinates(0.75, 0.5), RGB(0.5, 0.5, 0.5))
    raw = _processor().process_to_raw([histogram, histogram.copy()])
    assert len(raw) == 6
    assert raw[:3] == bytes(3)
    assert all(v > 0 for v in raw[3:])