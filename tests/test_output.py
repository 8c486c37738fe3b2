import pytest
from PIL import Image

from frustoz.output import write_png


def _pixels(width, height):
    return bytes((x * 40 + y, y * 60, (x + y) % 256) [c] for y in range(height) for x in range(width) for c in range(3))


def test_round_trip(tmp_path):
    data = _pixels(4, 3)
    path = tmp_path / "out.png"
    write_png(str(path), data, 4, 3)
    with Image.open(path) as image:
        assert image.size == (4, 3)
        assert image.format == "PNG"
        assert image.convert("RGB").tobytes() == data


def test_extra_data_is_ignored(tmp_path):
    data = _pixels(2, 2)
    path = tmp_path / "out.png"
    write_png(path, data + b"\x01\x02\x03", 2, 2)
    with Image.open(path) as image:
        assert image.convert("RGB").tobytes() == data


def test_short_data_raises(tmp_path):
    with pytest.raises(ValueError):
        write_png(tmp_path / "out.png", b"\x00" * 11, 2, 2)
    assert not (tmp_path / "out.png").exists()