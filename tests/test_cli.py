import pytest
from PIL import Image

from frustoz.cli import main

_FLAME = (
    '<flame size="4 3" quality="1" oversample="1" scale="1" center="0.5 0.5">'
    '<xform weight="1" color="0" coefs="0.5 0 0 0.5 0 0" linear="1"/>'
    '<palette count="2">000000FFFFFF</palette>'
    "</flame>"
)


def _write_flames(directory, count):
    path = directory / "input.flame"
    path.write_text("<flames>" + _FLAME * count + "</flames>")
    return path


def test_renders_single_flame_to_png(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = _write_flames(tmp_path, 1)
    assert main([str(path)]) == 0
    with Image.open(tmp_path / "fractal_1.png") as image:
        assert image.size == (4, 3)
        assert image.mode == "RGB"


def test_renders_each_flame_to_numbered_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = _write_flames(tmp_path, 2)
    assert main([str(path)]) == 0
    names = sorted(p.name for p in tmp_path.glob("fractal_*.png"))
    assert names == ["fractal_1.png", "fractal_2.png"]


def test_async_rendering_produces_image(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = _write_flames(tmp_path, 1)
    assert main([str(path), "--async-rendering"]) == 0
    with Image.open(tmp_path / "fractal_1.png") as image:
        assert image.size == (4, 3)


def test_writes_log_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = _write_flames(tmp_path, 1)
    assert main([str(path)]) == 0
    text = (tmp_path / "frustoz.log").read_text()
    assert "Time elapsed" in text


def test_missing_file_raises(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        main([str(tmp_path / "absent.flame")])
    assert list(tmp_path.glob("fractal_*.png")) == []