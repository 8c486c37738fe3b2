# frustoz

A fractal flame renderer. It runs the chaos game over a weighted system of
affine transforms with non-linear variations, accumulates hits in an
oversampled histogram, applies log-density, gamma and spatial filtering, and
writes the result as a PNG image.

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
frustoz [FLAME_FILE] [--async-rendering]
```

- Without `FLAME_FILE`, the built-in "spark" example is rendered.
- With a path to an XML flame file, every `<flame>` element in it is rendered.
- `--async-rendering` runs the render tasks from an asyncio event loop
  instead of a thread pool; the result is the same.

Images are written to `fractal_1.png`, `fractal_2.png`, … in the current
directory. Work is spread over one thread fewer than the number of CPUs (at
least one), with a progress bar per thread. Log messages go to the terminal
and to `frustoz.log` in the current directory, which is overwritten on each
run.

## Flame files

Attributes read from `<flame>`:

| attribute       | meaning                                   | default     |
|-----------------|-------------------------------------------|-------------|
| `size`          | image width and height                    | `1920 1080` |
| `oversample`    | oversampling factor                       | `2`         |
| `quality`       | iterations per image pixel                | `100`       |
| `brightness`    | brightness                                | `4.0`       |
| `scale`         | pixels per unit                           | `100`       |
| `center`        | centre of the view                        | `0.0 0.0`   |
| `filter`        | spatial filter radius                     | `0.75`      |
| `filter_kernel` | `gaussian`, `hermite`, `box`, `triangle`, `bell`, `b_spline`, `mitchell`, `mitchell_sinepow`, `blackman` | `gaussian` |

Each `<xform>` takes `weight` (default 1), `color` (default 1), `coefs`
(six affine coefficients, default identity) and any of the variations
`linear`, `linear3D`, `sinusoidal`, `spherical`, `swirl`, `horseshoe`,
`polar`, `handkerchief`, `heart`, `disc`, `spiral`, `hyperbolic`, `diamond`,
`julia` and `julian` (with `julian_power` and `julian_dist`). An xform with
no recognised variation is treated as linear.

A `<palette>` element holds the colours as hexadecimal RGB, six digits per
colour; its `count` attribute gives the number of colours. A flame without a
palette gets a two-colour black-and-white palette.

## Library use

```python
from frustoz.examples import sierpinsky
from frustoz.renderers import ThreadedRenderer
from frustoz.progress import NoOpReporter
from frustoz.output import write_png

flame = sierpinsky()
raw = ThreadedRenderer(threads=4).render(flame, NoOpReporter)
write_png("sierpinsky.png", raw, flame.render.width, flame.render.height)
```

The main pieces:

- `frustoz.examples`: `sierpinsky()`, `barnsley()`, `spark()` and
  `green_palette()`.
- `frustoz.parser`: `parse_file(path)` and `parse_string(text)` return a
  list of `Flame` objects.
- `frustoz.renderers`: `ThreadedRenderer` and `AsyncRenderer` (whose
  `render` is a coroutine); both return packed 8-bit RGB bytes.
- `frustoz.tasks`: `render_simple(flame)` renders on the calling thread.
- `frustoz.progressive`: `render_progressive(flame, max_steps, frame_delta,
  threads, snapshot_queue)` puts a `Snapshot` holding PNG bytes on an
  `asyncio.Queue` every `frame_delta` seconds until `max_steps` iterations
  are done.
- `frustoz.output`: `write_png(filename, data, width, height)`; the image
  format follows the file extension.
- `frustoz.bars`: `SingleProgressBar` and `MultiProgressBar` progress
  reporters drawn with tqdm.

A reporter factory is any callable that takes the list of iterations per
task and returns a `frustoz.progress.ProgressReporter`.

## What it does not do

There is no window or interactive viewer: the progressive renderer only
produces PNG snapshots for the caller to show. Flames cannot be written back
to XML, and there is no editor for them.