# cocuyo

Colour-sampling and bulb-selection logic for screen-driven ambient lighting.
Each rectangular region of a captured frame is reduced to one RGB colour,
which can then be sent to a smart bulb.

The package has no third-party dependencies.

## Installation

```
pip install .
```

To run the test suite, install the test extra:

```
pip install ".[test]"
pytest
```

## Sampling a region

Frames hold BGRA pixel data, four bytes per pixel, row by row. `CpuFrame`
wraps such a buffer. Any object with `width`, `height` and `pixels`
attributes can be used as a frame. A `pixels` value of `None` means the
frame has no pixel data in memory.

```python
from cocuyo.sampling import CpuFrame, Average, Max, Min, Palette, sample_region

data = bytes([
    0, 0, 255, 255,      # red
    0, 255, 0, 255,      # green
    255, 0, 0, 255,      # blue
    255, 255, 255, 255,  # white
])
frame = CpuFrame(data, 2, 2)

sample_region(frame, 0.0, 0.0, 2.0, 2.0, Average())  # (127, 127, 127)
sample_region(frame, 0.0, 0.0, 2.0, 2.0, Max())      # (255, 255, 255)
sample_region(frame, 0.0, 0.0, 2.0, 2.0, Min())      # (0, 0, 255)
```

Region bounds are clamped to the frame. `sample_region` returns `None` when
the clamped region is empty or the frame has no pixels. On large regions it
samples with a larger step, so that it visits about 1000 pixels.

Four strategies are available:

| id        | name                 | result                                                       |
|-----------|----------------------|--------------------------------------------------------------|
| `average` | Average              | mean colour                                                  |
| `max`     | Max (brightest)      | pixel with the highest luminance (`299*R + 587*G + 114*B`)   |
| `min`     | Min (darkest)        | pixel with the lowest luminance                              |
| `palette` | Palette (dominant)   | mean of the most populated bin of an 8×8×8 histogram         |

- `all_strategies()` returns the strategies in the order of the table.
- `strategy_by_id("palette")` looks a strategy up by id and raises
  `ValueError` for an unknown id.
- `default_strategy()` returns `Average`.

Two strategies compare equal when their ids match. `str()` of a strategy
gives its display name.

The module also has these lower-level helpers: `luminance`,
`sample_extremum`, `bin_index`, `extract_dominant_from_histogram` and
`HistogramBin`.

## Sampling many regions at once

`cocuyo.batch.sample_regions(frame, regions)` takes a sequence of
`RegionParams`. Each one holds a `region_id`, `x`, `y`, `width`, `height` and
a `strategy`, which defaults to `Average`. The function returns
`(region_id, colour)` pairs in input order.

`classify_regions` groups the regions:

- Average and palette regions are measured over every pixel of their clamped
  bounds, with no step.
- All other strategies go through `sample_region`, which samples with a step.

`clamp_region` returns the clamped `Bounds`, or `None` when nothing of the
region remains. `aligned_stride` rounds a size up to a multiple of an
alignment.

## Sampling on a background thread

`cocuyo.worker.SamplingWorker` runs `sample_regions`, or a sampler you pass
in, on a dedicated thread. It can also be used as a context manager.

`try_send(frame, regions)` never blocks. It returns a `SendResult` whose
`status` is one of:

- `SENT`: `future` resolves to a `SamplingResult`. The result holds the
  colours and the sampling time in milliseconds.
- `BUSY`: a request is already waiting behind the one being processed.
- `DEAD`: the worker was closed or its thread has stopped.

If the sampler raises, the error is logged and every region of that request
gets `None`. `close()` finishes the requests already accepted and then stops
the thread.

## Bulb selection

`cocuyo.bulb_setup.BulbSetupState` holds the known bulbs (`BulbInfo`: `mac`,
`ip`, optional `name`) and the set of selected MAC addresses. When the state
is built, selections for unknown bulbs are dropped.

- `bulbs_discovered` merges scan results. A bulb that is already known keeps
  its place in the list and takes the new IP address. It takes the new name
  only if the scan reported one.
- `toggle_bulb` selects or unselects a bulb.
- `selected_bulb_infos()` returns the selected bulbs in discovery order.
- `status_text()` gives `"Scanning..."` or a summary such as
  `"2 bulbs selected"`.

The mutating methods return a `BulbSetupEvent`.

## Theme and tray

`cocuyo.theme` defines the colour palette and the widget styles for buttons,
containers, rules, pick lists and tooltips. They are plain frozen
dataclasses, chosen by `ButtonStatus` or `PickListStatus`.

`cocuyo.tray.TrayState` holds the tray menu labels and maps menu item ids and
icon clicks to `TrayAction` values. `generate_icon(size)` draws the round
amber tray icon as RGBA bytes.

## What this package does not do

It does not capture the screen, show any window or tray icon, or talk to
bulbs on the network. `BulbSetupState.begin_scan` only marks a scan as
running; the results have to be supplied to `bulbs_discovered`. All sampling
runs on the CPU.