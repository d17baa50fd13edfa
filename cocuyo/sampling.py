"""Colour sampling strategies for rectangular regions of BGRA frames."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import ClassVar, Optional, Protocol, Tuple

RGB = Tuple[int, int, int]

NUM_BINS = 512
MAX_SAMPLED_PIXELS = 1000
_U32_MAX = 2**32 - 1


class Frame(Protocol):
    """Anything that exposes frame dimensions and, optionally, raw BGRA pixels."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    @property
    def pixels(self) -> Optional[bytes]: ...


@dataclass(frozen=True)
class CpuFrame:
    """A frame held in memory as a contiguous BGRA byte buffer."""

    data: bytes
    width: int
    height: int

    @property
    def pixels(self) -> bytes:
        return self.data


@dataclass
class HistogramBin:
    """Accumulated colour sums and pixel count for one histogram bin."""

    r_sum: int = 0
    g_sum: int = 0
    b_sum: int = 0
    count: int = 0

    def add(self, r: int, g: int, b: int) -> None:
        self.r_sum += r
        self.g_sum += g
        self.b_sum += b
        self.count += 1


def luminance(r: int, g: int, b: int) -> int:
    """Integer luminance 299*R + 587*G + 114*B (in the range 0..=255000)."""
    return 299 * r + 587 * g + 114 * b


def _iter_pixels(
    data: bytes, width: int, x0: int, y0: int, x1: int, y1: int, stride: int
) -> Iterator[RGB]:
    """Yield (r, g, b) for each strided pixel of the region that lies inside ``data``."""
    if stride < 1:
        raise ValueError(f"stride must be at least 1, got {stride}")
    size = len(data)
    for py in range(y0, y1, stride):
        row_base = py * width * 4
        for px in range(x0, x1, stride):
            idx = row_base + px * 4
            if idx + 2 < size:
                yield data[idx + 2], data[idx + 1], data[idx]


def sample_extremum(
    data: bytes,
    width: int,
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    stride: int,
    brightest: bool,
) -> Optional[RGB]:
    """Return the brightest (or darkest) pixel by luminance; the first wins ties."""
    best: Optional[RGB] = None
    best_lum = 0
    for rgb in _iter_pixels(data, width, x0, y0, x1, y1, stride):
        lum = luminance(*rgb)
        if best is None or (lum > best_lum if brightest else lum < best_lum):
            best, best_lum = rgb, lum
    return best


def bin_index(r: int, g: int, b: int) -> int:
    """Index of the 8x8x8 histogram bin holding the given colour."""
    return ((r >> 5) << 6) | ((g >> 5) << 3) | (b >> 5)


def extract_dominant_from_histogram(bins: Iterable[HistogramBin]) -> Optional[RGB]:
    """Average colour of the most populated bin; the last such bin wins ties."""
    best: Optional[HistogramBin] = None
    for candidate in bins:
        if best is None or candidate.count >= best.count:
            best = candidate
    if best is None or best.count == 0:
        return None
    return (
        best.r_sum // best.count,
        best.g_sum // best.count,
        best.b_sum // best.count,
    )


class SamplingStrategy(ABC):
    """Extracts a single RGB colour from a rectangular region of BGRA data.

    Strategies compare equal when their ``id`` matches and display as ``name``.
    """

    id: ClassVar[str]
    name: ClassVar[str]
    supports_gpu: ClassVar[bool] = False

    @abstractmethod
    def sample(
        self,
        data: bytes,
        width: int,
        x0: int,
        y0: int,
        x1: int,
        y1: int,
        stride: int,
    ) -> Optional[RGB]:
        """Sample rows ``y0..y1`` and columns ``x0..x1`` every ``stride`` pixels."""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SamplingStrategy):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Average(SamplingStrategy):
    """Mean R, G, B across the sampled pixels."""

    id = "average"
    name = "Average"
    supports_gpu = True

    def sample(self, data, width, x0, y0, x1, y1, stride):
        total = HistogramBin()
        for r, g, b in _iter_pixels(data, width, x0, y0, x1, y1, stride):
            total.add(r, g, b)
        return extract_dominant_from_histogram([total])


class Max(SamplingStrategy):
    """The brightest sampled pixel by luminance."""

    id = "max"
    name = "Max (brightest)"

    def sample(self, data, width, x0, y0, x1, y1, stride):
        return sample_extremum(data, width, x0, y0, x1, y1, stride, brightest=True)


class Min(SamplingStrategy):
    """The darkest sampled pixel by luminance."""

    id = "min"
    name = "Min (darkest)"

    def sample(self, data, width, x0, y0, x1, y1, stride):
        return sample_extremum(data, width, x0, y0, x1, y1, stride, brightest=False)


class Palette(SamplingStrategy):
    """Dominant colour by fixed 8x8x8 histogram quantisation."""

    id = "palette"
    name = "Palette (dominant)"
    supports_gpu = True

    def sample(self, data, width, x0, y0, x1, y1, stride):
        bins = [HistogramBin() for _ in range(NUM_BINS)]
        for r, g, b in _iter_pixels(data, width, x0, y0, x1, y1, stride):
            bins[bin_index(r, g, b)].add(r, g, b)
        return extract_dominant_from_histogram(bins)


_ALL_STRATEGIES: Tuple[SamplingStrategy, ...] = (Average(), Max(), Min(), Palette())


def all_strategies() -> list[SamplingStrategy]:
    """All available strategies, in display order."""
    return list(_ALL_STRATEGIES)


def default_strategy() -> SamplingStrategy:
    """The strategy used when none is chosen."""
    return Average()


def strategy_by_id(strategy_id: str) -> SamplingStrategy:
    """Look up a strategy by its identifier."""
    for strategy in _ALL_STRATEGIES:
        if strategy.id == strategy_id:
            return strategy
    raise ValueError(f"unknown sampling strategy: {strategy_id!r}")


def _to_u32(value: float) -> int:
    """Saturating float-to-unsigned conversion, truncating toward zero."""
    if math.isnan(value) or value <= 0:
        return 0
    if value >= _U32_MAX:
        return _U32_MAX
    return int(value)


def sample_region(
    frame: Frame,
    x: float,
    y: float,
    w: float,
    h: float,
    strategy: SamplingStrategy,
) -> Optional[RGB]:
    """Sample a region of ``frame`` with ``strategy``, about 1000 pixels at most.

    Returns None when the frame has no CPU pixels or the clamped region is empty.
    """
    data = frame.pixels
    if data is None:
        return None
    width, height = frame.width, frame.height

    x0 = min(_to_u32(x), width)
    y0 = min(_to_u32(y), height)
    x1 = min(_to_u32(x + w), width)
    y1 = min(_to_u32(y + h), height)
    if x0 >= x1 or y0 >= y1:
        return None

    total_pixels = (x1 - x0) * (y1 - y0)
    stride = max(math.ceil(math.sqrt(total_pixels / MAX_SAMPLED_PIXELS)), 1)
    return strategy.sample(data, width, x0, y0, x1, y1, stride)


__all__: Sequence[str] = (
    "CpuFrame",
    "HistogramBin",
    "SamplingStrategy",
    "Average",
    "Max",
    "Min",
    "Palette",
    "luminance",
    "sample_extremum",
    "bin_index",
    "extract_dominant_from_histogram",
    "all_strategies",
    "default_strategy",
    "strategy_by_id",
    "sample_region",
)