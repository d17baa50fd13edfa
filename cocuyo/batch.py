"""Batched sampling of many regions of one frame.

Regions whose strategy has a dedicated full-resolution path (average and
palette) are measured over every pixel of their clamped bounds. Every other
region goes through the strided per-region sampler.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Sequence

from cocuyo.sampling import (
    RGB,
    Average,
    Frame,
    Palette,
    SamplingStrategy,
    _to_u32,
    default_strategy,
    sample_region,
)

_AVERAGE = Average()
_PALETTE = Palette()


@dataclass(frozen=True)
class RegionParams:
    """A region of a frame to sample, in frame pixel coordinates."""

    region_id: int
    x: float
    y: float
    width: float
    height: float
    strategy: SamplingStrategy = field(default_factory=default_strategy)


class Bounds(NamedTuple):
    """Half-open pixel bounds: columns x0..x1 and rows y0..y1."""

    x0: int
    y0: int
    x1: int
    y1: int


class SlotAssignment(NamedTuple):
    """Where a full-resolution region lands: shared slot, per-kind slot, region index."""

    params_slot: int
    result_slot: int
    region_index: int


@dataclass
class ClassifiedRegions:
    """Regions split into average, palette and strided-fallback groups."""

    avg_slots: list[SlotAssignment] = field(default_factory=list)
    palette_slots: list[SlotAssignment] = field(default_factory=list)
    cpu_indices: list[int] = field(default_factory=list)
    gpu_count: int = 0


def aligned_stride(size: int, alignment: int) -> int:
    """Round ``size`` up to the next multiple of ``alignment``."""
    if alignment < 1:
        raise ValueError(f"alignment must be positive, got {alignment}")
    return (size + alignment - 1) // alignment * alignment


def classify_regions(regions: Sequence[RegionParams]) -> ClassifiedRegions:
    """Assign each region to the average, palette or fallback group, in order."""
    classified = ClassifiedRegions()
    for index, region in enumerate(regions):
        if not region.strategy.supports_gpu:
            classified.cpu_indices.append(index)
            continue
        params_slot = classified.gpu_count
        classified.gpu_count += 1
        group = (
            classified.palette_slots
            if region.strategy.id == _PALETTE.id
            else classified.avg_slots
        )
        group.append(SlotAssignment(params_slot, len(group), index))
    return classified


def clamp_region(region: RegionParams, width: int, height: int) -> Optional[Bounds]:
    """Clamp a region to the frame; None when nothing of it remains."""
    x0 = min(_to_u32(region.x), width)
    y0 = min(_to_u32(region.y), height)
    x1 = min(_to_u32(region.x + region.width), width)
    y1 = min(_to_u32(region.y + region.height), height)
    if x0 >= x1 or y0 >= y1:
        return None
    return Bounds(x0, y0, x1, y1)


def sample_regions(
    frame: Frame, regions: Sequence[RegionParams]
) -> list[tuple[int, Optional[RGB]]]:
    """Sample every region of ``frame``; returns ``(region_id, colour)`` in input order.

    A region yields None when the frame has no pixel data or the region lies
    outside the frame.
    """
    results: list[Optional[RGB]] = [None] * len(regions)
    data = frame.pixels
    if data is None:
        return [(region.region_id, None) for region in regions]

    classified = classify_regions(regions)
    width, height = frame.width, frame.height

    for slots, sampler in (
        (classified.avg_slots, _AVERAGE),
        (classified.palette_slots, _PALETTE),
    ):
        for slot in slots:
            bounds = clamp_region(regions[slot.region_index], width, height)
            if bounds is not None:
                results[slot.region_index] = sampler.sample(data, width, *bounds, 1)

    for index in classified.cpu_indices:
        region = regions[index]
        results[index] = sample_region(
            frame, region.x, region.y, region.width, region.height, region.strategy
        )

    return [(region.region_id, color) for region, color in zip(regions, results)]


__all__ = [
    "RegionParams",
    "Bounds",
    "SlotAssignment",
    "ClassifiedRegions",
    "aligned_stride",
    "classify_regions",
    "clamp_region",
    "sample_regions",
]