"""Axis-aligned rectangle primitives for free-space bookkeeping.

Every comparison applies EPSILON so that parts with repeating-decimal
dimensions still fit regions they exactly fill.
"""

from __future__ import annotations

from typing import Iterable

from .value_objects import EPSILON, FreeRegion


def overlaps(a: FreeRegion, b: FreeRegion) -> bool:
    """Check whether two rectangles overlap with positive area.

    Rectangles that only touch along an edge do not overlap.
    """
    return (
        a.x < b.right - EPSILON
        and b.x < a.right - EPSILON
        and a.y < b.bottom - EPSILON
        and b.y < a.bottom - EPSILON
    )


def inflate(rect: FreeRegion, kerf: float) -> FreeRegion:
    """Grow a rectangle by ``kerf`` on its trailing (right and bottom) edges."""
    return FreeRegion(rect.x, rect.y, rect.width + kerf, rect.height + kerf)


def _positive(regions: Iterable[FreeRegion]) -> list[FreeRegion]:
    return [r for r in regions if r.width > EPSILON and r.height > EPSILON]


def subtract(region: FreeRegion, cut: FreeRegion) -> list[FreeRegion]:
    """Remove ``cut`` from ``region``.

    Returns the maximal right, left, top and bottom remainders of the
    region around the cut. Each remainder spans the full region on the
    other axis, so remainders may overlap each other.

    Args:
        region: The free region to cut into.
        cut: The occupied rectangle.

    Returns:
        ``[region]`` if the two do not overlap, otherwise the remainders
        with positive extent.
    """
    if not overlaps(region, cut):
        return [region]

    return _positive(
        [
            # Right
            FreeRegion(cut.right, region.y, region.right - cut.right, region.height),
            # Left
            FreeRegion(region.x, region.y, cut.x - region.x, region.height),
            # Top
            FreeRegion(region.x, region.y, region.width, cut.y - region.y),
            # Bottom
            FreeRegion(region.x, cut.bottom, region.width, region.bottom - cut.bottom),
        ]
    )


def split_after_placement(
    region: FreeRegion,
    footprint_width: float,
    footprint_height: float,
    place_x: float,
    place_y: float,
    kerf: float,
) -> list[FreeRegion]:
    """Split a region around a freshly placed part.

    The cut is the footprint inflated by ``kerf`` on its right and bottom
    edges, so the next part starts at least one kerf away from this one.

    Returns:
        Right-of-cut, below-cut, left-of-cut and above-cut regions, in that
        order, keeping only those with positive extent.
    """
    cut = FreeRegion(place_x, place_y, footprint_width + kerf, footprint_height + kerf)
    if not overlaps(region, cut):
        return [region]

    return _positive(
        [
            FreeRegion(cut.right, region.y, region.right - cut.right, region.height),
            FreeRegion(region.x, cut.bottom, region.width, region.bottom - cut.bottom),
            FreeRegion(region.x, region.y, cut.x - region.x, region.height),
            FreeRegion(region.x, region.y, region.width, cut.y - region.y),
        ]
    )


def prune_contained(regions: Iterable[FreeRegion]) -> list[FreeRegion]:
    """Drop regions lying entirely inside another region.

    Of two identical regions the earlier one is kept. Insertion order is
    otherwise preserved.
    """
    candidates = list(regions)
    kept: list[FreeRegion] = []
    for i, region in enumerate(candidates):
        redundant = False
        for j, other in enumerate(candidates):
            if i == j or not other.contains(region):
                continue
            # Identical pair: keep the first occurrence only
            if region.contains(other) and i < j:
                continue
            redundant = True
            break
        if not redundant:
            kept.append(region)
    return kept
