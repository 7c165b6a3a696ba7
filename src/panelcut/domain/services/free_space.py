"""Free-space catalogue for a single sheet instance.

The catalogue keeps a list of maximal free rectangles. After each placement
the kerf-inflated footprint is subtracted from every region it touches and
regions contained in others are pruned, so the union of the regions always
equals the sheet minus the kerf-inflated placements.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..geometry import inflate, overlaps, prune_contained, split_after_placement, subtract
from ..results import Placement
from ..strategy import OptimizationWeights, PlacementMode
from ..value_objects import EPSILON, FreeRegion, Orientation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacementCandidate:
    """An accepting (region, orientation) pair.

    Attributes:
        region_index: Index of the region in the catalogue.
        region: The accepting free region.
        orientation: The footprint that fits the region.
        orientation_index: Position of the orientation in the legal list.
        waste: Leftover area of the region around the footprint.
        leftover_strips: Number of non-empty leftover strips (0 to 2).
        score: Weighted best-fit score, lower is better.
    """

    region_index: int
    region: FreeRegion
    orientation: Orientation
    orientation_index: int
    waste: float
    leftover_strips: int
    score: float

    @property
    def x(self) -> float:
        return self.region.x

    @property
    def y(self) -> float:
        return self.region.y

    def rect(self) -> FreeRegion:
        """The footprint at the candidate position."""
        return FreeRegion(self.x, self.y, self.orientation.width, self.orientation.height)


class FreeSpaceCatalogue:
    """Mutable free-region list owned by one sheet packing call.

    Args:
        sheet_length: Sheet extent along x.
        sheet_width: Sheet extent along y.
        kerf: Saw blade width in mm.
    """

    def __init__(self, sheet_length: float, sheet_width: float, kerf: float = 0.0) -> None:
        self.sheet_length = sheet_length
        self.sheet_width = sheet_width
        self.kerf = kerf
        self._regions: list[FreeRegion] = [FreeRegion(0.0, 0.0, sheet_length, sheet_width)]

    @property
    def regions(self) -> tuple[FreeRegion, ...]:
        return tuple(self._regions)

    def residual_regions(self) -> tuple[FreeRegion, ...]:
        """Current free regions, for reporting and visualization."""
        return tuple(self._regions)

    def accepts(self, region: FreeRegion, orientation: Orientation) -> bool:
        """Check whether ``orientation`` plus kerf fits inside ``region``."""
        return (
            orientation.width + self.kerf <= region.width + EPSILON
            and orientation.height + self.kerf <= region.height + EPSILON
        )

    def candidates(
        self,
        orientations: Sequence[Orientation],
        weights: OptimizationWeights,
    ) -> list[PlacementCandidate]:
        """Every accepting (region, orientation) pair, unsorted."""
        found: list[PlacementCandidate] = []
        for region_index, region in enumerate(self._regions):
            for orientation_index, orientation in enumerate(orientations):
                if not self.accepts(region, orientation):
                    continue
                spare_x = max(region.width - orientation.width - self.kerf, 0.0)
                spare_y = max(region.height - orientation.height - self.kerf, 0.0)
                waste = spare_x * spare_y
                strips = int(spare_x > EPSILON) + int(spare_y > EPSILON)
                found.append(
                    PlacementCandidate(
                        region_index=region_index,
                        region=region,
                        orientation=orientation,
                        orientation_index=orientation_index,
                        waste=waste,
                        leftover_strips=strips,
                        score=weights.score(
                            waste, strips, orientation.area, orientation.rotated
                        ),
                    )
                )
        return found

    def find_candidate(
        self,
        orientations: Sequence[Orientation],
        placements: Sequence[Placement],
        mode: PlacementMode = PlacementMode.BEST_FIT,
        weights: OptimizationWeights | None = None,
    ) -> PlacementCandidate | None:
        """Select where to put a part on this sheet.

        Aligned pairs are preferred over cross-grain pairs. Within a tier,
        best-fit takes the lowest score and first-fit the lowest region
        index; remaining ties go to the lower region index and then the
        earlier orientation.

        Args:
            orientations: Legal footprints of the part, preferred first.
            placements: Placements already made on this sheet.
            mode: Region selection policy.
            weights: Scoring weights for best-fit; defaults to pure waste.

        Returns:
            The first candidate that passes re-validation, or None.
        """
        weights = weights or OptimizationWeights()
        found = self.candidates(orientations, weights)

        if mode == PlacementMode.FIRST_FIT:
            found.sort(
                key=lambda c: (not c.orientation.aligned, c.region_index, c.orientation_index)
            )
        else:
            found.sort(
                key=lambda c: (
                    not c.orientation.aligned,
                    c.score,
                    c.region_index,
                    c.orientation_index,
                )
            )

        for candidate in found:
            if self.is_valid(candidate, placements):
                return candidate
            logger.debug(
                "Rejected conflicting candidate at (%.2f, %.2f) in region %d",
                candidate.x,
                candidate.y,
                candidate.region_index,
            )
        return None

    def is_valid(self, candidate: PlacementCandidate, placements: Sequence[Placement]) -> bool:
        """Re-validate a candidate against the sheet bounds and prior placements."""
        rect = candidate.rect()
        if (
            rect.x < -EPSILON
            or rect.y < -EPSILON
            or rect.right > self.sheet_length + EPSILON
            or rect.bottom > self.sheet_width + EPSILON
        ):
            return False

        cut = inflate(rect, self.kerf)
        for placement in placements:
            if abs(placement.x - rect.x) <= EPSILON and abs(placement.y - rect.y) <= EPSILON:
                return False
            if overlaps(cut, placement.inflated(self.kerf)):
                return False
        return True

    def place(self, candidate: PlacementCandidate) -> None:
        """Commit a candidate and update the free regions around it."""
        orientation = candidate.orientation
        cut = inflate(candidate.rect(), self.kerf)

        updated: list[FreeRegion] = []
        for index, region in enumerate(self._regions):
            if index == candidate.region_index:
                updated.extend(
                    split_after_placement(
                        region,
                        orientation.width,
                        orientation.height,
                        candidate.x,
                        candidate.y,
                        self.kerf,
                    )
                )
            else:
                updated.extend(subtract(region, cut))

        self._regions = prune_contained(updated)
        logger.debug(
            "Placed %.1fx%.1f at (%.2f, %.2f); %d free regions",
            orientation.width,
            orientation.height,
            candidate.x,
            candidate.y,
            len(self._regions),
        )
