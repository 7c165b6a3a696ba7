"""Single-sheet packing of part instances.

SheetPacker fills one sheet instance with as many of the given part
instances as fit, using the free-space catalogue for region bookkeeping.
LumberPacker is the one-dimensional variant for dimensional stock, tiling
parts along the stick length with a kerf between successive cuts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from ..grain import GrainPolicy
from ..results import PartInstance, Placement
from ..strategy import OptimizationStrategy
from ..value_objects import EPSILON, FreeRegion, StockDefinition
from .free_space import FreeSpaceCatalogue

logger = logging.getLogger(__name__)

DEFAULT_MAX_PLACEMENT_ATTEMPTS = 100_000


@dataclass(frozen=True)
class PackerConfig:
    """Configuration shared by every packing call of one optimization.

    Attributes:
        kerf: Saw blade width in mm.
        strategy: Scoring weights and region selection mode.
        max_placement_attempts: Cap on candidate searches per sheet, to
            bound worst-case work on pathological inputs.
    """

    kerf: float = 0.0
    strategy: OptimizationStrategy = field(default_factory=OptimizationStrategy)
    max_placement_attempts: int = DEFAULT_MAX_PLACEMENT_ATTEMPTS

    def __post_init__(self) -> None:
        if self.kerf < 0:
            raise ValueError("Kerf must be non-negative")
        if self.max_placement_attempts <= 0:
            raise ValueError("Maximum placement attempts must be positive")


@dataclass(frozen=True)
class SheetPackResult:
    """Outcome of packing one sheet instance.

    Attributes:
        placements: Placements in the order they were made.
        free_regions: Free regions left on the sheet.
        used_area: Sum of placed footprint areas.
        waste_area: Sheet area minus used area.
        unplaced: Instances that did not fit, in packing order.
    """

    placements: tuple[Placement, ...]
    free_regions: tuple[FreeRegion, ...]
    used_area: float
    waste_area: float
    unplaced: tuple[PartInstance, ...] = ()

    @property
    def placed_count(self) -> int:
        return len(self.placements)

    @property
    def is_complete(self) -> bool:
        """True if every offered instance was placed."""
        return not self.unplaced


def order_instances(instances: Sequence[PartInstance]) -> list[PartInstance]:
    """Sort instances by area descending, ties by row then instance."""
    return sorted(instances, key=lambda i: (-i.area, i.row, i.instance))


class SheetPacker:
    """Packs part instances onto one sheet of stock.

    The packer runs pass after pass over the outstanding instances until a
    full pass places nothing. Within a pass, once an instance of a row
    fails, the rest of that row is skipped since free space only shrinks.
    """

    def __init__(self, config: PackerConfig | None = None) -> None:
        self.config = config or PackerConfig()
        self.grain_policy = GrainPolicy()

    def pack(
        self,
        stock: StockDefinition,
        instances: Sequence[PartInstance],
    ) -> SheetPackResult:
        """Place as many instances as fit on a single piece of ``stock``.

        Args:
            stock: The stock row the sheet is drawn from.
            instances: Candidate instances, in any order.

        Returns:
            SheetPackResult with placements, residual free space and the
            instances left over.
        """
        strategy = self.config.strategy
        catalogue = FreeSpaceCatalogue(stock.length, stock.width, self.config.kerf)
        placements: list[Placement] = []
        remaining = order_instances(instances)
        attempts = 0

        while remaining:
            placed_this_pass = False
            failed_rows: set[int] = set()
            still_remaining: list[PartInstance] = []

            for instance in remaining:
                if instance.row in failed_rows:
                    still_remaining.append(instance)
                    continue
                if attempts >= self.config.max_placement_attempts:
                    logger.warning(
                        "Placement attempt cap of %d reached on %s",
                        self.config.max_placement_attempts,
                        stock.describe(),
                    )
                    still_remaining.append(instance)
                    continue

                attempts += 1
                orientations = self.grain_policy.orientations(instance.part, stock)
                candidate = catalogue.find_candidate(
                    orientations, placements, strategy.mode, strategy.weights
                )
                if candidate is None:
                    failed_rows.add(instance.row)
                    still_remaining.append(instance)
                    continue

                catalogue.place(candidate)
                placements.append(
                    Placement(
                        row=instance.row,
                        instance=instance.instance,
                        x=candidate.x,
                        y=candidate.y,
                        rotated=candidate.orientation.rotated,
                        length=instance.part.length,
                        width=instance.part.width,
                        name=instance.part.name,
                    )
                )
                placed_this_pass = True

            remaining = still_remaining
            if not placed_this_pass or attempts >= self.config.max_placement_attempts:
                break

        return _build_result(stock, placements, catalogue.residual_regions(), remaining)


class LumberPacker:
    """Packs part instances along one stick of dimensional lumber.

    Each part occupies its own length at the full stock width, is never
    rotated, and is followed by one kerf before the next cut.
    """

    def __init__(self, config: PackerConfig | None = None) -> None:
        self.config = config or PackerConfig()

    def pack(
        self,
        stock: StockDefinition,
        instances: Sequence[PartInstance],
    ) -> SheetPackResult:
        """Tile instances along ``stock``, longest first."""
        kerf = self.config.kerf
        ordered = sorted(instances, key=lambda i: (-i.part.length, i.row, i.instance))
        placements: list[Placement] = []
        unplaced: list[PartInstance] = []
        cursor = 0.0

        for instance in ordered:
            end = cursor + instance.part.length
            if end > stock.length + EPSILON:
                unplaced.append(instance)
                continue
            placements.append(
                Placement(
                    row=instance.row,
                    instance=instance.instance,
                    x=cursor,
                    y=0.0,
                    rotated=False,
                    length=instance.part.length,
                    width=stock.width,
                    name=instance.part.name,
                )
            )
            logger.debug(
                "Cut %.1fmm at %.1fmm on %s",
                instance.part.length,
                cursor,
                stock.describe(),
            )
            cursor = end + kerf

        free: tuple[FreeRegion, ...] = ()
        if stock.length - cursor > EPSILON:
            free = (FreeRegion(cursor, 0.0, stock.length - cursor, stock.width),)
        return _build_result(stock, placements, free, unplaced)


def packer_for(stock: StockDefinition, config: PackerConfig) -> SheetPacker | LumberPacker:
    """Return the packer variant matching the stock's material type."""
    if stock.is_sheet:
        return SheetPacker(config)
    return LumberPacker(config)


def _build_result(
    stock: StockDefinition,
    placements: Sequence[Placement],
    free_regions: tuple[FreeRegion, ...],
    unplaced: Sequence[PartInstance],
) -> SheetPackResult:
    used = sum(p.footprint_width * p.footprint_height for p in placements)
    return SheetPackResult(
        placements=tuple(placements),
        free_regions=free_regions,
        used_area=used,
        waste_area=max(stock.area - used, 0.0),
        unplaced=tuple(unplaced),
    )
