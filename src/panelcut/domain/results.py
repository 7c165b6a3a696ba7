"""Placement and optimization result models.

All dataclasses are frozen; a returned OptimizationResult is a pure value
that the caller may store verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .value_objects import FreeRegion, PartRequirement, StockDefinition


class FailureKind(str, Enum):
    """Category of a failed optimization."""

    INPUT_INVALID = "input_invalid"
    CAPACITY = "capacity"
    FIT = "fit"
    PLACEMENT_EXHAUSTED = "placement_exhausted"
    INTERNAL = "internal"


@dataclass(frozen=True)
class PartInstance:
    """A single physical part to be placed.

    Attributes:
        row: Index of the requirement in the optimizer's sorted part list.
        instance: Instance number within that row, assigned once at
            demand expansion.
        part: The requirement this instance belongs to.
    """

    row: int
    instance: int
    part: PartRequirement

    @property
    def key(self) -> tuple[int, int]:
        return (self.row, self.instance)

    @property
    def area(self) -> float:
        return self.part.area


@dataclass(frozen=True)
class Placement:
    """One part instance seated on one sheet instance.

    Coordinates are the top-left corner in sheet-local millimetres, with x
    along the stock length and y along the stock width.

    Attributes:
        row: Index into OptimizationResult.sorted_parts.
        instance: Instance number within the row.
        x: Horizontal position from the sheet's left edge.
        y: Vertical position from the sheet's top edge.
        rotated: True if the part's length and width were swapped.
        length: Natural length of the part.
        width: Natural width of the part (the stock width for lumber).
        name: Optional display name carried from the requirement.
    """

    row: int
    instance: int
    x: float
    y: float
    rotated: bool
    length: float
    width: float
    name: str | None = None

    @property
    def part_id(self) -> str:
        """Display identifier in ``<row>-<instance>`` form."""
        return f"{self.row}-{self.instance}"

    @property
    def key(self) -> tuple[int, int]:
        return (self.row, self.instance)

    @property
    def footprint_width(self) -> float:
        """Extent along the sheet's x axis (accounts for rotation)."""
        return self.width if self.rotated else self.length

    @property
    def footprint_height(self) -> float:
        """Extent along the sheet's y axis (accounts for rotation)."""
        return self.length if self.rotated else self.width

    @property
    def area(self) -> float:
        return self.length * self.width

    def rect(self) -> FreeRegion:
        """The footprint as a rectangle."""
        return FreeRegion(self.x, self.y, self.footprint_width, self.footprint_height)

    def inflated(self, kerf: float) -> FreeRegion:
        """The footprint grown by ``kerf`` on its right and bottom edges."""
        return FreeRegion(
            self.x,
            self.y,
            self.footprint_width + kerf,
            self.footprint_height + kerf,
        )


@dataclass(frozen=True)
class SheetUsage:
    """One consumed physical stock piece and the parts cut from it.

    Attributes:
        sheet_id: Human-readable identifier ("Sheet-1", "Lumber-2").
        stock_index: Index of the stock row in the caller's stock list.
        stock: The stock row this piece was drawn from.
        placements: Placements in the order they were made.
        used_area: Sum of placed footprint areas.
        waste_area: Sheet area minus used area.
        free_regions: Residual free regions, for visualization.
    """

    sheet_id: str
    stock_index: int
    stock: StockDefinition
    placements: tuple[Placement, ...]
    used_area: float
    waste_area: float
    free_regions: tuple[FreeRegion, ...] = ()

    @property
    def sheet_area(self) -> float:
        return self.stock.area

    @property
    def piece_count(self) -> int:
        return len(self.placements)

    @property
    def efficiency(self) -> float:
        """Used area as a percentage of the sheet area."""
        if self.sheet_area <= 0:
            return 0.0
        return self.used_area / self.sheet_area * 100


@dataclass(frozen=True)
class OptimizationResult:
    """Outcome of one optimization call.

    On success ``sheet_usages`` lists every consumed stock piece. On
    failure ``message`` explains which constraint could not be satisfied
    and ``failure_kind`` categorizes it.

    Attributes:
        success: Whether every requested instance was placed.
        message: Summary on success, diagnostic on failure.
        sheet_usages: Consumed stock pieces in allocation order.
        total_sheets: Number of consumed stock pieces.
        total_waste: Waste area summed over all consumed pieces.
        sorted_parts: Part rows in the order placements reference them.
        failure_kind: Category of the failure, None on success.
    """

    success: bool
    message: str
    sheet_usages: tuple[SheetUsage, ...] = ()
    total_sheets: int = 0
    total_waste: float = 0.0
    sorted_parts: tuple[PartRequirement, ...] = ()
    failure_kind: FailureKind | None = None

    @classmethod
    def succeeded(
        cls,
        message: str,
        sheet_usages: tuple[SheetUsage, ...],
        sorted_parts: tuple[PartRequirement, ...],
    ) -> OptimizationResult:
        return cls(
            success=True,
            message=message,
            sheet_usages=sheet_usages,
            total_sheets=len(sheet_usages),
            total_waste=sum(usage.waste_area for usage in sheet_usages),
            sorted_parts=sorted_parts,
        )

    @classmethod
    def failed(
        cls,
        message: str,
        kind: FailureKind,
        sorted_parts: tuple[PartRequirement, ...] = (),
    ) -> OptimizationResult:
        return cls(
            success=False,
            message=message,
            sorted_parts=sorted_parts,
            failure_kind=kind,
        )

    @property
    def total_placements(self) -> int:
        return sum(usage.piece_count for usage in self.sheet_usages)

    @property
    def total_used_area(self) -> float:
        return sum(usage.used_area for usage in self.sheet_usages)

    @property
    def efficiency(self) -> float:
        """Overall used area as a percentage of consumed stock area."""
        total = sum(usage.sheet_area for usage in self.sheet_usages)
        if total <= 0:
            return 0.0
        return self.total_used_area / total * 100
