"""Core stock, part and free-space value objects.

All dimensions are in millimetres. Stock and part rows are plain frozen
dataclasses; positivity of their dimensions is checked by the optimizer's
pre-check so that an invalid row is reported instead of raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Tolerance for every boundary, fit and overlap comparison (mm).
EPSILON = 0.01


class MaterialType(str, Enum):
    """Kind of stock material.

    Attributes:
        SHEET: Two-axis sheet goods (plywood, MDF, board stock).
        DIMENSIONAL: Linear lumber cut along its length only.
    """

    SHEET = "sheet"
    DIMENSIONAL = "dimensional"


class GrainDirection(str, Enum):
    """Fiber orientation of a sheet or a part."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @classmethod
    def parse(cls, value: GrainDirection | str | None) -> GrainDirection | None:
        """Parse a grain value, case-insensitively.

        Args:
            value: Enum member, string, or None/empty for "unset".

        Returns:
            The matching GrainDirection, or None when unset.

        Raises:
            ValueError: If the string names no grain direction.
        """
        if value is None or isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        if not text or text == "none":
            return None
        try:
            return cls(text)
        except ValueError:
            raise ValueError(
                f"Invalid grain direction '{value}', expected 'horizontal' or 'vertical'"
            ) from None


def _coerce_enums(row: StockDefinition | PartRequirement) -> None:
    """Convert plain-string material types and grains to their enums.

    Unrecognized values are left as given so that the optimizer's pre-check
    can report them as invalid input.
    """
    if row.material_type in list(MaterialType):
        object.__setattr__(row, "material_type", MaterialType(row.material_type))
    grain = row.grain_direction
    if grain is None or isinstance(grain, GrainDirection):
        return
    if str(grain).strip().lower() in ("", "none", *(g.value for g in GrainDirection)):
        object.__setattr__(row, "grain_direction", GrainDirection.parse(grain))


@dataclass(frozen=True)
class StockDefinition:
    """One row of available stock inventory.

    Attributes:
        length: Length in mm (the sheet's x axis).
        width: Width in mm (the sheet's y axis).
        thickness: Thickness in mm.
        quantity: Number of identical physical pieces available.
        material: Optional material label (e.g. "oak", "birch ply").
        material_type: Sheet goods or dimensional lumber.
        grain_direction: Grain of the sheet, meaningful for sheet goods only.
        stock_id: Optional warehouse record identifier.
    """

    length: float
    width: float
    thickness: float
    quantity: int = 1
    material: str | None = None
    material_type: MaterialType = MaterialType.SHEET
    grain_direction: GrainDirection | None = None
    stock_id: str | None = None

    def __post_init__(self) -> None:
        _coerce_enums(self)

    @property
    def area(self) -> float:
        """Area of one piece in square mm."""
        return self.length * self.width

    @property
    def is_sheet(self) -> bool:
        return self.material_type == MaterialType.SHEET

    def describe(self) -> str:
        """Short human-readable description, e.g. ``2440x1220x18mm oak sheet``."""
        material = f" {self.material}" if self.material else ""
        return (
            f"{self.length:g}x{self.width:g}x{self.thickness:g}mm"
            f"{material} {self.material_type.value}"
        )


@dataclass(frozen=True)
class PartRequirement:
    """One row of required parts.

    A requirement with quantity N stands for N identical rectangular
    instances, each of which must receive exactly one placement.
    """

    length: float
    width: float
    thickness: float
    quantity: int = 1
    material: str | None = None
    material_type: MaterialType = MaterialType.SHEET
    grain_direction: GrainDirection | None = None
    name: str | None = None

    def __post_init__(self) -> None:
        _coerce_enums(self)

    @property
    def area(self) -> float:
        """Area of a single instance in square mm."""
        return self.length * self.width

    @property
    def total_area(self) -> float:
        """Area of all instances in square mm."""
        return self.area * self.quantity

    @property
    def label(self) -> str:
        """Display name, falling back to the part's dimensions."""
        if self.name:
            return self.name
        return f"{self.length:g}x{self.width:g}x{self.thickness:g}mm"


@dataclass(frozen=True)
class FreeRegion:
    """Axis-aligned rectangle of unused area on one sheet instance.

    Regions are candidate insertion sites; two regions of the same sheet
    may overlap.
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def contains(self, other: FreeRegion) -> bool:
        """Check whether ``other`` lies entirely inside this region."""
        return (
            other.x >= self.x - EPSILON
            and other.y >= self.y - EPSILON
            and other.right <= self.right + EPSILON
            and other.bottom <= self.bottom + EPSILON
        )


@dataclass(frozen=True)
class Orientation:
    """A candidate footprint for a part on a particular stock.

    Attributes:
        width: Extent along the stock length (x axis).
        height: Extent along the stock width (y axis).
        rotated: True if the part's length and width are swapped.
        aligned: Grain alignment label for reporting and tie-breaking.
    """

    width: float
    height: float
    rotated: bool
    aligned: bool = True

    @property
    def area(self) -> float:
        return self.width * self.height
