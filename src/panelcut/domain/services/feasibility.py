"""Pre-placement feasibility checks.

Runs before any packing: validates the input rows, verifies that every
part fits at least one compatible stock row, and compares aggregate demand
with aggregate compatible stock per compatibility class.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Sequence

from ..errors import (
    CapacityError,
    CuttingError,
    FitError,
    FitFailureReason,
    InputValidationError,
)
from ..grain import GrainPolicy
from ..value_objects import (
    EPSILON,
    GrainDirection,
    MaterialType,
    PartRequirement,
    StockDefinition,
)

logger = logging.getLogger(__name__)


def normalize_material(material: str | None) -> str | None:
    """Lower-case and strip a material label; empty labels are unset."""
    if material is None:
        return None
    text = material.strip().lower()
    return text or None


def materials_match(a: str | None, b: str | None) -> bool:
    """Material labels match case-insensitively, or when either is unset."""
    a, b = normalize_material(a), normalize_material(b)
    return a is None or b is None or a == b


def thickness_matches(a: float, b: float) -> bool:
    return abs(a - b) <= EPSILON


def is_compatible(part: PartRequirement, stock: StockDefinition) -> bool:
    """Check material type, thickness and material compatibility.

    Footprint is not considered; see :func:`can_cut` for that.
    """
    return (
        MaterialType(part.material_type) == MaterialType(stock.material_type)
        and thickness_matches(part.thickness, stock.thickness)
        and materials_match(part.material, stock.material)
    )


def can_cut(
    part: PartRequirement,
    stock: StockDefinition,
    policy: GrainPolicy | None = None,
) -> bool:
    """Check whether ``part`` can be cut from a bare piece of ``stock``.

    Dimensional parts must be no wider than the stock; sheet parts must fit
    in a grain-legal orientation.
    """
    if not is_compatible(part, stock):
        return False
    policy = policy or GrainPolicy()
    if stock.material_type == MaterialType.DIMENSIONAL:
        return policy.fits_any_rotation(part, stock)
    return policy.fits_stock(part, stock)


def stock_capacity(stock: StockDefinition) -> float:
    """Aggregate capacity of a stock row: area for sheets, length for lumber."""
    if stock.material_type == MaterialType.DIMENSIONAL:
        return stock.length * stock.quantity
    return stock.area * stock.quantity


def part_demand(part: PartRequirement) -> float:
    """Aggregate demand of a part row: area for sheets, length for lumber."""
    if part.material_type == MaterialType.DIMENSIONAL:
        return part.length * part.quantity
    return part.total_area


@dataclass(frozen=True)
class CompatibilityClass:
    """Key grouping parts that draw on the same stock."""

    material: str | None
    material_type: MaterialType
    thickness: float

    @classmethod
    def of(cls, part: PartRequirement) -> CompatibilityClass:
        return cls(
            normalize_material(part.material),
            MaterialType(part.material_type),
            round(part.thickness, 2),
        )

    def describe(self) -> str:
        material = self.material or "any material"
        unit = "length" if self.material_type == MaterialType.DIMENSIONAL else "area"
        return f"{material} {self.thickness:g}mm {self.material_type.value} ({unit})"


class FeasibilityChecker:
    """Validates an optimization request before any placement."""

    def __init__(self, grain_policy: GrainPolicy | None = None) -> None:
        self.grain_policy = grain_policy or GrainPolicy()

    def check(
        self,
        stocks: Sequence[StockDefinition],
        parts: Sequence[PartRequirement],
        kerf: float = 0.0,
    ) -> None:
        """Raise the first problem found.

        Args:
            stocks: Available stock rows.
            parts: Required part rows.
            kerf: Saw blade width in mm.

        Raises:
            InputValidationError: If a row or the kerf is invalid.
            FitError: If there is no stock, or a part fits no stock row.
            CapacityError: If a compatibility class lacks stock.
        """
        for error in self._errors(stocks, parts, kerf):
            logger.info("Feasibility check failed: %s", error.message)
            raise error

    def find_problems(
        self,
        stocks: Sequence[StockDefinition],
        parts: Sequence[PartRequirement],
        kerf: float = 0.0,
    ) -> list[CuttingError]:
        """Collect every problem rather than stopping at the first.

        Fit and capacity checks only run when the input rows are valid.
        """
        return list(self._errors(stocks, parts, kerf))

    def _errors(
        self,
        stocks: Sequence[StockDefinition],
        parts: Sequence[PartRequirement],
        kerf: float,
    ) -> Iterator[CuttingError]:
        input_errors = list(self._input_errors(stocks, parts, kerf))
        if input_errors:
            yield from input_errors
            return
        if not stocks:
            yield FitError("No suitable stock available", FitFailureReason.NO_STOCK)
            return
        fit_errors = list(self._fit_errors(stocks, parts))
        if fit_errors:
            yield from fit_errors
            return
        yield from self._capacity_errors(stocks, parts)

    def _input_errors(
        self,
        stocks: Sequence[StockDefinition],
        parts: Sequence[PartRequirement],
        kerf: float,
    ) -> Iterator[InputValidationError]:
        if not parts:
            yield InputValidationError("No parts to cut")
        if kerf < 0:
            yield InputValidationError(f"Kerf must be non-negative, got {kerf:g}")
        for number, stock in enumerate(stocks, start=1):
            yield from _row_errors(f"Stock row {number}", stock)
        for number, part in enumerate(parts, start=1):
            yield from _row_errors(f"Part row {number}", part)

    def _fit_errors(
        self,
        stocks: Sequence[StockDefinition],
        parts: Sequence[PartRequirement],
    ) -> Iterator[FitError]:
        for index, part in enumerate(parts):
            error = self._fit_error(index, part, stocks)
            if error is not None:
                yield error

    def _fit_error(
        self,
        index: int,
        part: PartRequirement,
        stocks: Sequence[StockDefinition],
    ) -> FitError | None:
        label = f"Part '{part.label}'"
        material_type = MaterialType(part.material_type)

        same_material = [
            s
            for s in stocks
            if MaterialType(s.material_type) == material_type
            and materials_match(part.material, s.material)
        ]
        if not same_material:
            material = part.material or "any material"
            return FitError(
                f"{label} has no stock of {material} ({material_type.value}); wrong material",
                FitFailureReason.MATERIAL,
                index,
            )

        same_thickness = [
            s for s in same_material if thickness_matches(part.thickness, s.thickness)
        ]
        if not same_thickness:
            if all(s.thickness < part.thickness for s in same_material):
                detail = "all compatible stock is too thin"
            else:
                detail = "no compatible stock has that thickness"
            return FitError(
                f"{label} needs {part.thickness:g}mm stock but {detail}; wrong thickness",
                FitFailureReason.THICKNESS,
                index,
            )

        if any(can_cut(part, s, self.grain_policy) for s in same_thickness):
            return None

        if any(
            s.material_type == MaterialType.SHEET
            and self.grain_policy.fits_any_rotation(part, s)
            for s in same_thickness
        ):
            return FitError(
                f"{label} fits only in a rotation its grain direction forbids; "
                "grain-incompatible",
                FitFailureReason.GRAIN,
                index,
            )

        return FitError(
            f"{label} ({part.length:g}x{part.width:g}mm) is too large to fit "
            "any compatible stock",
            FitFailureReason.TOO_LARGE,
            index,
        )

    def _capacity_errors(
        self,
        stocks: Sequence[StockDefinition],
        parts: Sequence[PartRequirement],
    ) -> Iterator[CapacityError]:
        demand: dict[CompatibilityClass, float] = {}
        representative: dict[CompatibilityClass, PartRequirement] = {}
        for part in parts:
            key = CompatibilityClass.of(part)
            demand[key] = demand.get(key, 0.0) + part_demand(part)
            representative.setdefault(key, part)

        for key, required in demand.items():
            part = representative[key]
            available = sum(stock_capacity(s) for s in stocks if is_compatible(part, s))
            logger.debug(
                "Capacity for %s: required %.1f, available %.1f",
                key.describe(),
                required,
                available,
            )
            if required > available + EPSILON:
                shortfall = required - available
                unit = "mm" if key.material_type == MaterialType.DIMENSIONAL else "mm²"
                yield CapacityError(
                    f"Insufficient capacity for {key.describe()}: cannot fit "
                    f"{required:,.0f}{unit} into {available:,.0f}{unit} of stock "
                    f"(short by {shortfall:,.0f}{unit})",
                    shortfall=shortfall,
                )


def _row_errors(
    label: str,
    row: StockDefinition | PartRequirement,
) -> Iterator[InputValidationError]:
    for name in ("length", "width", "thickness"):
        value = getattr(row, name)
        if value is None or value <= 0:
            yield InputValidationError(f"{label}: {name} must be positive, got {value}")
    if not isinstance(row.quantity, int) or row.quantity <= 0:
        yield InputValidationError(
            f"{label}: quantity must be a positive integer, got {row.quantity}"
        )
    try:
        MaterialType(row.material_type)
    except ValueError:
        yield InputValidationError(f"{label}: unknown material type '{row.material_type}'")
    try:
        GrainDirection.parse(row.grain_direction)
    except ValueError as exc:
        yield InputValidationError(f"{label}: {exc}")
