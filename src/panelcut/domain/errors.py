"""Exceptions raised inside the cutting optimizer.

These never escape ``CuttingOptimizer.optimize``; the optimizer converts
them into a failed OptimizationResult carrying the same message and kind.
"""

from __future__ import annotations

from enum import Enum

from .results import FailureKind


class FitFailureReason(str, Enum):
    """Why an individual part cannot be cut from any stock row."""

    TOO_LARGE = "too_large"
    THICKNESS = "thickness"
    MATERIAL = "material"
    GRAIN = "grain"
    NO_STOCK = "no_stock"


class CuttingError(Exception):
    """Base class for optimizer failures.

    Attributes:
        message: Human-readable diagnostic.
        kind: Failure category reported on the result.
    """

    kind: FailureKind = FailureKind.INTERNAL

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class InputValidationError(CuttingError):
    """A stock or part row, or the kerf, is invalid."""

    kind = FailureKind.INPUT_INVALID


class CapacityError(CuttingError):
    """Aggregate compatible stock is smaller than the aggregate demand."""

    kind = FailureKind.CAPACITY

    def __init__(self, message: str, shortfall: float = 0.0) -> None:
        self.shortfall = shortfall
        super().__init__(message)


class FitError(CuttingError):
    """An individual part fits no stock row."""

    kind = FailureKind.FIT

    def __init__(
        self,
        message: str,
        reason: FitFailureReason,
        part_index: int | None = None,
    ) -> None:
        self.reason = reason
        self.part_index = part_index
        super().__init__(message)


class PlacementExhaustedError(CuttingError):
    """Stock ran out before every instance was placed.

    Attributes:
        unplaced: Mapping of part label to the number of unplaced instances.
    """

    kind = FailureKind.PLACEMENT_EXHAUSTED

    def __init__(self, message: str, unplaced: dict[str, int]) -> None:
        self.unplaced = unplaced
        super().__init__(message)
