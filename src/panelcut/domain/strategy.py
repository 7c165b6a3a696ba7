"""Optimization philosophy presets and placement scoring weights.

Each philosophy maps to a fixed, immutable weight record. Only the MIXED
philosophy accepts caller-supplied weights.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OptimizationPhilosophy(str, Enum):
    """Named bias for the best-fit placement score."""

    MAXIMUM_YIELD = "maximum_yield"
    MINIMUM_CUTS = "minimum_cuts"
    GRAIN_MATCHING = "grain_matching"
    MIXED = "mixed"


class PlacementMode(str, Enum):
    """Free-region selection policy.

    Attributes:
        BEST_FIT: Lowest weighted score (minimum waste by default).
        FIRST_FIT: Lowest region index in insertion order.
    """

    BEST_FIT = "best_fit"
    FIRST_FIT = "first_fit"


@dataclass(frozen=True)
class OptimizationWeights:
    """Weights applied to the terms of the best-fit score.

    Attributes:
        material_efficiency: Weight of the leftover waste area.
        cutting_simplicity: Weight of the penalty for leaving two leftover
            strips instead of one (each extra strip costs a cut).
        grain_matching: Weight of the penalty for rotating a part whose
            grain is unconstrained away from its natural orientation.
    """

    material_efficiency: float = 1.0
    cutting_simplicity: float = 0.0
    grain_matching: float = 0.0

    def __post_init__(self) -> None:
        for name in ("material_efficiency", "cutting_simplicity", "grain_matching"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"Weight '{name}' must be between 0 and 1, got {value}")

    def score(
        self,
        waste: float,
        leftover_strips: int,
        footprint_area: float,
        rotated: bool,
    ) -> float:
        """Weighted best-fit score of a candidate placement (lower is better)."""
        return (
            self.material_efficiency * waste
            + self.cutting_simplicity * leftover_strips * footprint_area
            + self.grain_matching * (footprint_area if rotated else 0.0)
        )


DEFAULT_WEIGHTS: dict[OptimizationPhilosophy, OptimizationWeights] = {
    OptimizationPhilosophy.MAXIMUM_YIELD: OptimizationWeights(1.0, 0.0, 0.0),
    OptimizationPhilosophy.MINIMUM_CUTS: OptimizationWeights(0.4, 1.0, 0.0),
    OptimizationPhilosophy.GRAIN_MATCHING: OptimizationWeights(0.6, 0.0, 1.0),
    OptimizationPhilosophy.MIXED: OptimizationWeights(0.6, 0.3, 0.3),
}


@dataclass(frozen=True)
class OptimizationStrategy:
    """A philosophy together with its effective weights and placement mode.

    Build instances with :meth:`preset` or :meth:`mixed`; the default
    instance is the maximum-yield best-fit strategy.
    """

    philosophy: OptimizationPhilosophy = OptimizationPhilosophy.MAXIMUM_YIELD
    weights: OptimizationWeights = field(
        default_factory=lambda: DEFAULT_WEIGHTS[OptimizationPhilosophy.MAXIMUM_YIELD]
    )
    mode: PlacementMode = PlacementMode.BEST_FIT

    @classmethod
    def preset(
        cls,
        philosophy: OptimizationPhilosophy | str,
        mode: PlacementMode | str = PlacementMode.BEST_FIT,
    ) -> OptimizationStrategy:
        """Strategy using a philosophy's default weights."""
        philosophy = OptimizationPhilosophy(philosophy)
        return cls(philosophy, DEFAULT_WEIGHTS[philosophy], PlacementMode(mode))

    @classmethod
    def mixed(
        cls,
        weights: OptimizationWeights,
        mode: PlacementMode | str = PlacementMode.BEST_FIT,
    ) -> OptimizationStrategy:
        """MIXED strategy with caller-supplied weights."""
        return cls(OptimizationPhilosophy.MIXED, weights, PlacementMode(mode))

    @classmethod
    def resolve(
        cls,
        philosophy: OptimizationPhilosophy | str,
        weights: OptimizationWeights | None = None,
        mode: PlacementMode | str = PlacementMode.BEST_FIT,
    ) -> OptimizationStrategy:
        """Build a strategy from a philosophy and optional override weights.

        Raises:
            ValueError: If override weights are given for a preset other
                than MIXED.
        """
        philosophy = OptimizationPhilosophy(philosophy)
        if weights is None:
            return cls.preset(philosophy, mode)
        if philosophy != OptimizationPhilosophy.MIXED:
            raise ValueError(
                f"Custom weights are only accepted for the 'mixed' philosophy, "
                f"not '{philosophy.value}'"
            )
        return cls.mixed(weights, mode)
