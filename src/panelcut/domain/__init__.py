"""Domain layer - cutting stock model and optimization logic."""

from .errors import (
    CapacityError,
    CuttingError,
    FitError,
    FitFailureReason,
    InputValidationError,
    PlacementExhaustedError,
)
from .grain import GrainPolicy
from .results import (
    FailureKind,
    OptimizationResult,
    PartInstance,
    Placement,
    SheetUsage,
)
from .services import (
    CuttingOptimizer,
    CutSequenceGenerator,
    FeasibilityChecker,
    PackerConfig,
    optimize_cuts,
)
from .strategy import (
    OptimizationPhilosophy,
    OptimizationStrategy,
    OptimizationWeights,
    PlacementMode,
)
from .value_objects import (
    EPSILON,
    FreeRegion,
    GrainDirection,
    MaterialType,
    Orientation,
    PartRequirement,
    StockDefinition,
)

__all__ = [
    "CapacityError",
    "CutSequenceGenerator",
    "CuttingError",
    "CuttingOptimizer",
    "EPSILON",
    "FailureKind",
    "FeasibilityChecker",
    "FitError",
    "FitFailureReason",
    "FreeRegion",
    "GrainDirection",
    "GrainPolicy",
    "InputValidationError",
    "MaterialType",
    "OptimizationPhilosophy",
    "OptimizationResult",
    "OptimizationStrategy",
    "OptimizationWeights",
    "Orientation",
    "PackerConfig",
    "PartInstance",
    "PartRequirement",
    "Placement",
    "PlacementExhaustedError",
    "PlacementMode",
    "SheetUsage",
    "StockDefinition",
    "optimize_cuts",
]
