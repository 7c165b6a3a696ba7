"""Domain services for cutting optimization.

This package provides:
- Free-space bookkeeping and candidate search for one sheet
- Single-sheet and lumber packers
- Feasibility pre-checks
- The multi-sheet allocator (the optimizer boundary)
- Cut sequence generation for finished layouts
"""

from .allocator import CuttingOptimizer, expand_demand, optimize_cuts, sort_parts, verify_result
from .cut_sequence import CutSequence, CutSequenceGenerator, CutStep, CutType
from .feasibility import FeasibilityChecker, can_cut, is_compatible
from .free_space import FreeSpaceCatalogue, PlacementCandidate
from .sheet_packer import LumberPacker, PackerConfig, SheetPacker, SheetPackResult

__all__ = [
    "CutSequence",
    "CutSequenceGenerator",
    "CutStep",
    "CutType",
    "CuttingOptimizer",
    "FeasibilityChecker",
    "FreeSpaceCatalogue",
    "LumberPacker",
    "PackerConfig",
    "PlacementCandidate",
    "SheetPackResult",
    "SheetPacker",
    "can_cut",
    "expand_demand",
    "is_compatible",
    "optimize_cuts",
    "sort_parts",
    "verify_result",
]
