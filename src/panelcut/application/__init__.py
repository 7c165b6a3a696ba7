"""Application layer - use cases and job configuration."""

from .commands import OptimizeCutsCommand

__all__ = ["OptimizeCutsCommand"]
