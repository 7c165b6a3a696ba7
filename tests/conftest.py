"""Pytest configuration and shared fixtures for cutting optimizer tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from panelcut.domain import (
    CuttingOptimizer,
    GrainDirection,
    MaterialType,
    PartRequirement,
    StockDefinition,
)


JOBS_PATH = Path(__file__).parent / "fixtures" / "jobs"


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: end-to-end tests through the CLI and REST API"
    )
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared fixtures
# =============================================================================


@pytest.fixture
def optimizer() -> CuttingOptimizer:
    """Optimizer with the default configuration."""
    return CuttingOptimizer()


@pytest.fixture
def jobs_path() -> Path:
    """Directory holding the JSON job fixtures."""
    return JOBS_PATH


@pytest.fixture
def small_sheet() -> StockDefinition:
    """A single 100x100x18mm sheet."""
    return StockDefinition(length=100, width=100, thickness=18, quantity=1)


@pytest.fixture
def plywood_sheet() -> StockDefinition:
    """Three full 2440x1220x18mm sheets with vertical grain."""
    return StockDefinition(
        length=2440,
        width=1220,
        thickness=18,
        quantity=3,
        grain_direction=GrainDirection.VERTICAL,
    )


@pytest.fixture
def pine_stick() -> StockDefinition:
    """Two 2400mm lengths of 90x38 pine."""
    return StockDefinition(
        length=2400,
        width=90,
        thickness=38,
        quantity=2,
        material="pine",
        material_type=MaterialType.DIMENSIONAL,
    )


@pytest.fixture
def square_parts() -> list[PartRequirement]:
    """Four 50x50mm squares that exactly tile a 100x100 sheet."""
    return [PartRequirement(length=50, width=50, thickness=18, quantity=4)]
