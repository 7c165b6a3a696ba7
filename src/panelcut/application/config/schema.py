"""Pydantic models for cutting job configuration files.

A job file lists the available stock, the required parts, the saw kerf and
optional optimization settings. All models reject unknown keys.

Example:
    {
        "schema_version": "1.0",
        "kerf": 3.2,
        "stocks": [{"length": 2440, "width": 1220, "thickness": 18, "quantity": 2}],
        "parts": [{"length": 800, "width": 400, "thickness": 18, "quantity": 6}]
    }
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from panelcut.domain.services.sheet_packer import DEFAULT_MAX_PLACEMENT_ATTEMPTS
from panelcut.domain.strategy import (
    DEFAULT_WEIGHTS,
    OptimizationPhilosophy,
    PlacementMode,
)
from panelcut.domain.value_objects import GrainDirection, MaterialType

# Supported schema versions for job files
# Version 1.0: Initial schema with stock, parts, kerf and optimization settings
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})

_MIXED = DEFAULT_WEIGHTS[OptimizationPhilosophy.MIXED]


def _parse_grain(value: Any) -> GrainDirection | None:
    return GrainDirection.parse(value)


class StockConfigSchema(BaseModel):
    """One row of available stock.

    Attributes:
        length: Length in mm (sheet x axis).
        width: Width in mm (sheet y axis).
        thickness: Thickness in mm.
        quantity: Number of identical pieces available.
        material: Optional material label.
        material_type: "sheet" or "dimensional".
        grain_direction: Optional "horizontal" or "vertical".
        stock_id: Optional warehouse record identifier.
    """

    model_config = ConfigDict(extra="forbid")

    length: float = Field(..., gt=0, description="Stock length in mm")
    width: float = Field(..., gt=0, description="Stock width in mm")
    thickness: float = Field(..., gt=0, description="Stock thickness in mm")
    quantity: int = Field(default=1, ge=1, description="Pieces available")
    material: str | None = Field(default=None, description="Material label")
    material_type: MaterialType = Field(default=MaterialType.SHEET)
    grain_direction: GrainDirection | None = Field(default=None)
    stock_id: str | None = Field(default=None, description="Warehouse record id")

    @field_validator("grain_direction", mode="before")
    @classmethod
    def parse_grain(cls, v: Any) -> GrainDirection | None:
        """Accept grain values case-insensitively."""
        return _parse_grain(v)


class PartConfigSchema(BaseModel):
    """One row of required parts.

    Attributes:
        length: Length in mm.
        width: Width in mm.
        thickness: Thickness in mm, matched against stock thickness.
        quantity: Number of identical pieces required.
        material: Optional material label.
        material_type: "sheet" or "dimensional".
        grain_direction: Optional "horizontal" or "vertical".
        name: Optional display name.
    """

    model_config = ConfigDict(extra="forbid")

    length: float = Field(..., gt=0, description="Part length in mm")
    width: float = Field(..., gt=0, description="Part width in mm")
    thickness: float = Field(..., gt=0, description="Part thickness in mm")
    quantity: int = Field(default=1, ge=1, description="Pieces required")
    material: str | None = Field(default=None, description="Material label")
    material_type: MaterialType = Field(default=MaterialType.SHEET)
    grain_direction: GrainDirection | None = Field(default=None)
    name: str | None = Field(default=None, max_length=100)

    @field_validator("grain_direction", mode="before")
    @classmethod
    def parse_grain(cls, v: Any) -> GrainDirection | None:
        """Accept grain values case-insensitively."""
        return _parse_grain(v)


class WeightsConfigSchema(BaseModel):
    """Custom scoring weights for the mixed philosophy, each 0 to 1."""

    model_config = ConfigDict(extra="forbid")

    material_efficiency: float = Field(default=_MIXED.material_efficiency, ge=0, le=1)
    cutting_simplicity: float = Field(default=_MIXED.cutting_simplicity, ge=0, le=1)
    grain_matching: float = Field(default=_MIXED.grain_matching, ge=0, le=1)


class OptimizationConfigSchema(BaseModel):
    """Optimization settings.

    Attributes:
        philosophy: Named preset biasing the best-fit score.
        weights: Custom weights, only accepted with the "mixed" philosophy.
        placement_mode: "best_fit" or "first_fit".
        max_placement_attempts: Cap on candidate searches per sheet.
    """

    model_config = ConfigDict(extra="forbid")

    philosophy: OptimizationPhilosophy = Field(default=OptimizationPhilosophy.MAXIMUM_YIELD)
    weights: WeightsConfigSchema | None = Field(default=None)
    placement_mode: PlacementMode = Field(default=PlacementMode.BEST_FIT)
    max_placement_attempts: int = Field(default=DEFAULT_MAX_PLACEMENT_ATTEMPTS, ge=1)

    @model_validator(mode="after")
    def weights_require_mixed(self) -> OptimizationConfigSchema:
        if self.weights is not None and self.philosophy != OptimizationPhilosophy.MIXED:
            raise ValueError(
                f"Custom weights are only accepted for the 'mixed' philosophy, "
                f"not '{self.philosophy.value}'"
            )
        return self


class CuttingJobConfiguration(BaseModel):
    """Root model of a cutting job file.

    Attributes:
        schema_version: Version string in "major.minor" form.
        kerf: Saw blade width in mm.
        optimization: Optimization settings.
        stocks: Available stock rows; may be empty.
        parts: Required part rows; at least one.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default="1.0", pattern=r"^\d+\.\d+$")
    kerf: float = Field(default=0.0, ge=0, le=20, description="Saw kerf in mm")
    optimization: OptimizationConfigSchema = Field(default_factory=OptimizationConfigSchema)
    stocks: list[StockConfigSchema] = Field(default_factory=list)
    parts: list[PartConfigSchema] = Field(..., min_length=1)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Accept supported versions and newer minors of a supported major."""
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )
