"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class PartSchema(BaseModel):
    """Part row as referenced by placements."""

    name: str | None = Field(default=None, description="Display name")
    length: float = Field(..., description="Length in mm")
    width: float = Field(..., description="Width in mm")
    thickness: float = Field(..., description="Thickness in mm")
    quantity: int = Field(..., description="Pieces required")
    material: str | None = Field(default=None, description="Material label")
    material_type: str = Field(..., description="sheet or dimensional")
    grain_direction: str | None = Field(default=None, description="Grain direction")


class StockSchema(BaseModel):
    """Stock row a sheet was drawn from."""

    length: float = Field(..., description="Length in mm")
    width: float = Field(..., description="Width in mm")
    thickness: float = Field(..., description="Thickness in mm")
    quantity: int = Field(..., description="Pieces available in the row")
    material: str | None = Field(default=None, description="Material label")
    material_type: str = Field(..., description="sheet or dimensional")
    grain_direction: str | None = Field(default=None, description="Grain direction")
    stock_id: str | None = Field(default=None, description="Warehouse record id")


class PlacementSchema(BaseModel):
    """One part instance placed on a sheet."""

    part_id: str = Field(..., description="Display id in row-instance form")
    row: int = Field(..., description="Index into sorted_parts")
    instance: int = Field(..., description="Instance number within the row")
    name: str | None = Field(default=None, description="Part name")
    x: float = Field(..., description="Offset from the left edge in mm")
    y: float = Field(..., description="Offset from the top edge in mm")
    length: float = Field(..., description="Part length in mm")
    width: float = Field(..., description="Part width in mm")
    rotated: bool = Field(..., description="Whether length and width are swapped")


class FreeRegionSchema(BaseModel):
    """Unused rectangle left on a sheet."""

    x: float
    y: float
    width: float
    height: float


class SheetUsageSchema(BaseModel):
    """One consumed stock piece."""

    sheet_id: str = Field(..., description="Sheet identifier")
    stock_index: int = Field(..., description="Index of the stock row in the job")
    stock: StockSchema
    placements: list[PlacementSchema] = Field(default_factory=list)
    used_area: float = Field(..., description="Placed area in mm²")
    waste_area: float = Field(..., description="Unused area in mm²")
    efficiency: float = Field(..., description="Used area percentage")
    free_regions: list[FreeRegionSchema] = Field(default_factory=list)


class CutStepSchema(BaseModel):
    """One saw operation."""

    step_number: int
    cut_type: str
    description: str
    position: float | None = None
    priority: str
    tool: str
    safety_notes: list[str] = Field(default_factory=list)
    part_ids: list[str] = Field(default_factory=list)


class CutSequenceSchema(BaseModel):
    """Saw steps for one sheet."""

    sheet_id: str
    estimated_minutes: int
    recommendations: list[str] = Field(default_factory=list)
    steps: list[CutStepSchema] = Field(default_factory=list)


class OptimizationResponse(BaseModel):
    """Response for job optimization.

    A job that cannot be satisfied is still a 200 response with
    ``success`` false and the reason in ``message``.
    """

    success: bool = Field(..., description="Whether every part was placed")
    message: str = Field(..., description="Summary or failure diagnostic")
    failure_kind: str | None = Field(default=None, description="Failure category")
    total_sheets: int = Field(default=0, description="Sheets consumed")
    total_waste: float = Field(default=0.0, description="Total waste in mm²")
    total_placements: int = Field(default=0, description="Parts placed")
    efficiency: float = Field(default=0.0, description="Overall used area percentage")
    sorted_parts: list[PartSchema] = Field(default_factory=list)
    sheet_usages: list[SheetUsageSchema] = Field(default_factory=list)
    cut_sequences: list[CutSequenceSchema] | None = Field(default=None)


class ValidationResponse(BaseModel):
    """Response for job validation."""

    is_valid: bool = Field(..., description="Whether the job looks feasible")
    errors: list[str] = Field(default_factory=list, description="Problems found")


class ErrorResponseSchema(BaseModel):
    """Error body returned by exception handlers."""

    error: str
    error_type: str
    details: Any = None
