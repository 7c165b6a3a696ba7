"""Pydantic schemas for the REST API."""

from panelcut.web.schemas.requests import JobValidateRequest, OptimizeRequest
from panelcut.web.schemas.responses import (
    CutSequenceSchema,
    CutStepSchema,
    ErrorResponseSchema,
    FreeRegionSchema,
    OptimizationResponse,
    PartSchema,
    PlacementSchema,
    SheetUsageSchema,
    StockSchema,
    ValidationResponse,
)

__all__ = [
    # Requests
    "JobValidateRequest",
    "OptimizeRequest",
    # Responses
    "CutSequenceSchema",
    "CutStepSchema",
    "ErrorResponseSchema",
    "FreeRegionSchema",
    "OptimizationResponse",
    "PartSchema",
    "PlacementSchema",
    "SheetUsageSchema",
    "StockSchema",
    "ValidationResponse",
]
