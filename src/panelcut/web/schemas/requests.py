"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class OptimizeRequest(BaseModel):
    """Request for optimizing a cutting job."""

    job: dict[str, Any] = Field(..., description="Cutting job configuration JSON")
    include_sequences: bool = Field(
        default=False, description="Include saw cut sequences per sheet"
    )


class JobValidateRequest(BaseModel):
    """Request for validating a cutting job."""

    job: dict[str, Any] = Field(..., description="Cutting job configuration JSON")
