"""Cutting job validation endpoints."""

from fastapi import APIRouter

from panelcut.application.config import load_config_from_dict
from panelcut.web.dependencies import OptimizeCommandDep
from panelcut.web.schemas.requests import JobValidateRequest
from panelcut.web.schemas.responses import ValidationResponse

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("", response_model=ValidationResponse)
def validate_job(
    request: JobValidateRequest,
    command: OptimizeCommandDep,
) -> ValidationResponse:
    """Validate a cutting job without packing it.

    Schema errors are answered with 422 by the ConfigError handler; fit and
    capacity problems are reported in the response body.
    """
    config = load_config_from_dict(request.job)
    problems = command.check(config)
    return ValidationResponse(is_valid=not problems, errors=problems)
