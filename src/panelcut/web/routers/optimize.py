"""Cutting job optimization endpoints."""

from fastapi import APIRouter

from panelcut.application.config import load_config_from_dict
from panelcut.web.dependencies import JsonExporterDep, OptimizeCommandDep
from panelcut.web.schemas.requests import OptimizeRequest
from panelcut.web.schemas.responses import OptimizationResponse

router = APIRouter(prefix="/optimize", tags=["optimize"])


@router.post("", response_model=OptimizationResponse)
def optimize_job(
    request: OptimizeRequest,
    command: OptimizeCommandDep,
    exporter: JsonExporterDep,
) -> OptimizationResponse:
    """Optimize a cutting job.

    Declared synchronous so the CPU-bound optimizer runs in the threadpool.

    Args:
        request: Request containing the job configuration.

    Returns:
        The optimization result. Unsatisfiable jobs return success=false.
    """
    config = load_config_from_dict(request.job)
    result = command.execute(config)
    sequences = command.cut_sequences(result) if request.include_sequences else None
    return OptimizationResponse.model_validate(exporter.to_dict(result, sequences))
