"""FastAPI dependency injection for cutting services."""

from typing import Annotated

from fastapi import Depends

from panelcut.application.commands import OptimizeCutsCommand
from panelcut.infrastructure import JsonExporter


def get_optimize_command() -> OptimizeCutsCommand:
    """Dependency for OptimizeCutsCommand.

    A fresh command per request; optimizer calls share no state.
    """
    return OptimizeCutsCommand()


def get_json_exporter() -> JsonExporter:
    """Dependency for JsonExporter."""
    return JsonExporter()


# Type aliases for cleaner endpoint signatures
OptimizeCommandDep = Annotated[OptimizeCutsCommand, Depends(get_optimize_command)]
JsonExporterDep = Annotated[JsonExporter, Depends(get_json_exporter)]
