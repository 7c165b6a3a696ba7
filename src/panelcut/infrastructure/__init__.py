"""Infrastructure layer - result formatters and diagram rendering."""

from .cut_diagram_renderer import CutDiagramRenderer
from .formatters import CutSequenceFormatter, JsonExporter, ResultReportFormatter

__all__ = [
    "CutDiagramRenderer",
    "CutSequenceFormatter",
    "JsonExporter",
    "ResultReportFormatter",
]
