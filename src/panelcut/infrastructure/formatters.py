"""Text and JSON formatters for optimization results."""

from __future__ import annotations

import json
from typing import Any, Sequence

from panelcut.domain.results import OptimizationResult, Placement, SheetUsage
from panelcut.domain.services.cut_sequence import CutSequence
from panelcut.domain.value_objects import FreeRegion, PartRequirement, StockDefinition


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


class ResultReportFormatter:
    """Formats an optimization result as a plain-text report.

    The report has a summary header, a part list in placement order and a
    placement table per consumed stock piece.
    """

    def format(self, result: OptimizationResult) -> str:
        if not result.success:
            kind = _enum_value(result.failure_kind) or "unknown"
            return "\n".join(
                [
                    "CUT OPTIMIZATION FAILED",
                    "=" * 70,
                    f"Reason ({kind}): {result.message}",
                ]
            )

        lines = [
            "CUT OPTIMIZATION REPORT",
            "=" * 70,
            result.message,
            f"Sheets used: {result.total_sheets}",
            f"Parts placed: {result.total_placements}",
            f"Total waste: {result.total_waste:,.0f} mm²",
            "",
            self.format_parts(result.sorted_parts),
        ]
        for usage in result.sheet_usages:
            lines.append("")
            lines.append(self.format_sheet(usage))
        return "\n".join(lines)

    def format_parts(self, parts: Sequence[PartRequirement]) -> str:
        """Format the part rows in the order placements reference them."""
        lines = [
            "PARTS",
            "-" * 70,
            f"{'Row':<5} {'Part':<24} {'Length':>8} {'Width':>8} {'Thick':>6} {'Qty':>5}",
            "-" * 70,
        ]
        for row, part in enumerate(parts):
            lines.append(
                f"{row:<5} {part.label[:24]:<24} {part.length:>8.1f} {part.width:>8.1f} "
                f"{part.thickness:>6.1f} {part.quantity:>5}"
            )
        return "\n".join(lines)

    def format_sheet(self, usage: SheetUsage) -> str:
        """Format the placement table of one stock piece."""
        lines = [
            f"{usage.sheet_id}: {usage.stock.describe()} "
            f"({usage.piece_count} parts, {usage.efficiency:.1f}% used)",
            "-" * 70,
            f"{'Id':<8} {'Part':<20} {'X':>8} {'Y':>8} {'Length':>8} {'Width':>8} Rot",
            "-" * 70,
        ]
        for p in usage.placements:
            label = (p.name or "")[:20]
            lines.append(
                f"{p.part_id:<8} {label:<20} {p.x:>8.1f} {p.y:>8.1f} "
                f"{p.length:>8.1f} {p.width:>8.1f} {'yes' if p.rotated else 'no'}"
            )
        lines.append(f"Waste: {usage.waste_area:,.0f} mm²")
        return "\n".join(lines)


class JsonExporter:
    """Exports optimization results as JSON.

    The dictionary form is the structure stored verbatim by callers that
    persist calculations.
    """

    def to_dict(
        self,
        result: OptimizationResult,
        sequences: Sequence[CutSequence] | None = None,
    ) -> dict[str, Any]:
        data: dict[str, Any] = {
            "success": result.success,
            "message": result.message,
            "failure_kind": _enum_value(result.failure_kind),
            "total_sheets": result.total_sheets,
            "total_waste": result.total_waste,
            "total_placements": result.total_placements,
            "efficiency": round(result.efficiency, 2),
            "sorted_parts": [self._format_part(p) for p in result.sorted_parts],
            "sheet_usages": [self._format_usage(u) for u in result.sheet_usages],
        }
        if sequences is not None:
            data["cut_sequences"] = [self._format_sequence(s) for s in sequences]
        return data

    def export(
        self,
        result: OptimizationResult,
        sequences: Sequence[CutSequence] | None = None,
    ) -> str:
        """Export a result as a JSON string."""
        return json.dumps(self.to_dict(result, sequences), indent=2)

    def _format_part(self, part: PartRequirement) -> dict[str, Any]:
        return {
            "name": part.name,
            "length": part.length,
            "width": part.width,
            "thickness": part.thickness,
            "quantity": part.quantity,
            "material": part.material,
            "material_type": _enum_value(part.material_type),
            "grain_direction": _enum_value(part.grain_direction),
        }

    def _format_stock(self, stock: StockDefinition) -> dict[str, Any]:
        return {
            "length": stock.length,
            "width": stock.width,
            "thickness": stock.thickness,
            "quantity": stock.quantity,
            "material": stock.material,
            "material_type": _enum_value(stock.material_type),
            "grain_direction": _enum_value(stock.grain_direction),
            "stock_id": stock.stock_id,
        }

    def _format_placement(self, placement: Placement) -> dict[str, Any]:
        return {
            "part_id": placement.part_id,
            "row": placement.row,
            "instance": placement.instance,
            "name": placement.name,
            "x": placement.x,
            "y": placement.y,
            "length": placement.length,
            "width": placement.width,
            "rotated": placement.rotated,
        }

    def _format_region(self, region: FreeRegion) -> dict[str, float]:
        return {
            "x": region.x,
            "y": region.y,
            "width": region.width,
            "height": region.height,
        }

    def _format_usage(self, usage: SheetUsage) -> dict[str, Any]:
        return {
            "sheet_id": usage.sheet_id,
            "stock_index": usage.stock_index,
            "stock": self._format_stock(usage.stock),
            "placements": [self._format_placement(p) for p in usage.placements],
            "used_area": usage.used_area,
            "waste_area": usage.waste_area,
            "efficiency": round(usage.efficiency, 2),
            "free_regions": [self._format_region(r) for r in usage.free_regions],
        }

    def _format_sequence(self, sequence: CutSequence) -> dict[str, Any]:
        return {
            "sheet_id": sequence.sheet_id,
            "estimated_minutes": sequence.estimated_minutes,
            "recommendations": list(sequence.recommendations),
            "steps": [
                {
                    "step_number": step.step_number,
                    "cut_type": step.cut_type.value,
                    "description": step.description,
                    "position": step.position,
                    "priority": step.priority.value,
                    "tool": step.tool,
                    "safety_notes": list(step.safety_notes),
                    "part_ids": [p.part_id for p in step.placements],
                }
                for step in sequence.steps
            ],
        }


class CutSequenceFormatter:
    """Formats saw cut sequences as numbered instructions."""

    def __init__(self, include_safety_notes: bool = True) -> None:
        self._include_safety_notes = include_safety_notes

    def format(self, sequences: Sequence[CutSequence]) -> str:
        if not sequences:
            return "No cut sequences."

        lines = ["CUT SEQUENCE", "=" * 70]
        for sequence in sequences:
            lines.append("")
            lines.append(
                f"{sequence.sheet_id}: {sequence.total_steps} steps, "
                f"about {sequence.estimated_minutes} min"
            )
            lines.append("-" * 70)
            for step in sequence.steps:
                lines.append(f"{step.step_number:>3}. [{step.cut_type.value}] {step.description}")
                if step.tool:
                    lines.append(f"     Tool: {step.tool}")
                if self._include_safety_notes:
                    for note in step.safety_notes:
                        lines.append(f"     ! {note}")
            if sequence.recommendations:
                lines.append("  Recommendations:")
                lines.extend(f"   - {r}" for r in sequence.recommendations)
        return "\n".join(lines)
