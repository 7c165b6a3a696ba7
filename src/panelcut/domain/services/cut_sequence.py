"""Saw cut sequence generation for an optimized layout.

Turns the placements of each consumed stock piece into an ordered list of
human-readable saw steps. Sheets are broken down with full-length rip cuts
at part edges followed by crosscuts within each strip; lumber gets one
crosscut per part. The sequence is presentation only and never feeds back
into the layout.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from ..results import OptimizationResult, Placement, SheetUsage
from ..value_objects import EPSILON

logger = logging.getLogger(__name__)

# Sheets longer than this need a second person to handle safely (mm)
LARGE_SHEET_LENGTH = 1200.0


class CutType(str, Enum):
    INITIAL_BREAKDOWN = "initial_breakdown"
    RIP = "rip"
    CROSSCUT = "crosscut"
    FINAL_TRIM = "final_trim"


class CutPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


SAFETY_NOTES: dict[CutType, tuple[str, ...]] = {
    CutType.INITIAL_BREAKDOWN: (
        "Use two people for large sheets (over 1200mm)",
        "Support both sides of the cut line",
        "Make sure the offcuts won't fall and cause injury",
    ),
    CutType.RIP: (
        "Use a rip fence for accuracy",
        "Feed material steadily through the blade",
        "Use push sticks for narrow pieces",
    ),
    CutType.CROSSCUT: (
        "Use a crosscut sled or miter gauge",
        "Support long pieces with an auxiliary fence",
        "Cut with a fine-tooth blade to reduce tear-out",
    ),
    CutType.FINAL_TRIM: (
        "Check each piece for final dimensions",
        "Sand or route edges as needed",
        "Label pieces as you finish them",
    ),
}

LUMBER_SAFETY_NOTES: tuple[str, ...] = (
    "Use a stop block for consistent lengths",
    "Support the offcut to prevent binding",
    "Measure twice, cut once",
)

TOOL_SUGGESTIONS: dict[CutType, str] = {
    CutType.INITIAL_BREAKDOWN: "Table saw or track saw for straight cuts",
    CutType.RIP: "Table saw with rip fence",
    CutType.CROSSCUT: "Table saw with crosscut sled or miter saw",
    CutType.FINAL_TRIM: "Hand tools, router, or fine adjustment on table saw",
}

# Estimated minutes per step (breakdown) or per piece handled (others)
STEP_MINUTES: dict[CutType, int] = {
    CutType.INITIAL_BREAKDOWN: 15,
    CutType.RIP: 3,
    CutType.CROSSCUT: 2,
    CutType.FINAL_TRIM: 1,
}


@dataclass(frozen=True)
class CutStep:
    """One saw operation.

    Attributes:
        step_number: 1-based position within the sheet's sequence.
        cut_type: Kind of cut.
        description: Human-readable instruction.
        placements: Pieces released or sized by this step.
        position: Offset of the cut line, along y for rip cuts and along
            x for lumber crosscuts; None for steps without a single line.
        priority: How critical the step is for safe handling.
        tool: Suggested tool.
        safety_notes: Reminders shown with the step.
    """

    step_number: int
    cut_type: CutType
    description: str
    placements: tuple[Placement, ...] = ()
    position: float | None = None
    priority: CutPriority = CutPriority.MEDIUM
    tool: str = ""
    safety_notes: tuple[str, ...] = ()


@dataclass(frozen=True)
class CutSequence:
    """Ordered saw steps for one consumed stock piece."""

    sheet_id: str
    steps: tuple[CutStep, ...]
    estimated_minutes: int = 0
    recommendations: tuple[str, ...] = field(default_factory=tuple)

    @property
    def total_steps(self) -> int:
        return len(self.steps)


def _piece_names(placements: list[Placement] | tuple[Placement, ...]) -> str:
    return ", ".join(p.name or p.part_id for p in placements)


class CutSequenceGenerator:
    """Builds cut sequences for every sheet of a successful result."""

    def generate(self, result: OptimizationResult) -> list[CutSequence]:
        """Return one CutSequence per consumed stock piece.

        A failed result has no layout and yields an empty list.
        """
        if not result.success:
            return []
        sequences = [self.generate_for_sheet(usage) for usage in result.sheet_usages]
        logger.debug("Generated cut sequences for %d sheets", len(sequences))
        return sequences

    def generate_for_sheet(self, usage: SheetUsage) -> CutSequence:
        if usage.stock.is_sheet:
            steps = self._sheet_steps(usage)
            setup = 10
        else:
            steps = self._lumber_steps(usage)
            setup = 5

        minutes = setup
        for step in steps:
            if step.cut_type == CutType.INITIAL_BREAKDOWN:
                minutes += STEP_MINUTES[step.cut_type]
            else:
                minutes += STEP_MINUTES[step.cut_type] * len(step.placements)

        return CutSequence(
            sheet_id=usage.sheet_id,
            steps=tuple(steps),
            estimated_minutes=minutes,
            recommendations=tuple(self._recommendations(usage, steps)),
        )

    def _sheet_steps(self, usage: SheetUsage) -> list[CutStep]:
        stock = usage.stock
        placements = usage.placements
        steps: list[CutStep] = []

        def add(cut_type: CutType, description: str, priority: CutPriority, **kwargs) -> None:
            steps.append(
                CutStep(
                    step_number=len(steps) + 1,
                    cut_type=cut_type,
                    description=description,
                    priority=priority,
                    tool=TOOL_SUGGESTIONS[cut_type],
                    safety_notes=SAFETY_NOTES[cut_type],
                    **kwargs,
                )
            )

        if len(placements) > 4:
            add(
                CutType.INITIAL_BREAKDOWN,
                "Break down the full sheet into manageable sections",
                CutPriority.HIGH,
            )

        rip_lines: list[float] = []
        for placement in sorted(placements, key=lambda p: p.y + p.footprint_height):
            edge = placement.y + placement.footprint_height
            if edge >= stock.width - EPSILON:
                continue
            if not rip_lines or edge - rip_lines[-1] > EPSILON:
                rip_lines.append(edge)

        for line in rip_lines:
            released = tuple(
                p for p in placements if abs(p.y + p.footprint_height - line) <= EPSILON
            )
            add(
                CutType.RIP,
                f"Rip full length at {line:.1f}mm to separate: {_piece_names(released)}",
                CutPriority.HIGH,
                placements=released,
                position=line,
            )

        bounds = [0.0, *rip_lines, stock.width]
        for top, bottom in zip(bounds, bounds[1:]):
            strip = sorted(
                (p for p in placements if top - EPSILON <= p.y < bottom - EPSILON),
                key=lambda p: p.x,
            )
            if not strip:
                continue
            add(
                CutType.CROSSCUT,
                f"Crosscut strip {top:.1f}-{bottom:.1f}mm to length: {_piece_names(strip)}",
                CutPriority.MEDIUM,
                placements=tuple(strip),
                position=top,
            )

        if len(placements) > 2:
            add(
                CutType.FINAL_TRIM,
                "Final trimming and sizing of individual pieces",
                CutPriority.LOW,
                placements=tuple(placements),
            )
        return steps

    def _lumber_steps(self, usage: SheetUsage) -> list[CutStep]:
        steps: list[CutStep] = []
        for placement in sorted(usage.placements, key=lambda p: p.x):
            end = placement.x + placement.length
            steps.append(
                CutStep(
                    step_number=len(steps) + 1,
                    cut_type=CutType.CROSSCUT,
                    description=(
                        f"Cut {placement.name or placement.part_id} to "
                        f"{placement.length:g}mm at {end:.1f}mm"
                    ),
                    placements=(placement,),
                    position=end,
                    priority=CutPriority.MEDIUM,
                    tool="Miter saw or table saw with crosscut sled",
                    safety_notes=LUMBER_SAFETY_NOTES,
                )
            )
        return steps

    def _recommendations(self, usage: SheetUsage, steps: list[CutStep]) -> list[str]:
        stock = usage.stock
        recommendations: list[str] = []
        if len(steps) > 5:
            recommendations.append(
                "Make a cutting list and organize your workspace before starting"
            )
        if stock.is_sheet and stock.length > LARGE_SHEET_LENGTH:
            recommendations.append("Have a helper available for handling large sheets")
        if any(step.cut_type == CutType.FINAL_TRIM for step in steps):
            recommendations.append(
                "Leave pieces slightly oversized for final trimming to exact dimensions"
            )
        if stock.grain_direction:
            grain = getattr(stock.grain_direction, "value", stock.grain_direction)
            recommendations.append(
                f"Cut with the {grain} grain in mind to minimize tear-out"
            )
        if usage.efficiency < 70:
            recommendations.append("Consider repositioning parts to reduce waste")
        recommendations.append(
            "Always wear appropriate safety equipment and follow tool guidelines"
        )
        return recommendations
