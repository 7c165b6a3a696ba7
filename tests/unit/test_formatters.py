"""Tests for text and JSON result formatters."""

from __future__ import annotations

import json

import pytest

from panelcut.domain.results import FailureKind, OptimizationResult
from panelcut.domain.services.allocator import optimize_cuts
from panelcut.domain.services.cut_sequence import CutSequenceGenerator
from panelcut.domain.value_objects import PartRequirement, StockDefinition
from panelcut.infrastructure import CutSequenceFormatter, JsonExporter, ResultReportFormatter


@pytest.fixture
def result() -> OptimizationResult:
    stock = StockDefinition(100, 100, 18, material="birch")
    parts = [PartRequirement(50, 50, 18, quantity=4, name="Square", material="birch")]
    return optimize_cuts([stock], parts)


@pytest.fixture
def failed() -> OptimizationResult:
    return OptimizationResult.failed("Part '100x100x18mm' is too large", FailureKind.FIT)


class TestResultReportFormatter:
    """Tests for the plain-text report."""

    def test_success_report(self, result: OptimizationResult) -> None:
        report = ResultReportFormatter().format(result)

        assert report.startswith("CUT OPTIMIZATION REPORT")
        assert "Optimized: 1 sheet, 100.0% efficiency" in report
        assert "Sheet-1: 100x100x18mm birch sheet (4 parts, 100.0% used)" in report
        assert report.count("Square") == 5

    def test_failure_report(self, failed: OptimizationResult) -> None:
        report = ResultReportFormatter().format(failed)

        assert report.startswith("CUT OPTIMIZATION FAILED")
        assert "Reason (fit): Part '100x100x18mm' is too large" in report


class TestJsonExporter:
    """Tests for JSON export."""

    def test_structure(self, result: OptimizationResult) -> None:
        data = json.loads(JsonExporter().export(result))

        assert data["success"] is True
        assert data["failure_kind"] is None
        assert data["total_sheets"] == 1
        assert data["total_placements"] == 4
        assert data["efficiency"] == 100.0
        assert "cut_sequences" not in data

        usage = data["sheet_usages"][0]
        assert usage["sheet_id"] == "Sheet-1"
        assert usage["stock"]["material_type"] == "sheet"
        assert {p["part_id"] for p in usage["placements"]} == {"0-1", "0-2", "0-3", "0-4"}

    def test_placements_carry_row_and_instance(self, result: OptimizationResult) -> None:
        data = JsonExporter().to_dict(result)
        placement = data["sheet_usages"][0]["placements"][0]

        assert placement["row"] == 0
        assert placement["instance"] == 1
        assert data["sorted_parts"][placement["row"]]["name"] == "Square"

    def test_failure(self, failed: OptimizationResult) -> None:
        data = JsonExporter().to_dict(failed)

        assert data["success"] is False
        assert data["failure_kind"] == "fit"
        assert data["sheet_usages"] == []

    def test_with_sequences(self, result: OptimizationResult) -> None:
        sequences = CutSequenceGenerator().generate(result)

        data = json.loads(JsonExporter().export(result, sequences))

        steps = data["cut_sequences"][0]["steps"]
        assert steps[0]["cut_type"] == "rip"
        assert steps[0]["priority"] == "high"
        assert len(steps[0]["part_ids"]) == 2


class TestCutSequenceFormatter:
    """Tests for printed cut instructions."""

    def test_numbered_steps(self, result: OptimizationResult) -> None:
        sequences = CutSequenceGenerator().generate(result)

        text = CutSequenceFormatter().format(sequences)

        assert text.startswith("CUT SEQUENCE")
        assert "Sheet-1: 4 steps, about 28 min" in text
        assert "  1. [rip]" in text
        assert "! Use a rip fence for accuracy" in text

    def test_without_safety_notes(self, result: OptimizationResult) -> None:
        sequences = CutSequenceGenerator().generate(result)
        text = CutSequenceFormatter(include_safety_notes=False).format(sequences)
        assert "!" not in text

    def test_empty(self) -> None:
        assert CutSequenceFormatter().format([]) == "No cut sequences."
