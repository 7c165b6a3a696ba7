"""Tests for job configuration schema, loader and adapter."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from panelcut.application.config import (
    ConfigError,
    CuttingJobConfiguration,
    config_to_packer_config,
    config_to_parts,
    config_to_stocks,
    config_to_strategy,
    load_config,
    load_config_from_dict,
)
from panelcut.application.config.loader import _format_json_path
from panelcut.domain import (
    GrainDirection,
    MaterialType,
    OptimizationPhilosophy,
    OptimizationWeights,
    PlacementMode,
)


def minimal_job(**overrides: Any) -> dict[str, Any]:
    job: dict[str, Any] = {
        "stocks": [{"length": 2440, "width": 1220, "thickness": 18}],
        "parts": [{"length": 600, "width": 300, "thickness": 18, "quantity": 2}],
    }
    job.update(overrides)
    return job


# =============================================================================
# Schema
# =============================================================================


class TestSchema:
    """Tests for CuttingJobConfiguration validation."""

    def test_minimal_job_defaults(self) -> None:
        config = load_config_from_dict(minimal_job())

        assert config.schema_version == "1.0"
        assert config.kerf == 0.0
        assert config.stocks[0].quantity == 1
        assert config.stocks[0].material_type == MaterialType.SHEET
        assert config.optimization.philosophy == OptimizationPhilosophy.MAXIMUM_YIELD
        assert config.optimization.placement_mode == PlacementMode.BEST_FIT

    def test_grain_parsed_case_insensitively(self) -> None:
        job = minimal_job()
        job["parts"][0]["grain_direction"] = "Vertical"

        config = load_config_from_dict(job)

        assert config.parts[0].grain_direction == GrainDirection.VERTICAL

    def test_empty_stock_allowed(self) -> None:
        config = load_config_from_dict(minimal_job(stocks=[]))
        assert config.stocks == []

    def test_parts_required(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict(minimal_job(parts=[]))
        assert exc_info.value.details[0]["path"] == "parts"

    def test_unknown_field_rejected(self) -> None:
        job = minimal_job()
        job["stocks"][0]["colour"] = "red"

        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict(job)

        assert exc_info.value.error_type == "validation"
        assert exc_info.value.details[0]["path"] == "stocks[0].colour"

    def test_non_positive_dimension_rejected(self) -> None:
        job = minimal_job()
        job["parts"][0]["width"] = 0

        with pytest.raises(ConfigError, match=r"parts\[0\]\.width"):
            load_config_from_dict(job)

    def test_kerf_range(self) -> None:
        with pytest.raises(ConfigError, match="kerf"):
            load_config_from_dict(minimal_job(kerf=-1))

    def test_weights_require_mixed(self) -> None:
        job = minimal_job(
            optimization={"philosophy": "minimum_cuts", "weights": {"grain_matching": 1}}
        )
        with pytest.raises(ConfigError, match="only accepted for the 'mixed' philosophy"):
            load_config_from_dict(job)

    def test_weight_bounds(self) -> None:
        job = minimal_job(optimization={"philosophy": "mixed", "weights": {"grain_matching": 2}})
        with pytest.raises(ConfigError, match="grain_matching"):
            load_config_from_dict(job)

    @pytest.mark.parametrize("version", ["1.0", "1.7"])
    def test_supported_versions(self, version: str) -> None:
        assert load_config_from_dict(minimal_job(schema_version=version))

    def test_unsupported_major_version(self) -> None:
        with pytest.raises(ConfigError, match="Unsupported schema version '2.0'"):
            load_config_from_dict(minimal_job(schema_version="2.0"))


# =============================================================================
# Loader
# =============================================================================


class TestLoadConfig:
    """Tests for loading job files."""

    def test_load_valid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "job.json"
        path.write_text(json.dumps(minimal_job(kerf=3.2)), encoding="utf-8")

        config = load_config(path)

        assert isinstance(config, CuttingJobConfiguration)
        assert config.kerf == 3.2

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "missing.json")
        assert exc_info.value.error_type == "file_not_found"

    def test_invalid_json(self, jobs_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(jobs_path / "invalid_json.json")

        error = exc_info.value
        assert error.error_type == "json_parse"
        assert error.details[0]["line"] == 4

    def test_validation_error_message_lists_fields(self, jobs_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(jobs_path / "unknown_field.json")

        assert exc_info.value.message.startswith("Job validation failed:")
        assert "stocks[0].colour" in exc_info.value.message
        assert exc_info.value.path == jobs_path / "unknown_field.json"

    def test_non_object_document(self, tmp_path: Path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        assert exc_info.value.error_type == "validation"
        assert exc_info.value.details[0]["path"] == ""
        assert "  - (root): " in exc_info.value.message
        assert "got:" not in exc_info.value.message

    def test_scalar_value_echoed(self) -> None:
        with pytest.raises(ConfigError, match=r"kerf: .* \(got: -1\)"):
            load_config_from_dict(minimal_job(kerf=-1))

    @pytest.mark.parametrize(
        "loc, expected",
        [
            (("parts", 1, "length"), "parts[1].length"),
            (("optimization", "weights"), "optimization.weights"),
            ((0, "length"), "[0].length"),
            ((), ""),
        ],
    )
    def test_json_path_format(self, loc: tuple, expected: str) -> None:
        assert _format_json_path(loc) == expected


# =============================================================================
# Adapter
# =============================================================================


class TestAdapter:
    """Tests for converting configuration into domain objects."""

    def test_rows_converted_in_order(self) -> None:
        job = minimal_job(
            stocks=[
                {"length": 1000, "width": 500, "thickness": 18, "stock_id": "A"},
                {"length": 2000, "width": 90, "thickness": 38, "material_type": "dimensional"},
            ]
        )
        config = load_config_from_dict(job)

        stocks = config_to_stocks(config)
        parts = config_to_parts(config)

        assert [s.stock_id for s in stocks] == ["A", None]
        assert stocks[1].material_type == MaterialType.DIMENSIONAL
        assert parts[0].quantity == 2

    def test_preset_strategy(self) -> None:
        config = load_config_from_dict(
            minimal_job(
                optimization={"philosophy": "grain_matching", "placement_mode": "first_fit"}
            )
        )

        strategy = config_to_strategy(config)

        assert strategy.philosophy == OptimizationPhilosophy.GRAIN_MATCHING
        assert strategy.mode == PlacementMode.FIRST_FIT

    def test_mixed_strategy_weights(self) -> None:
        config = load_config_from_dict(
            minimal_job(
                optimization={
                    "philosophy": "mixed",
                    "weights": {
                        "material_efficiency": 0.5,
                        "cutting_simplicity": 0.1,
                        "grain_matching": 0.9,
                    },
                }
            )
        )

        strategy = config_to_strategy(config)

        assert strategy.weights == OptimizationWeights(0.5, 0.1, 0.9)

    def test_packer_config(self) -> None:
        config = load_config_from_dict(
            minimal_job(kerf=2.4, optimization={"max_placement_attempts": 500})
        )

        packer_config = config_to_packer_config(config)

        assert packer_config.kerf == 2.4
        assert packer_config.max_placement_attempts == 500
