"""Multi-sheet allocation of part demand onto finite stock.

CuttingOptimizer is the boundary of the cutting core: it validates the
request, expands demand into part instances, packs stock pieces one at a
time until every instance is placed, and self-checks the result. It never
raises; every failure is returned as a structured OptimizationResult.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from ..errors import CuttingError, PlacementExhaustedError
from ..geometry import overlaps
from ..grain import GrainPolicy
from ..results import (
    FailureKind,
    OptimizationResult,
    PartInstance,
    SheetUsage,
)
from ..strategy import OptimizationStrategy
from ..value_objects import EPSILON, PartRequirement, StockDefinition
from .feasibility import FeasibilityChecker, can_cut
from .sheet_packer import PackerConfig, SheetPackResult, packer_for


def sort_parts(parts: Sequence[PartRequirement]) -> tuple[PartRequirement, ...]:
    """Order part rows by area descending, ties by caller index."""
    order = sorted(range(len(parts)), key=lambda i: (-parts[i].area, i))
    return tuple(parts[i] for i in order)


def expand_demand(parts: Sequence[PartRequirement]) -> list[PartInstance]:
    """Expand part rows into individual instances.

    Instance numbers start at 1 and are assigned once per row.
    """
    return [
        PartInstance(row=row, instance=number, part=part)
        for row, part in enumerate(parts)
        for number in range(1, part.quantity + 1)
    ]


def verify_result(
    sheet_usages: Sequence[SheetUsage],
    sorted_parts: Sequence[PartRequirement],
    kerf: float = 0.0,
) -> list[str]:
    """Check a layout for conservation, bounds, overlap and grain legality.

    Args:
        sheet_usages: Consumed stock pieces with their placements.
        sorted_parts: Part rows indexed by the placements' ``row``.
        kerf: Saw blade width used for the layout.

    Returns:
        A list of violation messages, empty when the layout is valid.
    """
    violations: list[str] = []

    seen: set[tuple[int, int]] = set()
    for usage in sheet_usages:
        for placement in usage.placements:
            if placement.key in seen:
                violations.append(f"Part {placement.part_id} placed more than once")
            seen.add(placement.key)

    expected = {
        (row, number)
        for row, part in enumerate(sorted_parts)
        for number in range(1, part.quantity + 1)
    }
    missing = expected - seen
    extra = seen - expected
    if missing:
        violations.append(f"{len(missing)} part instances were not placed")
    if extra:
        violations.append(f"{len(extra)} placements do not match any requested part")

    for usage in sheet_usages:
        stock = usage.stock
        for placement in usage.placements:
            rect = placement.rect()
            if (
                rect.x < -EPSILON
                or rect.y < -EPSILON
                or rect.right > stock.length + EPSILON
                or rect.bottom > stock.width + EPSILON
            ):
                violations.append(f"Part {placement.part_id} exceeds {usage.sheet_id}")
            if 0 <= placement.row < len(sorted_parts):
                part = sorted_parts[placement.row]
                required = GrainPolicy.rotation_required(
                    part.grain_direction, stock.grain_direction
                )
                if stock.is_sheet and required is not None and placement.rotated != required:
                    violations.append(
                        f"Part {placement.part_id} violates grain direction on {usage.sheet_id}"
                    )

        placements = usage.placements
        for i, first in enumerate(placements):
            for second in placements[i + 1 :]:
                if overlaps(first.inflated(kerf), second.inflated(kerf)):
                    violations.append(
                        f"Parts {first.part_id} and {second.part_id} overlap "
                        f"on {usage.sheet_id}"
                    )

    return violations


class CuttingOptimizer:
    """Allocates part demand across stock rows.

    Args:
        config: Default packer configuration. The kerf and strategy passed
            to :meth:`optimize` take precedence over it.
        logger: Logger for progress tracing; defaults to the module logger.
            Tracing never affects the result.
    """

    def __init__(
        self,
        config: PackerConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config or PackerConfig()
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.checker = FeasibilityChecker()
        self.grain_policy = GrainPolicy()

    def optimize(
        self,
        stocks: Sequence[StockDefinition],
        parts: Sequence[PartRequirement],
        kerf: float | None = None,
        strategy: OptimizationStrategy | None = None,
    ) -> OptimizationResult:
        """Cut every requested part from the available stock.

        Args:
            stocks: Available stock rows.
            parts: Required part rows.
            kerf: Saw blade width in mm; defaults to the configured kerf.
            strategy: Scoring strategy; defaults to the configured one.

        Returns:
            OptimizationResult, successful only if every instance was placed.
        """
        stocks = tuple(stocks)
        parts = tuple(parts)
        kerf = self.config.kerf if kerf is None else kerf
        sorted_parts: tuple[PartRequirement, ...] = ()

        try:
            self.checker.check(stocks, parts, kerf)
            config = replace(
                self.config,
                kerf=kerf,
                strategy=strategy or self.config.strategy,
            )
            sorted_parts = sort_parts(parts)
            instances = expand_demand(sorted_parts)
            self.logger.info(
                "Optimizing %d part instances over %d stock rows (kerf %.2fmm, %s)",
                len(instances),
                len(stocks),
                kerf,
                config.strategy.philosophy.value,
            )

            usages = self._allocate(stocks, instances, config)

            violations = verify_result(usages, sorted_parts, kerf)
            if violations:
                raise CuttingError("Layout self-check failed: " + "; ".join(violations))

            result = OptimizationResult.succeeded(
                message="",
                sheet_usages=tuple(usages),
                sorted_parts=sorted_parts,
            )
            noun = "sheet" if result.total_sheets == 1 else "sheets"
            message = (
                f"Optimized: {result.total_sheets} {noun}, "
                f"{result.efficiency:.1f}% efficiency"
            )
            self.logger.info("%s", message)
            return replace(result, message=message)

        except CuttingError as exc:
            self.logger.info("Optimization failed (%s): %s", exc.kind.value, exc.message)
            return OptimizationResult.failed(exc.message, exc.kind, sorted_parts)
        except Exception as exc:
            self.logger.exception("Unexpected error during optimization")
            return OptimizationResult.failed(
                f"Internal error during optimization: {exc}",
                FailureKind.INTERNAL,
                sorted_parts,
            )

    def _allocate(
        self,
        stocks: tuple[StockDefinition, ...],
        instances: list[PartInstance],
        config: PackerConfig,
    ) -> list[SheetUsage]:
        stock_order = sorted(range(len(stocks)), key=lambda i: (-stocks[i].area, i))
        available = {index: stocks[index].quantity for index in stock_order}
        remaining = list(instances)
        usages: list[SheetUsage] = []

        while remaining:
            trials: list[tuple[int, SheetPackResult]] = []
            for index in stock_order:
                if available[index] <= 0:
                    continue
                stock = stocks[index]
                compatible = [
                    i for i in remaining if can_cut(i.part, stock, self.grain_policy)
                ]
                if not compatible:
                    continue
                trial = packer_for(stock, config).pack(stock, compatible)
                if trial.placed_count:
                    trials.append((index, trial))

            if not trials:
                raise self._exhausted(remaining, len(instances))

            finishers = [t for t in trials if t[1].is_complete]
            if finishers:
                index, trial = min(
                    finishers, key=lambda t: (stocks[t[0]].area, stock_order.index(t[0]))
                )
            else:
                index, trial = trials[0]

            stock = stocks[index]
            available[index] -= 1
            prefix = "Sheet" if stock.is_sheet else "Lumber"
            usage = SheetUsage(
                sheet_id=f"{prefix}-{len(usages) + 1}",
                stock_index=index,
                stock=stock,
                placements=trial.placements,
                used_area=trial.used_area,
                waste_area=trial.waste_area,
                free_regions=trial.free_regions,
            )
            usages.append(usage)

            placed = {p.key for p in trial.placements}
            remaining = [i for i in remaining if i.key not in placed]
            self.logger.debug(
                "%s from %s: %d parts, %.1f%% efficiency, %d instances remaining",
                usage.sheet_id,
                stock.describe(),
                usage.piece_count,
                usage.efficiency,
                len(remaining),
            )

        return usages

    def _exhausted(
        self,
        remaining: list[PartInstance],
        total: int,
    ) -> PlacementExhaustedError:
        unplaced: dict[str, int] = {}
        for instance in remaining:
            label = instance.part.label
            unplaced[label] = unplaced.get(label, 0) + 1
        detail = ", ".join(f"{label}: {count}" for label, count in unplaced.items())
        return PlacementExhaustedError(
            f"Not enough suitable sheet material: could not place "
            f"{len(remaining)} of {total} part instances ({detail})",
            unplaced,
        )


def optimize_cuts(
    stocks: Sequence[StockDefinition],
    parts: Sequence[PartRequirement],
    kerf: float = 0.0,
    strategy: OptimizationStrategy | None = None,
    logger: logging.Logger | None = None,
) -> OptimizationResult:
    """Convenience wrapper around :meth:`CuttingOptimizer.optimize`."""
    return CuttingOptimizer(logger=logger).optimize(stocks, parts, kerf, strategy)
