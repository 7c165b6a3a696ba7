"""Application commands (use cases) for cutting optimization."""

from __future__ import annotations

import logging

from panelcut.application.config.adapter import (
    config_to_packer_config,
    config_to_parts,
    config_to_stocks,
)
from panelcut.application.config.schema import CuttingJobConfiguration
from panelcut.domain.results import OptimizationResult
from panelcut.domain.services import (
    CutSequence,
    CutSequenceGenerator,
    CuttingOptimizer,
    FeasibilityChecker,
)
from panelcut.domain.strategy import OptimizationStrategy

logger = logging.getLogger(__name__)


class OptimizeCutsCommand:
    """Command to optimize a cutting job.

    Converts a validated job configuration into domain objects, runs the
    optimizer and optionally derives saw cut sequences from the result.
    """

    def __init__(
        self,
        checker: FeasibilityChecker | None = None,
        sequence_generator: CutSequenceGenerator | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.checker = checker or FeasibilityChecker()
        self.sequence_generator = sequence_generator or CutSequenceGenerator()
        self.logger = logger

    def execute(
        self,
        config: CuttingJobConfiguration,
        kerf: float | None = None,
        strategy: OptimizationStrategy | None = None,
    ) -> OptimizationResult:
        """Execute the optimization.

        Args:
            config: Validated job configuration.
            kerf: Optional kerf override in mm.
            strategy: Optional strategy override.

        Returns:
            OptimizationResult; failures are returned, never raised.
        """
        packer_config = config_to_packer_config(config)
        logger.debug(
            "Executing job: %d stock rows, %d part rows",
            len(config.stocks),
            len(config.parts),
        )
        optimizer = CuttingOptimizer(packer_config, logger=self.logger)
        return optimizer.optimize(
            config_to_stocks(config),
            config_to_parts(config),
            kerf=kerf,
            strategy=strategy,
        )

    def check(self, config: CuttingJobConfiguration, kerf: float | None = None) -> list[str]:
        """Run the feasibility pre-check without packing.

        Returns:
            Problem messages; an empty list means the job looks feasible.
            Fragmentation can still make a feasible-looking job fail.
        """
        problems = self.checker.find_problems(
            config_to_stocks(config),
            config_to_parts(config),
            config.kerf if kerf is None else kerf,
        )
        return [problem.message for problem in problems]

    def cut_sequences(self, result: OptimizationResult) -> list[CutSequence]:
        """Saw cut sequences for each sheet of a successful result."""
        return self.sequence_generator.generate(result)
