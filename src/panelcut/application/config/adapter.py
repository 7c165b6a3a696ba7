"""Conversion of job configuration models into domain objects."""

from panelcut.application.config.schema import (
    CuttingJobConfiguration,
    PartConfigSchema,
    StockConfigSchema,
)
from panelcut.domain.services.sheet_packer import PackerConfig
from panelcut.domain.strategy import OptimizationStrategy, OptimizationWeights
from panelcut.domain.value_objects import PartRequirement, StockDefinition


def _stock_to_domain(stock: StockConfigSchema) -> StockDefinition:
    return StockDefinition(
        length=stock.length,
        width=stock.width,
        thickness=stock.thickness,
        quantity=stock.quantity,
        material=stock.material,
        material_type=stock.material_type,
        grain_direction=stock.grain_direction,
        stock_id=stock.stock_id,
    )


def _part_to_domain(part: PartConfigSchema) -> PartRequirement:
    return PartRequirement(
        length=part.length,
        width=part.width,
        thickness=part.thickness,
        quantity=part.quantity,
        material=part.material,
        material_type=part.material_type,
        grain_direction=part.grain_direction,
        name=part.name,
    )


def config_to_stocks(config: CuttingJobConfiguration) -> list[StockDefinition]:
    """Convert the job's stock rows, preserving their order."""
    return [_stock_to_domain(stock) for stock in config.stocks]


def config_to_parts(config: CuttingJobConfiguration) -> list[PartRequirement]:
    """Convert the job's part rows, preserving their order."""
    return [_part_to_domain(part) for part in config.parts]


def config_to_strategy(config: CuttingJobConfiguration) -> OptimizationStrategy:
    """Build the optimization strategy from the job's optimization settings.

    Custom weights are only carried through for the mixed philosophy; the
    schema already rejects them for any other preset.
    """
    optimization = config.optimization
    weights = None
    if optimization.weights is not None:
        weights = OptimizationWeights(
            material_efficiency=optimization.weights.material_efficiency,
            cutting_simplicity=optimization.weights.cutting_simplicity,
            grain_matching=optimization.weights.grain_matching,
        )
    return OptimizationStrategy.resolve(
        optimization.philosophy,
        weights,
        optimization.placement_mode,
    )


def config_to_packer_config(config: CuttingJobConfiguration) -> PackerConfig:
    """Build the packer configuration (kerf, strategy, attempt cap)."""
    return PackerConfig(
        kerf=config.kerf,
        strategy=config_to_strategy(config),
        max_placement_attempts=config.optimization.max_placement_attempts,
    )
