"""Job configuration schema and loading.

Public API:
    - CuttingJobConfiguration: Root job model
    - StockConfigSchema / PartConfigSchema: Stock and part rows
    - OptimizationConfigSchema / WeightsConfigSchema: Optimization settings
    - load_config / load_config_from_dict: Load and validate a job
    - ConfigError: Exception for job configuration errors
    - config_to_*: Adapters producing domain objects

Example:
    >>> from pathlib import Path
    >>> from panelcut.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     job = load_config(Path("shelves.json"))
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from panelcut.application.config.adapter import (
    config_to_packer_config,
    config_to_parts,
    config_to_stocks,
    config_to_strategy,
)
from panelcut.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from panelcut.application.config.schema import (
    SUPPORTED_VERSIONS,
    CuttingJobConfiguration,
    OptimizationConfigSchema,
    PartConfigSchema,
    StockConfigSchema,
    WeightsConfigSchema,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "ConfigError",
    "CuttingJobConfiguration",
    "OptimizationConfigSchema",
    "PartConfigSchema",
    "StockConfigSchema",
    "WeightsConfigSchema",
    "config_to_packer_config",
    "config_to_parts",
    "config_to_stocks",
    "config_to_strategy",
    "load_config",
    "load_config_from_dict",
]
