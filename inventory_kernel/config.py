"""
Inventory Configuration Schema.

Defines the structure and sensible defaults for an inventory session.
Values may come from code, a dict, or a YAML file:

    config = InventoryConfig.from_yaml_file(Path("inventory.yaml"))
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Self

import yaml

from inventory_kernel.logging_config import get_logger

logger = get_logger("config")


@dataclass
class InventoryConfig:
    """
    Configuration schema for an inventory session.

    ``database_url`` of None keeps the session in memory; any SQLAlchemy URL
    persists through ``SqlStorage``.
    """

    # Storage
    database_url: str | None = "sqlite:///inventory.db"
    products_key: str = "inventory_products_v1"
    movements_key: str = "inventory_movements_v1"

    # Views
    recent_movements_limit: int = 20
    currency_symbol: str = "₹"

    # Catalog
    default_reorder_level: int = 5
    seed_demo_data: bool = True
    record_manual_adjustments: bool = False

    def __post_init__(self):
        if not self.products_key or not self.movements_key:
            raise ValueError("products_key and movements_key must be non-empty")
        if self.products_key == self.movements_key:
            raise ValueError(
                f"products_key and movements_key must differ, got '{self.products_key}'"
            )
        if self.recent_movements_limit <= 0:
            raise ValueError("recent_movements_limit must be positive")
        if self.default_reorder_level < 0:
            raise ValueError("default_reorder_level cannot be negative")

        logger.info(
            "inventory_config_initialized",
            extra={
                "persistent": self.database_url is not None,
                "products_key": self.products_key,
                "movements_key": self.movements_key,
                "recent_movements_limit": self.recent_movements_limit,
                "seed_demo_data": self.seed_demo_data,
                "record_manual_adjustments": self.record_manual_adjustments,
            },
        )

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with default settings."""
        logger.info("inventory_config_created_with_defaults")
        return cls()

    @classmethod
    def in_memory(cls, **overrides: Any) -> Self:
        """Create config for a session that never touches disk."""
        return cls(database_url=None, **overrides)

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Create config from dictionary (e.g., loaded from a file)."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown inventory config keys: {unknown}")
        logger.info(
            "inventory_config_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        return cls(**data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> Self:
        """
        Load config from a YAML mapping.

        Raises:
            FileNotFoundError: if the file does not exist.
            yaml.YAMLError: if the file contains invalid YAML.
            ValueError: if the document is not a mapping or has unknown keys.
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a mapping, got {type(data).__name__}")
        return cls.from_dict(data)
