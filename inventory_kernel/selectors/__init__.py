"""
Selectors module - Read-only query layer.
"""

from inventory_kernel.selectors.inventory_selector import InventorySelector

__all__ = [
    "InventorySelector",
]
