"""
Services module - Entry points that mutate inventory state.
"""

from inventory_kernel.services.catalog_service import CatalogService
from inventory_kernel.services.stock_service import StockService

__all__ = [
    "CatalogService",
    "StockService",
]
