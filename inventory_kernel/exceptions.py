"""
Typed Exception Hierarchy for the Inventory Kernel.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from InventoryKernelError:

    InventoryKernelError (base)
    |
    +-- ValidationError
    |   +-- ProductNotFoundError
    |
    +-- InsufficientStockError
    |
    +-- PersistenceError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                  | When Raised
----------------|-----------------------|-----------------------------------------
Validation      | VALIDATION_ERROR      | Empty name/sku, bad quantity or type
                | PRODUCT_NOT_FOUND     | Movement references an unknown product
----------------|-----------------------|-----------------------------------------
Stock           | INSUFFICIENT_STOCK    | Stock-out exceeds the available quantity
----------------|-----------------------|-----------------------------------------
Persistence     | PERSISTENCE_ERROR     | Storage unavailable or write rejected

===============================================================================
HANDLING PATTERNS
===============================================================================

Validation and stock errors are raised before any state change, so the
caller can show the message and retry with corrected input:

    try:
        stock.apply_movement(product_id, "out", 3)
    except InsufficientStockError as e:
        return {"error": e.code, "available": e.available}

Persistence errors are raised AFTER the in-memory mutation. The state keeps
the change and the next successful write carries it to storage:

    except PersistenceError as e:
        log.error("save failed", extra={"code": e.code, "key": e.key})

Every exception carries a ``code`` class attribute and structured
attributes, so callers never parse message strings.
"""


class InventoryKernelError(Exception):
    """
    Base exception for all inventory kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "INVENTORY_KERNEL_ERROR"


class ValidationError(InventoryKernelError):
    """Caller input was rejected before any state change."""

    code: str = "VALIDATION_ERROR"

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


class ProductNotFoundError(ValidationError):
    """A movement referenced a product id that is not in the catalog."""

    code: str = "PRODUCT_NOT_FOUND"

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__("product_id", f"product not found: {product_id!r}")


class InsufficientStockError(InventoryKernelError):
    """Stock-out requested more units than the product currently holds."""

    code: str = "INSUFFICIENT_STOCK"

    def __init__(self, product_id: str, available: int, requested: int):
        self.product_id = product_id
        self.available = available
        self.requested = requested
        super().__init__(
            f"Not enough stock for product {product_id}: "
            f"available={available}, requested={requested}"
        )


class PersistenceError(InventoryKernelError):
    """
    The storage collaborator failed to read or write a record.

    The in-memory mutation that triggered the write is NOT rolled back.
    """

    code: str = "PERSISTENCE_ERROR"

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Storage failure for {key!r}: {reason}")
