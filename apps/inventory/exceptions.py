"""Domain exceptions for inventory app."""


class InventoryServiceError(Exception):
    """Base exception for inventory service errors."""
    pass


class InventoryItemNotFoundError(InventoryServiceError):
    """Raised when the item does not exist in the project."""
    pass


class DuplicateInventoryItemError(InventoryServiceError):
    """Raised when the project already stocks an item with this name."""
    pass


class InvalidQuantityError(InventoryServiceError):
    """Raised when a consumed quantity is not positive."""
    pass
