# tradetracker/services/exceptions.py
"""
Service layer exceptions.

These exceptions represent domain errors of the trade tracker and contain
NO HTTP knowledge. The application layer (main.py) maps them to responses.

Exception Hierarchy:
    ServiceError (base)
    ├── ValidationError
    │   └── InsufficientInventoryError
    ├── FormatError
    ├── NotFoundError
    │   ├── ItemNotFoundError
    │   ├── TradeNotFoundError
    │   └── InventoryNotFoundError
    └── ConflictError
        └── ItemExistsError
"""


class ServiceError(Exception):
    """
    Base exception for all service layer errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(ServiceError):
    """
    Raised when trade or query parameters violate a domain rule.

    Pydantic already rejects malformed request bodies; this covers the rules
    the pure calculators enforce themselves (nonpositive quantity, negative
    price, inverted date range).

    Attributes:
        field: The field that failed validation (optional)
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class InsufficientInventoryError(ValidationError):
    """
    Raised when a SELL asks for more units than the position holds.

    Attributes:
        name_id: Item the sell was attempted on
        requested: Units the sell asked for
        available: Units currently held
    """

    def __init__(self, name_id: int, requested: int, available: int) -> None:
        self.name_id = name_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"insufficient inventory for item {name_id}: "
            f"cannot sell {requested}, only {available} available",
            field="quantity",
        )


# =============================================================================
# FORMAT ERRORS
# =============================================================================


class FormatError(ServiceError):
    """
    Raised when an import payload or money string cannot be parsed.

    Attributes:
        key: Offending entry key inside the payload (optional)
    """

    def __init__(self, message: str, key: str | None = None) -> None:
        self.key = key
        super().__init__(message)


# =============================================================================
# NOT FOUND ERRORS
# =============================================================================


class NotFoundError(ServiceError):
    """
    Base exception for resource not found errors.

    Attributes:
        resource_type: Type of resource (e.g., "Item", "Trade")
        resource_id: Identifier of the resource
    """

    def __init__(
            self,
            message: str,
            resource_type: str | None = None,
            resource_id: int | str | None = None,
    ) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(message)


class ItemNotFoundError(NotFoundError):
    """Raised when no catalog item has the given nameId."""

    def __init__(self, name_id: int) -> None:
        self.name_id = name_id
        super().__init__(
            f"Item with nameId {name_id} not found",
            resource_type="Item",
            resource_id=name_id,
        )


class TradeNotFoundError(NotFoundError):
    """Raised when a trade id does not exist."""

    def __init__(self, trade_id: int) -> None:
        self.trade_id = trade_id
        super().__init__(
            f"Trade {trade_id} not found",
            resource_type="Trade",
            resource_id=trade_id,
        )


class InventoryNotFoundError(NotFoundError):
    """Raised when an item has never been bought, so no position exists."""

    def __init__(self, name_id: int) -> None:
        self.name_id = name_id
        super().__init__(
            f"No inventory position for item {name_id}",
            resource_type="Inventory",
            resource_id=name_id,
        )


# =============================================================================
# CONFLICT ERRORS
# =============================================================================


class ConflictError(ServiceError):
    """Base exception for uniqueness violations."""


class ItemExistsError(ConflictError):
    """
    Raised when creating an item whose marketHashName or nameId is taken.

    Attributes:
        market_hash_name: The submitted hash name
        name_id: The submitted nameId
    """

    def __init__(self, market_hash_name: str, name_id: int) -> None:
        self.market_hash_name = market_hash_name
        self.name_id = name_id
        super().__init__(
            f"Item already exists: marketHashName='{market_hash_name}' or nameId={name_id}"
        )


__all__ = [
    "ServiceError",
    "ValidationError",
    "InsufficientInventoryError",
    "FormatError",
    "NotFoundError",
    "ItemNotFoundError",
    "TradeNotFoundError",
    "InventoryNotFoundError",
    "ConflictError",
    "ItemExistsError",
]
