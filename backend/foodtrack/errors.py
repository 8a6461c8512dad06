"""
Error taxonomy shared by the ledger, the query service and the HTTP layer.

Every error carries enough structure (entity ids, requested vs. available
amounts) for a caller to render a precise message; ``to_dict`` exposes it.
"""


class FoodtrackError(Exception):
    """Base class for all errors raised by foodtrack services."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"detail": self.message, "error": type(self).__name__}


class InvalidArgument(FoodtrackError):
    """Malformed or out-of-range input."""


class NotFound(FoodtrackError):
    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id

    def to_dict(self) -> dict:
        return {
            **super().to_dict(),
            "entity": self.entity,
            "entity_id": str(self.entity_id),
        }


class Forbidden(FoodtrackError):
    """The record exists but belongs to another user."""

    def __init__(self, entity: str, entity_id, user_id):
        super().__init__(f"{entity} {entity_id} does not belong to user {user_id}")
        self.entity = entity
        self.entity_id = entity_id
        self.user_id = user_id

    def to_dict(self) -> dict:
        return {
            **super().to_dict(),
            "entity": self.entity,
            "entity_id": str(self.entity_id),
        }


class InsufficientQuantity(FoodtrackError):
    def __init__(self, inventory_id, requested: float, available: float):
        super().__init__(
            f"Cannot take {requested:g} from inventory item {inventory_id}: "
            f"only {available:g} available"
        )
        self.inventory_id = inventory_id
        self.requested = requested
        self.available = available

    def to_dict(self) -> dict:
        return {
            **super().to_dict(),
            "inventory_id": str(self.inventory_id),
            "requested": self.requested,
            "available": self.available,
        }


class TransactionTimeout(FoodtrackError):
    """The transaction exceeded its time bound and was rolled back."""

    def __init__(self, timeout_seconds: float):
        super().__init__(f"Transaction exceeded {timeout_seconds:g}s and was rolled back")
        self.timeout_seconds = timeout_seconds

    def to_dict(self) -> dict:
        return {**super().to_dict(), "timeout_seconds": self.timeout_seconds}


class DatastoreUnavailable(FoodtrackError):
    """Connectivity or transport failure reported by the database driver."""
