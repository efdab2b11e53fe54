"""Error types raised by the Aisle repositories."""

from __future__ import annotations


class AisleError(Exception):
    """Base class for Aisle domain errors."""


class EntityNotFoundError(AisleError, ValueError):
    """Raised when a referenced entity does not exist."""

    def __init__(self, entity: str, entity_id: object):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class InvalidEntityError(AisleError, ValueError):
    """Raised when a mutation would violate an entity invariant."""


__all__ = ["AisleError", "EntityNotFoundError", "InvalidEntityError"]
