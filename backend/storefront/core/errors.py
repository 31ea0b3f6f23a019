"""
Error taxonomy surfaced by repositories and services.
Every error carries a kind plus the offending field or constraint.
"""
from __future__ import annotations

from typing import Any


class StorefrontError(Exception):
    kind = "error"

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        constraint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.constraint = constraint

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "message": self.message,
            "field": self.field,
            "constraint": self.constraint,
        }


class ValidationError(StorefrontError):
    """Input fails a field constraint; fix the input and call again."""

    kind = "validation"


class ReferentialError(StorefrontError):
    """A foreign key does not resolve to an existing row."""

    kind = "referential"


class ConstraintViolation(StorefrontError):
    """A unique constraint rejected an insert or update."""

    kind = "constraint"


class NotFoundError(StorefrontError):
    """A lookup by id found nothing for an operation that needs the row."""

    kind = "not_found"
