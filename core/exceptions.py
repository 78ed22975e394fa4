# core/exceptions.py
from __future__ import annotations


class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__

    def as_dict(self) -> dict[str, str]:
        return {"error": str(self), "code": self.code}


class ValidationError(DomainError):
    """Raised when calculator input is structurally invalid (caller contract violation)."""


class NotFoundError(DomainError):
    """Raised when a project or worker id does not exist."""
