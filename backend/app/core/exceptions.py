# backend/app/core/exceptions.py
from typing import Any, Optional


class InventoryAPIError(Exception):
    """
    Base class for errors raised by the image subsystem and its stores.
    The HTTP layer maps each subclass to a status code in app.main.
    """

    def __init__(self, message: str, *, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(InventoryAPIError):
    """Malformed or missing input, rejected before any side effect."""


class NotFoundError(InventoryAPIError):
    """Parent entity or image record does not exist."""


class ProcessingError(InventoryAPIError):
    """Derivative generation failed for a single uploaded file."""


class StoreError(InventoryAPIError):
    """The database is unreachable or misconfigured."""
