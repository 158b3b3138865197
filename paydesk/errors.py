# paydesk/errors.py
from __future__ import annotations
from typing import Optional


class PaydeskError(Exception):
    """Base class for errors the HTTP layer knows how to render."""

    status_code = 500

    def __init__(self, message: str = "", *, errors: Optional[dict] = None):
        super().__init__(message)
        self.message = message or self.__class__.__name__
        self.errors = errors or {}

    def to_dict(self) -> dict:
        payload = {"success": False, "error": self.message}
        if self.errors:
            payload["errors"] = self.errors
        return payload


class ValidationError(PaydeskError):
    """Bad input: non-positive amount, blank developer, unknown status."""

    status_code = 400


class NotFoundError(PaydeskError):
    status_code = 404


class InternalError(PaydeskError):
    """Unexpected failure while aggregating stored data."""

    status_code = 500
