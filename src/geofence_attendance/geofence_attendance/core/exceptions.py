from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import to_iso


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def payload(self) -> dict[str, Any]:
        return {"message": self.message}


class ValidationError(DomainError):
    """Raised when input data is missing or malformed."""

    status_code = 400


class NotFoundError(DomainError):
    """Raised when a session (or report data) does not exist."""

    status_code = 404


class ExpiredError(DomainError):
    """Raised when a session is past its expiry time."""

    status_code = 410


class ConflictError(DomainError):
    """Raised when a roll number was already used in the session."""

    status_code = 409

    def __init__(
        self,
        message: str,
        *,
        roll_no: Optional[str] = None,
        student_name: Optional[str] = None,
        submitted_at: Optional[datetime] = None,
    ):
        super().__init__(message)
        self.roll_no = roll_no
        self.student_name = student_name
        self.submitted_at = submitted_at

    def payload(self) -> dict[str, Any]:
        data = super().payload()
        if self.roll_no is not None:
            data["alreadySubmitted"] = {
                "rollNo": self.roll_no,
                "studentName": self.student_name,
                "submittedAt": to_iso(self.submitted_at),
            }
        return data


class ForbiddenError(DomainError):
    """Raised when a submission comes from outside the geofence."""

    status_code = 403

    def __init__(self, message: str, *, distance: float):
        super().__init__(message)
        self.distance = float(distance)

    def payload(self) -> dict[str, Any]:
        data = super().payload()
        data["distance"] = self.distance
        return data


class CollisionRetryError(DomainError):
    """Raised when every generated session code collided with an existing one."""

    status_code = 409


class DuplicateKeyError(Exception):
    """Storage contract: an insert violated the named unique constraint."""

    def __init__(self, constraint: str):
        super().__init__(f"Duplicate key for constraint {constraint}")
        self.constraint = constraint
