from __future__ import annotations

from enum import Enum


class SessionState(str, Enum):
    """Lifecycle state of an attendance session (Expired is terminal)."""

    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"


class ReportFormat(str, Enum):
    CSV = "csv"
    EXCEL = "excel"
