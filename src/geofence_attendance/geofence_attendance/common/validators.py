from __future__ import annotations

import math
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str, *, max_len: Optional[int] = None) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    value = value.strip()
    if max_len is not None and len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value


def require_coordinate(value: Any, field_name: str, *, limit: float) -> float:
    # bool is an int subclass; JSON true/false is not a coordinate.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{field_name} must be a number")
    value = float(value)
    if math.isnan(value) or math.isinf(value) or abs(value) > limit:
        raise ValidationError(f"{field_name} is out of range")
    return value


def require_latitude(value: Any, field_name: str = "lat") -> float:
    return require_coordinate(value, field_name, limit=90.0)


def require_longitude(value: Any, field_name: str = "lng") -> float:
    return require_coordinate(value, field_name, limit=180.0)
