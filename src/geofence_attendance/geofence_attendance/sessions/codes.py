from __future__ import annotations

import secrets

from ..core.constants import SESSION_CODE_BYTES


def generate_code() -> str:
    """6 uppercase hex characters from a CSPRNG."""
    return secrets.token_hex(SESSION_CODE_BYTES).upper()


def normalize_code(code: str) -> str:
    return code.strip().upper()
