from __future__ import annotations

import hashlib

from ..core.constants import FINGERPRINT_LENGTH
from .model import ClientContext


def device_fingerprint(client: ClientContext) -> str:
    """SHA-256 of "ip|user-agent", truncated. Logged for audit, never for dedup."""

    combined = f"{client.ip}|{client.user_agent}"
    return hashlib.sha256(combined.encode("utf-8")).hexdigest()[:FINGERPRINT_LENGTH]
