"""Version tags for uploads and scenario clones."""
import secrets
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current instant in UTC."""
    return datetime.now(timezone.utc)


def generate_version(now: Optional[datetime] = None) -> str:
    """
    Timestamp-derived version tag, e.g. "2024-07-01-120000-9f3a".

    The random suffix keeps two versions created in the same second apart.
    """
    now = now or utc_now()
    return f"{now:%Y-%m-%d-%H%M%S}-{secrets.token_hex(2)}"
