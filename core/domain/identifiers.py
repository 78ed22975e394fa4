from __future__ import annotations

from uuid import uuid4


def generate_id() -> str:
    """Opaque string id shared by every TaskFlow entity."""
    return uuid4().hex


__all__ = ["generate_id"]
