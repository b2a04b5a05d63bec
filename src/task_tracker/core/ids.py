"""Identifier generation for stored records."""

from __future__ import annotations

from collections.abc import Container
from uuid import uuid4


def generate_id() -> str:
    """Return a random 128-bit identifier drawn from the OS CSPRNG."""
    return uuid4().hex


def generate_unique_id(existing: Container[str]) -> str:
    """Return an identifier not present in ``existing``.

    Callers must hold the write lock guarding ``existing`` so the returned id
    stays unused until it is inserted.
    """
    while True:
        candidate = generate_id()
        if candidate not in existing:
            return candidate


__all__ = ["generate_id", "generate_unique_id"]
