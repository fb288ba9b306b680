"""Deterministic ID generation for domain objects."""

from __future__ import annotations

from uuid import UUID, uuid4


def new_id() -> UUID:
    """Generate a new random UUID v4 for sessions."""
    return uuid4()


def event_id(line_index: int, jdn: int) -> str:
    """Identifier for a catalog event: source line index plus day number.

    The line index alone is unique within one catalog; the day number is
    kept so ids stay readable in logs and exports.
    """
    return f"e-{line_index}-{jdn}"
