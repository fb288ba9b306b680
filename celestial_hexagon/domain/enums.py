"""Controlled enumerations for the celestial-hexagon domain.

Every categorical field in the domain MUST reference an enum defined here.
Catalog-specific labels (e.g. Korean) are mapped onto these by adapters.
"""

from __future__ import annotations

from enum import Enum


class EclipseCategory(str, Enum):
    """Which body is eclipsed."""

    SOLAR = "solar"
    LUNAR = "lunar"


class EclipseKind(str, Enum):
    """Eclipse magnitude class.  Current catalogs only carry totals."""

    TOTAL = "total"


class SearchState(str, Enum):
    """Lifecycle of one pattern search run."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"
