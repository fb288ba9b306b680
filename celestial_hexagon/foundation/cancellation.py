"""Cooperative cancellation flag shared between a run and its owner."""

from __future__ import annotations


class CancellationToken:
    """Set once by the owner; polled by the run between batches."""

    __slots__ = ("_cancelled",)

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled
