"""In-memory catalog holding the canonical and visible collections."""

from __future__ import annotations

from typing import Iterable

from .records import Record


class CatalogStore:
    """Append-only canonical collection plus a fully replaced visible subset.

    Duplicate ids coming from the listing are kept as-is.
    """

    def __init__(self) -> None:
        self._canonical: list[Record] = []
        self._visible: tuple[Record, ...] = ()

    def append(self, records: Iterable[Record]) -> int:
        """Append records in arrival order and return the new canonical size."""
        self._canonical.extend(records)
        return len(self._canonical)

    def snapshot_canonical(self) -> tuple[Record, ...]:
        return tuple(self._canonical)

    def set_visible(self, records: Iterable[Record]) -> None:
        self._visible = tuple(records)

    def snapshot_visible(self) -> tuple[Record, ...]:
        return self._visible

    def __len__(self) -> int:
        return len(self._canonical)


__all__ = ["CatalogStore"]
