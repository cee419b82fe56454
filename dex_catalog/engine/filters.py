"""Filter state, its transitions and the pure recomputation of the visible view."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, NamedTuple

from .records import CATEGORIES, Record
from .segments import get_segment

_NO_CONSTRAINT = {"", "none", "all"}


def _normalise_facet(value: str | None) -> str | None:
    if value is None:
        return None
    text = value.strip().lower()
    if text in _NO_CONSTRAINT:
        return None
    return text


def get_category(value: str | None) -> str | None:
    """Return the normalised category if it is a known one, else ``None``."""

    category = _normalise_facet(value)
    return category if category in CATEGORIES else None


def normalise_term(term: str | None) -> str:
    return (term or "").strip().casefold()


@dataclass(frozen=True, slots=True)
class FilterState:
    """Active segment, category and search term; ``None``/empty means unconstrained."""

    segment: str | None = None
    category: str | None = None
    term: str = ""

    @property
    def is_unfiltered(self) -> bool:
        return self.segment is None and self.category is None and not normalise_term(self.term)


class FilterChange(NamedTuple):
    """Result of a command handler: the next state and whether to recompute."""

    state: FilterState
    recompute: bool = True


def matches_term(record: Record, term: str) -> bool:
    """Boolean OR over name, plain number and zero-padded number."""

    return (
        term in record.name.casefold()
        or term in str(record.id)
        or term in record.padded_id
    )


def recompute(canonical: Iterable[Record], state: FilterState) -> tuple[Record, ...]:
    """Derive the visible records from ``canonical``.

    Segment first, then category, then the search term over what is left.
    Canonical order is preserved. Unknown segment or category values impose
    no constraint.
    """

    visible: Iterable[Record] = canonical
    segment = get_segment(state.segment)
    if segment is not None:
        visible = [record for record in visible if record.id in segment]
    category = get_category(state.category)
    if category is not None:
        visible = [record for record in visible if record.has_category(category)]
    term = normalise_term(state.term)
    if term:
        visible = [record for record in visible if matches_term(record, term)]
    return tuple(visible)


# ----------------------------------------------------------------------
# Transitions
# ----------------------------------------------------------------------
def set_segment(state: FilterState, segment: str | None) -> FilterState:
    return replace(state, segment=_normalise_facet(segment), term="")


def set_category(state: FilterState, category: str | None) -> FilterState:
    return replace(state, category=_normalise_facet(category), term="")


def set_term(state: FilterState, term: str | None) -> FilterState:
    return replace(state, term=term or "")


def clear_term(state: FilterState) -> FilterState:
    return set_term(state, "")


# ----------------------------------------------------------------------
# Command handlers
# ----------------------------------------------------------------------
def on_segment_change(state: FilterState, segment: str | None) -> FilterChange:
    return FilterChange(set_segment(state, segment))


def on_category_change(state: FilterState, category: str | None) -> FilterChange:
    return FilterChange(set_category(state, category))


def on_search_input(state: FilterState, term: str | None) -> FilterChange:
    return FilterChange(set_term(state, term))


__all__ = [
    "FilterChange",
    "FilterState",
    "clear_term",
    "get_category",
    "matches_term",
    "normalise_term",
    "on_category_change",
    "on_search_input",
    "on_segment_change",
    "recompute",
    "set_category",
    "set_segment",
    "set_term",
]
