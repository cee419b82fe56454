"""Engine components orchestrating listing → batch load → store → filter."""

from .client import CatalogClient
from .filters import FilterChange, FilterState, recompute
from .loader import BatchLoader, CancelToken, LoadProgress
from .records import CATEGORIES, Record, RecordRef
from .segments import SEGMENTS, Segment, get_segment, segment_for
from .store import CatalogStore

__all__ = [
    "BatchLoader",
    "CATEGORIES",
    "CancelToken",
    "CatalogClient",
    "CatalogStore",
    "FilterChange",
    "FilterState",
    "LoadProgress",
    "Record",
    "RecordRef",
    "SEGMENTS",
    "Segment",
    "get_segment",
    "recompute",
    "segment_for",
]
