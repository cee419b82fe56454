"""dex-catalog: load, filter and browse a remote creature catalog."""

from .errors import CatalogError, MalformedRecordError, NotFoundError, TransportError
from .session import CatalogSession, CatalogStatus, RecordDetail

__version__ = "0.1.0"

__all__ = [
    "CatalogError",
    "CatalogSession",
    "CatalogStatus",
    "MalformedRecordError",
    "NotFoundError",
    "RecordDetail",
    "TransportError",
    "__version__",
]
