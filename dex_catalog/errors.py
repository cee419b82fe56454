"""Error taxonomy shared by the catalog client, loader and session."""

from __future__ import annotations


class CatalogError(RuntimeError):
    """Base class for every error raised by dex-catalog."""


class TransportError(CatalogError):
    """The remote service was unreachable or answered with a non-success status."""

    def __init__(self, url: str, status_code: int | None = None, reason: str | None = None) -> None:
        self.url = url
        self.status_code = status_code
        self.reason = reason
        parts = [f"status {status_code}"] if status_code is not None else []
        if reason:
            parts.append(reason)
        super().__init__(f"Request to {url} failed: {', '.join(parts) or 'unreachable'}")


class NotFoundError(CatalogError):
    """A direct lookup by name or number matched nothing."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"No record found for {key!r}")


class MalformedRecordError(CatalogError):
    """A fetched payload lacks the fields a record requires."""

    def __init__(self, source: str, missing: list[str]) -> None:
        self.source = source
        self.missing = list(missing)
        super().__init__(f"Malformed record from {source}: missing {', '.join(self.missing)}")


__all__ = ["CatalogError", "MalformedRecordError", "NotFoundError", "TransportError"]
