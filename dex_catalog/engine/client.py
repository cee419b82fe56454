"""Async HTTP access to the remote catalog service."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from ..errors import NotFoundError, TransportError
from .records import Record, RecordRef

DEFAULT_DESCRIPTION = "Descrição não disponível"


class CatalogClient:
    """Thin wrapper over ``httpx.AsyncClient`` speaking the catalog endpoints."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.logger = logger or structlog.get_logger("dex_catalog.client")
        self._client = httpx.AsyncClient(
            follow_redirects=True,
            timeout=timeout,
            headers={"User-Agent": user_agent} if user_agent else None,
            transport=transport,
        )

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    async def fetch_listing(self, limit: int) -> list[RecordRef]:
        """Return the ordered reference list, at most ``limit`` entries."""

        url = f"{self.base_url}/pokemon"
        payload = await self._get_json(url, params={"limit": limit})
        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            raise TransportError(url, reason="listing response has no results")
        refs = [
            RecordRef(name=str(entry.get("name", "")), url=str(entry["url"]))
            for entry in results
            if isinstance(entry, dict) and entry.get("url")
        ]
        self.logger.info("listing_fetched", url=url, count=len(refs), limit=limit)
        return refs

    async def fetch_record(self, url: str) -> Record:
        payload = await self._get_json(url)
        return Record.from_payload(payload, source=url)

    async def lookup(self, key: str | int) -> Record:
        """Fetch a single record by name or number."""

        normalised = str(key).strip().lower()
        if not normalised:
            raise NotFoundError(str(key))
        if normalised.isdigit():
            normalised = str(int(normalised))
        url = f"{self.base_url}/pokemon/{normalised}"
        try:
            payload = await self._get_json(url)
        except TransportError as exc:
            if exc.status_code == 404:
                raise NotFoundError(normalised) from exc
            raise
        return Record.from_payload(payload, source=url)

    async def fetch_description(self, record_id: int, language: str = "en") -> str:
        """Return the first flavor text in ``language`` for the record's species."""

        url = f"{self.base_url}/pokemon-species/{record_id}"
        payload = await self._get_json(url)
        if not isinstance(payload, dict):
            raise TransportError(url, reason="species response is not an object")
        entries = payload.get("flavor_text_entries")
        for entry in entries if isinstance(entries, list) else []:
            if not isinstance(entry, dict):
                continue
            entry_language = entry.get("language")
            text = entry.get("flavor_text")
            if (
                isinstance(entry_language, dict)
                and entry_language.get("name") == language
                and isinstance(text, str)
                and text
            ):
                return text.replace("\f", " ")
        return DEFAULT_DESCRIPTION

    # ------------------------------------------------------------------
    async def _get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise TransportError(url, reason=str(exc) or exc.__class__.__name__) from exc
        if response.is_error:
            raise TransportError(url, status_code=response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(url, status_code=response.status_code, reason="invalid JSON body") from exc


__all__ = ["CatalogClient", "DEFAULT_DESCRIPTION"]
