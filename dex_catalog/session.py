"""Catalog session wiring client, loader, store and filter state together."""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass
from typing import Awaitable, Callable

import structlog

from .config import GlobalConfig
from .engine import filters
from .engine.client import DEFAULT_DESCRIPTION, CatalogClient
from .engine.filters import FilterChange, FilterState
from .engine.loader import BatchLoader, CancelToken, LoadProgress
from .engine.records import Record
from .engine.segments import MAX_RECORD_ID, MIN_RECORD_ID, Segment, get_segment
from .engine.store import CatalogStore
from .errors import TransportError
from .logging_conf import get_logger
from .ui import ProgressReporter


@dataclass(frozen=True, slots=True)
class CatalogStatus:
    """What a status bar shows: visible count and active facets."""

    visible: int
    loaded: int
    segment: Segment | None
    category: str | None
    term: str


@dataclass(frozen=True, slots=True)
class RecordDetail:
    record: Record
    description: str


class CatalogSession:
    """Own one catalog: its store, its filter state and the client feeding it."""

    def __init__(
        self,
        config: GlobalConfig | None = None,
        client: CatalogClient | None = None,
        store: CatalogStore | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.config = config or GlobalConfig()
        self.logger = logger or get_logger("session")
        self.client = client or CatalogClient(
            self.config.api.base_url,
            timeout=self.config.api.timeout,
            user_agent=self.config.api.user_agent,
        )
        self.store = store if store is not None else CatalogStore()
        self.loader = BatchLoader(
            self.client,
            self.store,
            batch_size=self.config.loader.batch_size,
            inter_batch_delay=self.config.loader.inter_batch_delay,
            sleep=sleep,
            logger=self.logger.bind(component="loader"),
        )
        self._state = FilterState()

    async def __aenter__(self) -> "CatalogSession":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    async def load(
        self,
        progress: ProgressReporter | None = None,
        cancel: CancelToken | None = None,
    ) -> LoadProgress:
        """Fetch the listing, then every record batch by batch.

        A listing failure is logged and re-raised; nothing is appended.
        """

        limit = self.config.api.listing_limit
        try:
            refs = await self.client.fetch_listing(limit)
        except TransportError as exc:
            self.logger.error("listing_fetch_failed", limit=limit, error=str(exc))
            raise

        if progress is not None:
            progress.start(total=len(refs))
        final: LoadProgress | None = None
        try:
            async for snapshot in self.loader.load_all(refs, cancel=cancel):
                if progress is not None:
                    progress.update(snapshot)
                if snapshot.done:
                    final = snapshot
        finally:
            if progress is not None:
                progress.close()

        self.refresh()
        self.logger.info(
            "catalog_loaded",
            loaded=final.loaded,
            dropped=final.dropped_count,
            cancelled=final.cancelled,
        )
        return final

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------
    @property
    def state(self) -> FilterState:
        return self._state

    @property
    def visible(self) -> tuple[Record, ...]:
        return self.store.snapshot_visible()

    @property
    def loaded_count(self) -> int:
        return len(self.store)

    def apply(self, change: FilterChange) -> tuple[Record, ...]:
        self._state = change.state
        if change.recompute:
            self.refresh()
        return self.visible

    def refresh(self) -> tuple[Record, ...]:
        self.store.set_visible(filters.recompute(self.store.snapshot_canonical(), self._state))
        return self.visible

    def change_segment(self, segment: str | None) -> tuple[Record, ...]:
        return self.apply(filters.on_segment_change(self._state, segment))

    def change_category(self, category: str | None) -> tuple[Record, ...]:
        return self.apply(filters.on_category_change(self._state, category))

    def search(self, term: str | None) -> tuple[Record, ...]:
        return self.apply(filters.on_search_input(self._state, term))

    def clear_search(self) -> tuple[Record, ...]:
        return self.apply(filters.on_search_input(self._state, ""))

    def status(self) -> CatalogStatus:
        return CatalogStatus(
            visible=len(self.visible),
            loaded=self.loaded_count,
            segment=get_segment(self._state.segment),
            category=filters.get_category(self._state.category),
            term=self._state.term,
        )

    # ------------------------------------------------------------------
    # Detail views
    # ------------------------------------------------------------------
    async def lookup(self, key: str | int) -> Record:
        """Resolve a name or number remotely; the store is left untouched."""
        return await self.client.lookup(key)

    async def detail(self, key: str | int) -> RecordDetail:
        """Record plus species description; by number both requests run together."""

        text = str(key).strip()
        if text.isdigit():
            record_id = int(text)
            record, description = await asyncio.gather(
                self.client.lookup(record_id), self._description(record_id)
            )
        else:
            record = await self.client.lookup(text)
            description = await self._description(record.id)
        return RecordDetail(record=record, description=description)

    async def _description(self, record_id: int) -> str:
        try:
            return await self.client.fetch_description(
                record_id, self.config.description_language
            )
        except TransportError as exc:
            self.logger.warning("description_fetch_failed", record_id=record_id, error=str(exc))
            return DEFAULT_DESCRIPTION

    @staticmethod
    def previous_id(record_id: int) -> int | None:
        return record_id - 1 if record_id > MIN_RECORD_ID else None

    @staticmethod
    def next_id(record_id: int) -> int | None:
        return record_id + 1 if record_id < MAX_RECORD_ID else None

    @staticmethod
    def random_id(rng: random.Random | None = None) -> int:
        return (rng or random).randint(MIN_RECORD_ID, MAX_RECORD_ID)


__all__ = ["CatalogSession", "CatalogStatus", "RecordDetail"]
