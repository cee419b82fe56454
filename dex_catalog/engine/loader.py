"""Batch loader filling the catalog store from a reference listing."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import AsyncIterator, Awaitable, Callable, Iterable, Protocol, Sequence

import structlog

from .records import Record, RecordRef
from .store import CatalogStore


class RecordSource(Protocol):
    """Anything able to fetch one full record from its reference URL."""

    async def fetch_record(self, url: str) -> Record:  # pragma: no cover - protocol
        ...


@dataclass(frozen=True, slots=True)
class LoadProgress:
    """Snapshot emitted after each batch and once more when the load ends."""

    loaded: int
    batch_index: int
    batch_count: int
    batch_dropped: tuple[RecordRef, ...] = ()
    dropped: tuple[RecordRef, ...] = ()
    records: tuple[Record, ...] | None = None
    done: bool = False
    cancelled: bool = False

    @property
    def dropped_count(self) -> int:
        return len(self.dropped)


class CancelToken:
    """Cooperative cancellation flag checked between batches."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


def chunked(refs: Sequence[RecordRef], size: int) -> list[Sequence[RecordRef]]:
    if size < 1:
        raise ValueError("batch size must be >= 1")
    return [refs[start : start + size] for start in range(0, len(refs), size)]


class BatchLoader:
    """Fetch records batch by batch, each batch a full join-all barrier.

    Failed fetches are dropped from their batch and reported in the
    progress snapshots; they are never retried within the same load.
    """

    def __init__(
        self,
        source: RecordSource,
        store: CatalogStore,
        batch_size: int = 50,
        inter_batch_delay: float = 0.1,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        if inter_batch_delay < 0:
            raise ValueError("inter_batch_delay must be >= 0")
        self.source = source
        self.store = store
        self.batch_size = batch_size
        self.inter_batch_delay = inter_batch_delay
        self._sleep = sleep
        self.logger = logger or structlog.get_logger("dex_catalog.loader")

    async def load_all(
        self, refs: Iterable[RecordRef], cancel: CancelToken | None = None
    ) -> AsyncIterator[LoadProgress]:
        refs = list(refs)
        batches = chunked(refs, self.batch_size)
        dropped: list[RecordRef] = []
        processed = 0
        cancelled = False

        for index, batch in enumerate(batches, start=1):
            if cancel is not None and cancel.cancelled:
                cancelled = True
                self.logger.info("load_cancelled", batch=index, batch_count=len(batches))
                break
            results = await asyncio.gather(
                *(self.source.fetch_record(ref.url) for ref in batch),
                return_exceptions=True,
            )
            succeeded: list[Record] = []
            batch_dropped: list[RecordRef] = []
            for ref, result in zip(batch, results):
                if isinstance(result, Record):
                    succeeded.append(result)
                    continue
                if isinstance(result, BaseException) and not isinstance(result, Exception):
                    raise result
                batch_dropped.append(ref)
                self.logger.warning(
                    "record_fetch_failed",
                    name=ref.name,
                    url=ref.url,
                    error=str(result),
                    error_type=type(result).__name__,
                )
            total = self.store.append(succeeded)
            dropped.extend(batch_dropped)
            processed = index
            self.logger.info(
                "batch_loaded",
                batch=index,
                batch_count=len(batches),
                succeeded=len(succeeded),
                dropped=len(batch_dropped),
                total=total,
            )
            yield LoadProgress(
                loaded=total,
                batch_index=index,
                batch_count=len(batches),
                batch_dropped=tuple(batch_dropped),
                dropped=tuple(dropped),
            )
            await self._sleep(self.inter_batch_delay)

        yield LoadProgress(
            loaded=len(self.store),
            batch_index=processed,
            batch_count=len(batches),
            dropped=tuple(dropped),
            records=self.store.snapshot_canonical(),
            done=True,
            cancelled=cancelled,
        )


__all__ = ["BatchLoader", "CancelToken", "LoadProgress", "RecordSource", "chunked"]
