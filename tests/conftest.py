"""Pytest configuration providing a fake catalog API and shared fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Iterable

import httpx
import pytest

from dex_catalog.config import ApiConfig, ConfigLocator, ConfigRepository, GlobalConfig, LoaderConfig
from dex_catalog.engine.client import CatalogClient
from dex_catalog.engine.records import Record

BASE_URL = "https://pokeapi.test/api/v2"


def record_payload(record_id: int, name: str, types: Iterable[str] = ("normal",), **extra: Any) -> dict:
    payload: dict[str, Any] = {
        "id": record_id,
        "name": name,
        "types": [{"slot": index, "type": {"name": kind}} for index, kind in enumerate(types, start=1)],
        "sprites": {"front_default": f"https://sprites.test/{record_id}.png"},
        "height": 7,
        "weight": 69,
        "base_experience": 64,
        "abilities": [
            {"ability": {"name": "overgrow"}, "is_hidden": False},
            {"ability": {"name": "chlorophyll"}, "is_hidden": True},
        ],
        "stats": [
            {"stat": {"name": stat}, "base_stat": 45}
            for stat in ("hp", "attack", "defense", "special-attack", "special-defense", "speed")
        ],
    }
    payload.update(extra)
    return payload


class FakeCatalogApi:
    """Route handler standing in for the remote listing/record/species endpoints."""

    def __init__(
        self,
        payloads: list[dict],
        failing: Iterable[str] = (),
        descriptions: dict[int, list[dict]] | None = None,
        listing_status: int = 200,
    ) -> None:
        self.payloads = payloads
        self.failing = set(failing)
        self.descriptions = descriptions or {}
        self.listing_status = listing_status
        self.requests: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(str(request.url))
        path = request.url.path.rstrip("/")
        if path.endswith("/pokemon"):
            if self.listing_status != 200:
                return httpx.Response(self.listing_status)
            limit = int(request.url.params.get("limit", 20))
            results = [
                {"name": payload["name"], "url": f"{BASE_URL}/pokemon/{payload['id']}/"}
                for payload in self.payloads[:limit]
            ]
            return httpx.Response(200, json={"count": len(self.payloads), "results": results})
        key = path.rsplit("/", 1)[-1]
        if "/pokemon-species/" in request.url.path:
            entries = self.descriptions.get(int(key))
            if entries is None:
                return httpx.Response(404)
            return httpx.Response(200, json={"flavor_text_entries": entries})
        if key in self.failing:
            return httpx.Response(500)
        for payload in self.payloads:
            if key in (str(payload.get("id")), payload.get("name")):
                return httpx.Response(200, json=payload)
        return httpx.Response(404)

    def client(self) -> CatalogClient:
        return CatalogClient(BASE_URL, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def make_payload() -> Callable[..., dict]:
    return record_payload


@pytest.fixture
def make_record() -> Callable[..., Record]:
    def _builder(record_id: int, name: str, types: Iterable[str] = ("normal",), **extra: Any) -> Record:
        return Record.from_payload(record_payload(record_id, name, types, **extra))

    return _builder


@pytest.fixture
def fake_api() -> Callable[..., FakeCatalogApi]:
    def _builder(payloads: list[dict], **kwargs: Any) -> FakeCatalogApi:
        return FakeCatalogApi(payloads, **kwargs)

    return _builder


@pytest.fixture
def sample_payloads() -> list[dict]:
    return [
        record_payload(1, "bulbasaur", ("grass", "poison")),
        record_payload(4, "charmander", ("fire",)),
        record_payload(7, "squirtle", ("water",)),
        record_payload(25, "pikachu", ("electric",)),
        record_payload(152, "chikorita", ("grass",)),
        record_payload(155, "cyndaquil", ("fire",)),
        record_payload(158, "totodile", ("water",)),
    ]


@pytest.fixture
def sample_global_config(tmp_path: Path) -> GlobalConfig:
    return GlobalConfig(
        api=ApiConfig(base_url=BASE_URL, listing_limit=1010),
        loader=LoaderConfig(batch_size=3, inter_batch_delay_ms=100),
        enable_progress_bar=False,
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def recorded_sleeps() -> tuple[list[float], Callable[[float], Any]]:
    delays: list[float] = []

    async def _sleep(seconds: float) -> None:
        delays.append(seconds)

    return delays, _sleep


@pytest.fixture
def temp_config_repository(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> ConfigRepository:
    monkeypatch.setenv("DEX_CATALOG_HOME", str(tmp_path))
    return ConfigRepository(ConfigLocator(project_root=tmp_path))
