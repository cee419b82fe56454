"""Record types built from remote payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from ..errors import MalformedRecordError
from .segments import Segment, segment_for

CATEGORIES: frozenset[str] = frozenset(
    {
        "normal", "fire", "water", "electric", "grass", "ice",
        "fighting", "poison", "ground", "flying", "psychic", "bug",
        "rock", "ghost", "dragon", "dark", "steel", "fairy",
    }
)


@dataclass(frozen=True, slots=True)
class RecordRef:
    """Lightweight listing entry pointing at a full record."""

    name: str
    url: str


@dataclass(frozen=True, slots=True)
class Ability:
    name: str
    is_hidden: bool = False


@dataclass(frozen=True, slots=True)
class Stat:
    name: str
    base_stat: int


@dataclass(frozen=True, slots=True)
class Record:
    """One catalog entry as fetched from the record endpoint."""

    id: int
    name: str
    categories: tuple[str, ...]
    height: int | None = None
    weight: int | None = None
    base_experience: int | None = None
    sprite: str | None = None
    abilities: tuple[Ability, ...] = field(default_factory=tuple)
    stats: tuple[Stat, ...] = field(default_factory=tuple)

    @property
    def segment(self) -> Segment | None:
        return segment_for(self.id)

    @property
    def padded_id(self) -> str:
        return str(self.id).zfill(4)

    def has_category(self, category: str) -> bool:
        return category in self.categories

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], source: str = "payload") -> "Record":
        """Build a record, raising :class:`MalformedRecordError` when required fields are absent."""

        if not isinstance(payload, Mapping):
            raise MalformedRecordError(source, ["id", "name", "types"])
        missing: list[str] = []
        record_id = payload.get("id")
        if not isinstance(record_id, int) or isinstance(record_id, bool) or record_id < 1:
            missing.append("id")
        name = payload.get("name")
        if not isinstance(name, str) or not name.strip():
            missing.append("name")
        categories = tuple(
            entry["type"]["name"]
            for entry in payload.get("types") or []
            if isinstance(entry, Mapping)
            and isinstance(entry.get("type"), Mapping)
            and entry["type"].get("name")
        )
        if not categories:
            missing.append("types")
        if missing:
            raise MalformedRecordError(source, missing)

        sprites = payload.get("sprites") or {}
        # optional sections: unusable entries are skipped, never fatal
        abilities: list[Ability] = []
        for entry in _entries(payload.get("abilities")):
            ability_name = _nested_name(entry, "ability")
            if ability_name:
                abilities.append(Ability(name=ability_name, is_hidden=bool(entry.get("is_hidden"))))
        stats: list[Stat] = []
        for entry in _entries(payload.get("stats")):
            stat_name = _nested_name(entry, "stat")
            base_stat = _optional_int(entry.get("base_stat"))
            if stat_name and base_stat is not None:
                stats.append(Stat(name=stat_name, base_stat=base_stat))
        return cls(
            id=record_id,
            name=name,
            categories=categories,
            height=_optional_int(payload.get("height")),
            weight=_optional_int(payload.get("weight")),
            base_experience=_optional_int(payload.get("base_experience")),
            sprite=sprites.get("front_default") if isinstance(sprites, Mapping) else None,
            abilities=tuple(abilities),
            stats=tuple(stats),
        )


def _entries(value: Any) -> list[Mapping[str, Any]]:
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, Mapping)]


def _nested_name(entry: Mapping[str, Any], key: str) -> str | None:
    nested = entry.get(key)
    if not isinstance(nested, Mapping):
        return None
    name = nested.get("name")
    return name if isinstance(name, str) and name else None


def _optional_int(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


__all__ = ["Ability", "CATEGORIES", "Record", "RecordRef", "Stat"]
