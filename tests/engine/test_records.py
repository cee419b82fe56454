from __future__ import annotations

import pytest

from dex_catalog.engine.records import Ability, Record, Stat
from dex_catalog.errors import MalformedRecordError


def test_from_payload_maps_fields(make_payload) -> None:
    record = Record.from_payload(make_payload(1, "bulbasaur", ("grass", "poison")))
    assert record.id == 1
    assert record.name == "bulbasaur"
    assert record.categories == ("grass", "poison")
    assert record.sprite == "https://sprites.test/1.png"
    assert record.height == 7
    assert record.weight == 69
    assert record.base_experience == 64
    assert record.abilities == (
        Ability("overgrow", is_hidden=False),
        Ability("chlorophyll", is_hidden=True),
    )
    assert record.stats[0] == Stat("hp", 45)
    assert len(record.stats) == 6


def test_derived_segment_and_padding(make_record) -> None:
    record = make_record(7, "squirtle", ("water",))
    assert record.padded_id == "0007"
    assert record.segment.key == "kanto"
    assert make_record(1010, "pecharunt").padded_id == "1010"
    assert make_record(10001, "deoxys-attack").segment is None


@pytest.mark.parametrize(
    ("overrides", "missing"),
    [
        ({"id": None}, ["id"]),
        ({"id": 0}, ["id"]),
        ({"id": "7"}, ["id"]),
        ({"name": ""}, ["name"]),
        ({"types": []}, ["types"]),
        ({"types": [{"type": {}}]}, ["types"]),
        ({"id": None, "name": None, "types": None}, ["id", "name", "types"]),
    ],
)
def test_from_payload_rejects_missing_fields(make_payload, overrides, missing) -> None:
    payload = make_payload(7, "squirtle", ("water",))
    payload.update(overrides)
    with pytest.raises(MalformedRecordError) as excinfo:
        Record.from_payload(payload, source="https://pokeapi.test/pokemon/7/")
    assert excinfo.value.missing == missing
    assert "pokemon/7" in str(excinfo.value)


def test_from_payload_tolerates_optional_fields(make_payload) -> None:
    payload = make_payload(25, "pikachu", ("electric",))
    for key in ("sprites", "height", "weight", "base_experience", "abilities", "stats"):
        payload.pop(key)
    record = Record.from_payload(payload)
    assert record.sprite is None
    assert record.stats == ()
    assert record.abilities == ()


def test_records_are_immutable(make_record) -> None:
    record = make_record(4, "charmander", ("fire",))
    with pytest.raises(AttributeError):
        record.id = 5  # type: ignore[misc]


def test_from_payload_skips_unusable_optional_entries(make_payload) -> None:
    payload = make_payload(25, "pikachu", ("electric",), height="tall", weight=True, base_experience=None)
    payload["abilities"] = [
        {"ability": {}},
        {"ability": None},
        "static",
        {"ability": {"name": "lightning-rod"}, "is_hidden": True},
    ]
    payload["stats"][0]["base_stat"] = "n/a"
    payload["stats"][1]["stat"] = {}
    payload["stats"][2]["base_stat"] = False
    record = Record.from_payload(payload)
    assert record.abilities == (Ability("lightning-rod", is_hidden=True),)
    assert [stat.name for stat in record.stats] == ["special-attack", "special-defense", "speed"]
    assert (record.height, record.weight, record.base_experience) == (None, None, None)


def test_from_payload_ignores_non_list_sections(make_payload) -> None:
    payload = make_payload(1, "bulbasaur", ("grass",), abilities={"ability": {"name": "overgrow"}}, stats="none")
    record = Record.from_payload(payload)
    assert record.abilities == ()
    assert record.stats == ()
