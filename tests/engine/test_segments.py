from __future__ import annotations

import pytest

from dex_catalog.engine.segments import (
    MAX_RECORD_ID,
    MIN_RECORD_ID,
    SEGMENTS,
    get_segment,
    segment_for,
)


def test_every_id_belongs_to_exactly_one_segment() -> None:
    for record_id in range(MIN_RECORD_ID, MAX_RECORD_ID + 1):
        owners = [segment.key for segment in SEGMENTS if record_id in segment]
        assert len(owners) == 1, (record_id, owners)


def test_segments_are_contiguous_and_ordered() -> None:
    assert len(SEGMENTS) == 9
    assert SEGMENTS[0].start == 1
    assert SEGMENTS[-1].end == 1010
    for previous, current in zip(SEGMENTS, SEGMENTS[1:]):
        assert current.start == previous.end + 1
    assert sum(segment.size for segment in SEGMENTS) == 1010


@pytest.mark.parametrize(
    ("record_id", "expected"),
    [
        (1, "kanto"),
        (151, "kanto"),
        (152, "johto"),
        (386, "hoenn"),
        (493, "sinnoh"),
        (649, "unova"),
        (721, "kalos"),
        (809, "alola"),
        (810, "galar"),
        (1010, "paldea"),
    ],
)
def test_segment_for_boundaries(record_id: int, expected: str) -> None:
    assert segment_for(record_id).key == expected


def test_segment_for_out_of_range() -> None:
    assert segment_for(0) is None
    assert segment_for(1011) is None
    assert segment_for(10001) is None


def test_get_segment_lookup() -> None:
    assert get_segment("Johto").name == "JOHTO"
    assert get_segment(" paldea ").start == 906
    assert get_segment("orre") is None
    assert get_segment("") is None
    assert get_segment(None) is None
