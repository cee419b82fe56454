"""Static regional segments partitioning the national number range."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Segment:
    """Inclusive id range grouping the records of one region."""

    key: str
    start: int
    end: int
    name: str

    def __contains__(self, record_id: object) -> bool:
        return isinstance(record_id, int) and self.start <= record_id <= self.end

    @property
    def size(self) -> int:
        return self.end - self.start + 1


SEGMENTS: tuple[Segment, ...] = (
    Segment("kanto", 1, 151, "KANTO"),
    Segment("johto", 152, 251, "JOHTO"),
    Segment("hoenn", 252, 386, "HOENN"),
    Segment("sinnoh", 387, 493, "SINNOH"),
    Segment("unova", 494, 649, "UNOVA"),
    Segment("kalos", 650, 721, "KALOS"),
    Segment("alola", 722, 809, "ALOLA"),
    Segment("galar", 810, 905, "GALAR"),
    Segment("paldea", 906, 1010, "PALDEA"),
)

SEGMENTS_BY_KEY: dict[str, Segment] = {segment.key: segment for segment in SEGMENTS}

MIN_RECORD_ID = SEGMENTS[0].start
MAX_RECORD_ID = SEGMENTS[-1].end


def get_segment(key: str | None) -> Segment | None:
    """Return the segment for ``key`` (case-insensitive) or ``None`` if unknown."""

    if not key:
        return None
    return SEGMENTS_BY_KEY.get(key.strip().lower())


def segment_for(record_id: int) -> Segment | None:
    """Return the segment whose range contains ``record_id``."""

    for segment in SEGMENTS:
        if record_id in segment:
            return segment
    return None


__all__ = [
    "MAX_RECORD_ID",
    "MIN_RECORD_ID",
    "SEGMENTS",
    "SEGMENTS_BY_KEY",
    "Segment",
    "get_segment",
    "segment_for",
]
