from __future__ import annotations

import pytest
from rich.console import Console

from dex_catalog.engine.loader import LoadProgress
from dex_catalog.ui import ProgressActivity, ProgressReporter
from dex_catalog.ui import labels


def test_progress_reporter_counts() -> None:
    reporter = ProgressReporter(enabled=False)
    reporter.start(total=7)
    reporter.update(LoadProgress(loaded=3, batch_index=1, batch_count=3))
    reporter.update(LoadProgress(loaded=5, batch_index=2, batch_count=3, dropped=(object(),)))
    reporter.update(LoadProgress(loaded=5, batch_index=2, batch_count=3, done=True, records=()))
    summary = reporter.summary()
    reporter.close()
    assert summary == {"total": 7, "loaded": 5, "dropped": 1, "batches": 2}


def test_progress_requires_start() -> None:
    reporter = ProgressReporter(enabled=False)
    assert reporter.summary() == {"total": 0, "loaded": 0, "dropped": 0, "batches": 0}
    with pytest.raises(RuntimeError):
        reporter.update(LoadProgress(loaded=0, batch_index=0, batch_count=0))


def test_progress_is_silent_off_terminal() -> None:
    console = Console(file=None, force_terminal=False)
    reporter = ProgressReporter(enabled=True, console=console)
    reporter.start(total=2)
    assert not reporter.enabled
    reporter.update(LoadProgress(loaded=2, batch_index=1, batch_count=1))
    reporter.close()
    assert reporter.summary()["loaded"] == 2

    activity = ProgressActivity(enabled=True, console=console)
    activity.start("Carregando lista...")
    activity.close()


def test_type_and_stat_labels() -> None:
    assert labels.type_label("fire") == "Fogo"
    assert labels.type_label("electric", short=True) == "Elé"
    assert labels.type_label("shadow") == "shadow"
    assert labels.stat_label("special-attack") == "Ataque Esp."
    assert len(labels.TYPE_LABELS) == 18


@pytest.mark.parametrize("record_id, expected", [(1, "#0001"), (25, "#0025"), (1010, "#1010")])
def test_format_number(record_id: int, expected: str) -> None:
    assert labels.format_number(record_id) == expected


def test_measurements_and_bars() -> None:
    assert labels.decimetres_to_metres(7) == pytest.approx(0.7)
    assert labels.hectograms_to_kilograms(69) == pytest.approx(6.9)
    assert labels.decimetres_to_metres(None) is None
    assert labels.stat_bar_percent(100) == 50
    assert labels.stat_bar_percent(255) == 100


def test_names_and_abilities() -> None:
    assert labels.display_name("mr-mime") == "Mr-mime"
    assert labels.ability_label("solar-power", False) == "solar power"
    assert labels.ability_label("chlorophyll", True) == "chlorophyll (Oculta)"
