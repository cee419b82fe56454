"""Terminal progress helpers with Rich-based rendering."""

from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console
from rich.errors import LiveError
from rich.progress import (
    BarColumn,
    Progress,
    ProgressColumn,
    SpinnerColumn,
    Task,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.status import Status
from rich.text import Text

from ..engine.loader import LoadProgress


@dataclass
class ProgressState:
    total: int
    loaded: int = 0
    dropped: int = 0
    batches: int = 0


class RateColumn(ProgressColumn):
    """Render records fetched per second."""

    def render(self, task: Task) -> Text:
        speed = task.finished_speed or task.speed
        if speed is None:
            return Text("", style="progress.percentage")
        return Text(f"{speed:.1f} rec/s", style="progress.percentage")


class ProgressReporter:
    """Render load progress and maintain counters for CLI feedback."""

    def __init__(self, enabled: bool = True, console: Console | None = None) -> None:
        self.enabled = enabled
        self._console = console
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None
        self.state: ProgressState | None = None

    def start(self, total: int) -> None:
        self.state = ProgressState(total=total)
        if not self.enabled:
            return
        if self._console is None:
            self._console = Console()
        if not self._console.is_terminal:
            # non-interactive output stays silent
            self.enabled = False
            return
        self._progress = Progress(
            SpinnerColumn(style="cyan"),
            TextColumn("[bold blue]{task.fields[label]:<12}", justify="left"),
            BarColumn(bar_width=None, complete_style="green", finished_style="green"),
            TaskProgressColumn(show_speed=False),
            TimeElapsedColumn(),
            RateColumn(),
            TextColumn("[green]✓{task.fields[loaded]:>5}", justify="right"),
            TextColumn("[red]✗{task.fields[dropped]:>4}", justify="right"),
            refresh_per_second=12,
            expand=True,
            transient=True,
            console=self._console,
        )
        try:
            self._progress.__enter__()
        except LiveError:
            # another live display owns the console
            self.enabled = False
            self._progress = None
            return
        self._task_id = self._progress.add_task(
            "load", total=total, label="catálogo", loaded=0, dropped=0
        )

    def update(self, snapshot: LoadProgress) -> None:
        """Fold one loader snapshot into the counters and the bar."""

        if not self.state:
            raise RuntimeError("ProgressReporter.start must be called before update")
        if snapshot.done:
            return
        self.state.loaded = snapshot.loaded
        self.state.dropped = snapshot.dropped_count
        self.state.batches = snapshot.batch_index
        if self._progress is not None and self._task_id is not None:
            self._progress.update(
                self._task_id,
                completed=self.state.loaded + self.state.dropped,
                loaded=self.state.loaded,
                dropped=self.state.dropped,
            )

    def close(self) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress.__exit__(None, None, None)
            self._progress = None
        self._task_id = None

    def summary(self) -> dict[str, int]:
        if not self.state:
            return {"total": 0, "loaded": 0, "dropped": 0, "batches": 0}
        return {
            "total": self.state.total,
            "loaded": self.state.loaded,
            "dropped": self.state.dropped,
            "batches": self.state.batches,
        }


class ProgressActivity:
    """Spinner shown while the total is still unknown."""

    def __init__(self, enabled: bool = True, console: Console | None = None) -> None:
        self.enabled = enabled
        self._console = console or Console()
        self._status: Status | None = None

    def start(self, message: str) -> None:
        if not self.enabled or not self._console.is_terminal:
            return
        self._status = self._console.status(message, spinner="dots")
        self._status.start()

    def close(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None


__all__ = ["ProgressActivity", "ProgressReporter", "ProgressState", "RateColumn"]
