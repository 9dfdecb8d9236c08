"""
Live progress panel for the entry phase.

Uses Rich's Live display so the counters update in place instead of
scrolling. When disabled (no TTY, CI, --no-progress) the same interface
only keeps the counters.
"""

import time
from typing import Any, Dict, Optional

from rich import box
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


class ProgressDisplay:
    """
    Context manager showing live-updating conversion counters.

    Usage:
        with ProgressDisplay("Transcoding entries", enabled=True) as progress:
            for n, fragment in enumerate(fragments, 1):
                progress.update(Entries=n, Lines=reader.line_number)

    The first metric passed to update() drives the rate column.
    """

    def __init__(
        self,
        title: str = "Progress",
        enabled: bool = True,
        update_interval: int = 1000,
        refresh_per_second: int = 4,
    ):
        self.title = title
        self.enabled = enabled
        self.update_interval = update_interval
        self.refresh_per_second = refresh_per_second

        self.metrics: Dict[str, Any] = {}
        self.live: Optional[Live] = None
        self.start_time: float = 0.0
        self.calls: int = 0
        self._rate_metric: Optional[str] = None

    @property
    def elapsed(self) -> float:
        return time.time() - self.start_time

    def __enter__(self):
        self.start_time = time.time()
        if self.enabled:
            self.live = Live(self._render(), refresh_per_second=self.refresh_per_second)
            self.live.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.live:
            self.live.update(self._render())
            self.live.__exit__(exc_type, exc_val, exc_tb)
            self.live = None
        return False

    def update(self, **metrics):
        """Record new counter values; the panel is redrawn every update_interval calls."""
        self.calls += 1
        self.metrics.update(metrics)
        if self._rate_metric is None and metrics:
            self._rate_metric = next(iter(metrics))

        if self.live and self.calls % self.update_interval == 0:
            self.live.update(self._render())

    def _render(self) -> Panel:
        rows = dict(self.metrics)
        elapsed = self.elapsed if self.start_time else 0.0
        rows["Elapsed"] = _format_elapsed(elapsed)
        count = rows.get(self._rate_metric) if self._rate_metric else None
        if isinstance(count, (int, float)) and elapsed > 0:
            rows["Rate"] = f"{count / elapsed:,.1f}/s"

        grid = Table.grid(padding=(0, 2))
        grid.add_column(justify="left", no_wrap=True)
        grid.add_column(justify="right", no_wrap=True)
        for key, value in rows.items():
            shown = f"{value:,}" if isinstance(value, int) else str(value)
            grid.add_row(Text(f"{key}:", style="bold grey50"), Text(shown, style="bright_cyan"))

        return Panel(grid, title=self.title, box=box.SIMPLE, border_style="bright_black")


def _format_elapsed(seconds: float) -> str:
    """HH:MM:SS above an hour, MM:SS below."""
    minutes, secs = divmod(int(seconds), 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"
