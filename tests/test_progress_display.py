"""Tests for the live progress panel."""

import pytest
from rich.console import Console
from rich.panel import Panel

from entrypack.progress_display import ProgressDisplay, _format_elapsed


@pytest.mark.parametrize("seconds, expected", [
    (0, "00:00"),
    (59.9, "00:59"),
    (125, "02:05"),
    (3725, "01:02:05"),
])
def test_format_elapsed(seconds, expected):
    assert _format_elapsed(seconds) == expected


def test_disabled_display_keeps_counters():
    with ProgressDisplay("Transcoding entries", enabled=False) as progress:
        progress.update(Entries=1, Lines=12)
        progress.update(Entries=2, Lines=25)

    assert progress.live is None
    assert progress.metrics == {"Entries": 2, "Lines": 25}
    assert progress.calls == 2


def test_render_shows_metrics_and_rate():
    with ProgressDisplay("Transcoding entries", enabled=False) as progress:
        progress.update(Entries=1500, Lines=30000)
        panel = progress._render()

    assert isinstance(panel, Panel)
    console = Console(width=80, record=True)
    console.print(panel)
    output = console.export_text()
    assert "Transcoding entries" in output
    assert "1,500" in output
    assert "30,000" in output
    assert "Elapsed:" in output


def test_enabled_display_closes_live():
    with ProgressDisplay("Transcoding entries", enabled=True, update_interval=1) as progress:
        assert progress.live is not None
        progress.update(Entries=1)
    assert progress.live is None
