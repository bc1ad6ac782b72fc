"""ActivityPanel widget - lists in-flight AI requests next to a spinner."""

from __future__ import annotations

from typing import Sequence

from textual.app import ComposeResult
from textual.css.query import NoMatches
from textual.widget import Widget
from textual.widgets import Static

from .ball_spinner import BallSpinner

IDLE_LABEL = "No active requests"


class ActivityPanel(Widget):
    """Shows every request the views are waiting on, one per line."""

    DEFAULT_CSS = """
    ActivityPanel {
        width: 1fr;
        height: 100%;
        padding: 0 1;
    }
    ActivityPanel .ap-title {
        text-style: bold;
    }
    ActivityPanel .ap-content {
        layout: horizontal;
        height: auto;
    }
    ActivityPanel #ap-label {
        width: 1fr;
        height: auto;
        padding-top: 1;
    }
    ActivityPanel #ap-label.-idle {
        color: $text-muted;
    }
    """

    def compose(self) -> ComposeResult:
        yield Static("Activity", id="ap-title", classes="ap-title")
        with Widget(classes="ap-content"):
            yield BallSpinner(id="ap-spinner")
            yield Static(IDLE_LABEL, id="ap-label", classes="-idle")

    def on_mount(self) -> None:
        self.show_tasks([])

    def show_tasks(self, tasks: Sequence[str]) -> None:
        """Animate the spinner while ``tasks`` is non-empty; list them under the title."""
        try:
            spinner = self.query_one("#ap-spinner", BallSpinner)
            label = self.query_one("#ap-label", Static)
            title = self.query_one("#ap-title", Static)
        except NoMatches:
            # Not composed yet
            return
        busy = bool(tasks)
        spinner.active = busy
        label.update("\n".join(tasks) if busy else IDLE_LABEL)
        label.set_class(not busy, "-idle")
        title.update(f"Activity ({len(tasks)})" if busy else "Activity")
