"""BallSpinner widget - ASCII basketball animation."""

from textual.app import ComposeResult
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.widget import Widget
from textual.widgets import Static

# Ball drops towards the hoop and back
BALL_FRAMES = [
    " o   \n     \n|__| ",
    "  o  \n     \n|__| ",
    "     \n  o  \n|__| ",
    "     \n     \n|o_| ",
    "     \n  o  \n|__| ",
]

IDLE_FRAME = "     \n     \n|__| "


class BallSpinner(Widget):
    """Animated ASCII basketball spinner."""

    DEFAULT_CSS = """
    BallSpinner {
        width: 8;
        height: 3;
        content-align: center middle;
    }
    """

    active: reactive[bool] = reactive(False)
    _frame_index: int = 0
    _timer = None

    def compose(self) -> ComposeResult:
        yield Static(IDLE_FRAME, id="spinner-frame")

    def watch_active(self, value: bool) -> None:
        if value:
            if self._timer is None:
                self._frame_index = 0
                self._timer = self.set_interval(0.3, self._advance_frame)
        else:
            if self._timer is not None:
                self._timer.stop()
                self._timer = None
            self._frame_index = 0
            try:
                self.query_one("#spinner-frame", Static).update(IDLE_FRAME)
            except NoMatches:
                pass

    def _advance_frame(self) -> None:
        self._frame_index = (self._frame_index + 1) % len(BALL_FRAMES)
        try:
            self.query_one("#spinner-frame", Static).update(BALL_FRAMES[self._frame_index])
        except NoMatches:
            pass
