"""BetAnalyzer widget - live matchups, custom matchup analysis and the AI parlay."""

from __future__ import annotations

from rich.markdown import Markdown as RichMarkdown
from rich.text import Text
from textual import work
from textual.app import ComposeResult
from textual.css.query import NoMatches
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widget import Widget
from textual.widgets import Button, ContentSwitcher, OptionList, Select, Static

from ...queries.models import Matchup
from ...teams import NBA_TEAMS
from ...views.analyzer import FILTER_OPTIONS, PARLAY_STAGES, AnalyzerView
from ..render import (
    bet_markdown,
    market_label,
    matchup_label,
    parlay_markdown,
    parlay_stages_markdown,
    suggestions_markdown,
)
from .status_bar import format_stamp


class BetAnalyzer(Widget):
    """Analyzer panel driven by AnalyzerView."""

    DEFAULT_CSS = """
    BetAnalyzer {
        width: 2fr;
        height: 100%;
        border: round $accent;
        padding: 0 1;
    }
    BetAnalyzer .ba-toolbar {
        height: auto;
    }
    BetAnalyzer .ba-status {
        color: $text-muted;
        height: auto;
    }
    BetAnalyzer .ba-error {
        color: $error;
        height: auto;
    }
    BetAnalyzer OptionList {
        height: 1fr;
    }
    BetAnalyzer #market-detail {
        height: 1fr;
    }
    BetAnalyzer .ba-teams {
        height: auto;
    }
    BetAnalyzer .ba-teams Select {
        width: 1fr;
    }
    """

    def __init__(self, view: AnalyzerView, **kwargs) -> None:
        super().__init__(**kwargs)
        self._view = view
        self._shown_matchups: list[Matchup] = []
        self._shown_markets = []

    def compose(self) -> ComposeResult:
        with Horizontal(classes="ba-toolbar"):
            yield Button("Live", id="mode-live")
            yield Button("Custom", id="mode-custom")
            yield Button("AI Parlay", id="generate-parlay", variant="warning")
            yield Button("Back", id="analyzer-back")
            yield Button("Refresh", id="refresh-matchups")
        yield Static("", id="analyzer-status", classes="ba-status")
        yield Static("", id="analyzer-error", classes="ba-error")
        with ContentSwitcher(initial="live-pane", id="analyzer-switcher"):
            with Vertical(id="live-pane"):
                yield OptionList(id="matchup-list")
                with Vertical(id="market-pane"):
                    yield Select(
                        [(name, name) for name in FILTER_OPTIONS],
                        value="All",
                        allow_blank=False,
                        id="bet-filter",
                    )
                    yield OptionList(id="market-list")
                    with VerticalScroll(id="market-detail"):
                        yield Static("", id="bet-analysis")
            with Vertical(id="custom-pane"):
                with Horizontal(classes="ba-teams"):
                    yield Select(
                        [(t, t) for t in NBA_TEAMS], value=NBA_TEAMS[0], allow_blank=False, id="team-a"
                    )
                    yield Select(
                        [(t, t) for t in NBA_TEAMS], value=NBA_TEAMS[1], allow_blank=False, id="team-b"
                    )
                    yield Button("Analyze", id="run-custom", variant="primary")
                with VerticalScroll():
                    yield Static("", id="custom-result")
            with VerticalScroll(id="parlay-pane"):
                yield Static("", id="parlay-result")

    def on_mount(self) -> None:
        self._view.subscribe(self._render_view)
        self._view.start()
        self._render_view()
        self.load_matchups()

    def on_unmount(self) -> None:
        self._view.stop()
        self._view.unsubscribe(self._render_view)

    # --- Workers ---

    @work
    async def load_matchups(self, silent: bool = False) -> None:
        await self._view.load_matchups(silent=silent)

    @work
    async def _select_matchup(self, matchup: Matchup) -> None:
        await self._view.select_matchup(matchup)

    @work
    async def _analyze_bet(self, option) -> None:
        await self._view.analyze_bet(option)

    @work
    async def _analyze_custom(self, team_a: str, team_b: str) -> None:
        await self._view.analyze_custom(team_a, team_b)

    @work(exclusive=True, group="parlay")
    async def generate_parlay(self) -> None:
        await self._view.generate_parlay()

    # --- Events ---

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "mode-live":
            self._view.set_mode("live")
        elif button_id == "mode-custom":
            self._view.set_mode("custom")
        elif button_id == "generate-parlay":
            self.generate_parlay()
        elif button_id == "analyzer-back":
            self._view.reset()
        elif button_id == "refresh-matchups":
            self.load_matchups()
        elif button_id == "run-custom":
            team_a = self.query_one("#team-a", Select).value
            team_b = self.query_one("#team-b", Select).value
            self._analyze_custom(str(team_a), str(team_b))

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        index = event.option_index
        if event.option_list.id == "matchup-list" and index < len(self._shown_matchups):
            self._select_matchup(self._shown_matchups[index])
        elif event.option_list.id == "market-list" and index < len(self._shown_markets):
            self._analyze_bet(self._shown_markets[index])

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id == "bet-filter" and event.value != self._view.bet_filter:
            self._view.set_filter(str(event.value))

    # --- Rendering ---

    def _render_view(self) -> None:
        try:
            switcher = self.query_one("#analyzer-switcher", ContentSwitcher)
        except NoMatches:
            return
        view = self._view
        switcher.current = f"{view.mode}-pane"
        self.query_one("#analyzer-back", Button).display = (
            view.mode == "parlay" or view.selected_matchup is not None
        )
        self.query_one("#generate-parlay", Button).disabled = view.parlay.loading

        if view.mode == "live":
            self._render_live()
        elif view.mode == "custom":
            self._render_custom()
        else:
            self._render_parlay()

    def _set_status(self, text: str, error: str | None = None) -> None:
        self.query_one("#analyzer-status", Static).update(text)
        error_widget = self.query_one("#analyzer-error", Static)
        error_widget.update(error or "")
        error_widget.display = bool(error)

    def _render_live(self) -> None:
        view = self._view
        matchup_list = self.query_one("#matchup-list", OptionList)
        market_pane = self.query_one("#market-pane", Vertical)

        if view.selected_matchup is None:
            matchup_list.display = True
            market_pane.display = False
            if view.matchups.loading and not view.matchup_list:
                self._set_status("Scanning for scheduled games and lines...")
            else:
                self._set_status(
                    f"Select a game for deep analysis. Updated {format_stamp(view.matchups.last_updated)}",
                    view.matchups.error_message,
                )
            if view.matchup_list != self._shown_matchups:
                self._shown_matchups = list(view.matchup_list)
                matchup_list.clear_options()
                matchup_list.add_options([Text(matchup_label(m)) for m in self._shown_matchups])
            return

        matchup_list.display = False
        market_pane.display = True
        selected = view.selected_matchup
        if view.markets.loading:
            self._set_status(f"{selected.label}: loading available bets...")
        else:
            self._set_status(
                f"{selected.label}: {len(view.filtered_bets)} of {len(view.available_bets)} bets",
                view.markets.error_message,
            )

        filter_select = self.query_one("#bet-filter", Select)
        if filter_select.value != view.bet_filter:
            filter_select.value = view.bet_filter

        filtered = view.filtered_bets
        if filtered != self._shown_markets:
            self._shown_markets = filtered
            market_list = self.query_one("#market-list", OptionList)
            market_list.clear_options()
            market_list.add_options([Text(market_label(o)) for o in filtered])

        detail = self.query_one("#bet-analysis", Static)
        if view.bet_analysis.loading and view.selected_bet is not None:
            detail.update(f"Analyzing {view.selected_bet.label}...")
        elif view.bet_analysis.error_message:
            detail.update(view.bet_analysis.error_message)
        elif view.bet_analysis.result is not None:
            detail.update(RichMarkdown(bet_markdown(view.bet_analysis.result)))
        else:
            detail.update("Pick a bet to analyze it.")

    def _render_custom(self) -> None:
        view = self._view
        result = self.query_one("#custom-result", Static)
        self.query_one("#run-custom", Button).disabled = view.custom.loading
        if view.custom.loading:
            self._set_status(f"Analyzing {view.team_a} vs {view.team_b}...")
            result.update("")
        elif view.custom.error_message:
            self._set_status("Custom matchup", view.custom.error_message)
            result.update("")
        elif view.custom.result is not None:
            self._set_status(f"{view.team_a} vs {view.team_b}")
            result.update(RichMarkdown(suggestions_markdown(view.custom.result)))
        else:
            self._set_status("Pick two teams and press Analyze.")
            result.update("")

    def _render_parlay(self) -> None:
        view = self._view
        result = self.query_one("#parlay-result", Static)
        if view.parlay.loading:
            self._set_status("Building the AI Power Parlay...")
            result.update(RichMarkdown(parlay_stages_markdown(PARLAY_STAGES, view.parlay_stage)))
        elif view.parlay.error_message:
            self._set_status("AI Power Parlay", view.parlay.error_message)
            result.update("Press AI Parlay to retry or Back to return.")
        elif view.parlay.result is not None:
            self._set_status("AI Power Parlay")
            result.update(RichMarkdown(parlay_markdown(view.parlay.result, view.slip_id)))
        else:
            self._set_status("Press AI Parlay to build today's 4-leg parlay.")
            result.update("")
