"""Bet analyzer view: live matchups with drill-down, custom analysis, parlay."""

from __future__ import annotations

import asyncio
import logging
import secrets
from typing import Optional, Sequence

from ..chat.retry import Sleep
from ..chat.structured import StructuredRequestClient
from ..queries import operations
from ..queries.models import AIParlay, BetSuggestion, MarketOption, Matchup
from ..teams import NBA_TEAMS
from .polling import Poller
from .state import QuerySlot, ViewModel

logger = logging.getLogger(__name__)

MATCHUP_REFRESH_SECONDS = 120.0
PARLAY_STAGE_SECONDS = 2.5

MODES = ("live", "custom", "parlay")

FILTER_OPTIONS = (
    "All",
    "Top Picks",
    "Spread",
    "Moneyline",
    "Total",
    "Points",
    "Rebounds",
    "Assists",
)

# Prop filters match on label keywords
PROP_KEYWORDS = {
    "Points": ("points", "pts"),
    "Rebounds": ("rebounds", "rebs"),
    "Assists": ("assists", "ast"),
}

PARLAY_STAGES = (
    "Scanning today's full NBA schedule & active betting markets...",
    "Checking breaking injury news & insider reports...",
    "Analyzing player usage rates & historical matchup metrics...",
    "Cross-referencing news with DraftKings/FanDuel market value...",
    "Running parlay simulations for optimal expected value...",
    "Finalizing the high-confidence 4-leg parlay slip...",
)


def filter_markets(options: Sequence[MarketOption], name: str) -> list[MarketOption]:
    """Apply one of FILTER_OPTIONS to a market list. Unknown names keep everything."""
    if name == "Top Picks":
        return [o for o in options if o.high_confidence is True]
    if name in ("Spread", "Moneyline", "Total"):
        return [o for o in options if o.category == name]
    if name in PROP_KEYWORDS:
        keywords = PROP_KEYWORDS[name]
        return [
            o
            for o in options
            if o.category == "Prop" and any(k in o.label.lower() for k in keywords)
        ]
    return list(options)


class AnalyzerView(ViewModel):
    def __init__(
        self,
        client: StructuredRequestClient,
        refresh_interval: float = MATCHUP_REFRESH_SECONDS,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        super().__init__()
        self._client = client
        self._sleep = sleep

        self.mode = "live"
        self.matchups: QuerySlot[list[Matchup]] = QuerySlot("live_matchups", self._notify)
        self.markets: QuerySlot[list[MarketOption]] = QuerySlot("available_bets", self._notify)
        self.bet_analysis: QuerySlot[BetSuggestion] = QuerySlot("single_bet", self._notify)
        self.custom: QuerySlot[list[BetSuggestion]] = QuerySlot("matchup_analysis", self._notify)
        self.parlay: QuerySlot[AIParlay] = QuerySlot("parlay", self._notify)

        self.selected_matchup: Optional[Matchup] = None
        self.selected_bet: Optional[MarketOption] = None
        self.bet_filter = "All"
        self.team_a = NBA_TEAMS[0]
        self.team_b = NBA_TEAMS[1]
        self.parlay_stage = 0
        self.slip_id = ""

        self._poller = Poller(
            refresh_interval,
            lambda: self.load_matchups(silent=True),
            should_run=self._should_refresh,
            sleep=sleep,
        )

    # --- Lifecycle ---

    def start(self) -> None:
        self._poller.start()

    def stop(self) -> None:
        self._poller.stop()

    def _should_refresh(self) -> bool:
        return self.mode == "live" and self.selected_matchup is None

    # --- Live matchups ---

    @property
    def matchup_list(self) -> list[Matchup]:
        return self.matchups.result or []

    async def load_matchups(self, silent: bool = False) -> bool:
        return await self.matchups.run(
            lambda: operations.fetch_live_matchups(self._client),
            silent=silent,
            replace_when=bool,
        )

    async def select_matchup(self, matchup: Matchup) -> bool:
        """Drill into a matchup and load the bets available for its team pair."""
        self.mode = "live"
        self.selected_matchup = matchup
        self.selected_bet = None
        self.bet_filter = "All"
        self.bet_analysis.reset()
        self.markets.reset()
        return await self.markets.run(
            lambda: operations.fetch_available_bets(
                self._client, matchup.home_team, matchup.away_team
            )
        )

    @property
    def available_bets(self) -> list[MarketOption]:
        return self.markets.result or []

    @property
    def filtered_bets(self) -> list[MarketOption]:
        return filter_markets(self.available_bets, self.bet_filter)

    def set_filter(self, name: str) -> None:
        self.bet_filter = name if name in FILTER_OPTIONS else "All"
        self._notify()

    async def analyze_bet(self, option: MarketOption) -> bool:
        matchup = self.selected_matchup
        if matchup is None:
            return False
        self.selected_bet = option
        self.bet_analysis.reset()
        return await self.bet_analysis.run(
            lambda: operations.analyze_single_bet(
                self._client, option.label, matchup.home_team, matchup.away_team
            )
        )

    def reset(self) -> None:
        """Back to the top-level matchup list, dropping all drill-down state."""
        self.selected_matchup = None
        self.selected_bet = None
        self.bet_filter = "All"
        self.markets.reset()
        self.bet_analysis.reset()
        self.mode = "live"
        self._notify()

    def set_mode(self, mode: str) -> None:
        if mode not in MODES:
            raise ValueError(f"unknown analyzer mode: {mode}")
        self.reset()
        self.mode = mode
        self._notify()

    # --- Custom matchup ---

    async def analyze_custom(self, team_a: Optional[str] = None, team_b: Optional[str] = None) -> bool:
        self.team_a = team_a or self.team_a
        self.team_b = team_b or self.team_b
        a, b = self.team_a, self.team_b
        return await self.custom.run(lambda: operations.analyze_matchup(self._client, a, b))

    # --- Parlay ---

    @property
    def parlay_stage_label(self) -> str:
        return PARLAY_STAGES[self.parlay_stage]

    async def _advance_stages(self) -> None:
        while self.parlay_stage < len(PARLAY_STAGES) - 1:
            await self._sleep(PARLAY_STAGE_SECONDS)
            self.parlay_stage += 1
            self._notify()

    async def generate_parlay(self) -> bool:
        """Run the parlay request with the cosmetic stage ticker alongside it.

        The ticker is paced by time only and is cancelled as soon as the
        real request finishes.
        """
        self.reset()
        self.mode = "parlay"
        self.parlay.reset()
        self.parlay_stage = 0
        self.slip_id = secrets.token_hex(5).upper()[:9]
        ticker = asyncio.get_running_loop().create_task(self._advance_stages())
        try:
            return await self.parlay.run(lambda: operations.generate_parlay(self._client))
        finally:
            ticker.cancel()
