"""Query operations: one prompt builder plus one fixed spec each."""

from __future__ import annotations

from datetime import date
from typing import Sequence

from ..chat import system_prompt as prompts
from ..chat.llm_provider import ChatMessage
from ..chat.structured import QuerySpec, StructuredRequestClient, attach_citations
from .models import (
    AIParlay,
    BetSuggestion,
    Matchup,
    MarketOption,
    NewsItem,
    PlayerStatsReport,
)

ANALYSIS_THINKING_BUDGET = 4096

NEWS: QuerySpec[list[NewsItem]] = QuerySpec(
    name="news",
    role="news",
    schema=list[NewsItem],
    system_instruction=prompts.NEWS_SYSTEM,
)
LIVE_MATCHUPS: QuerySpec[list[Matchup]] = QuerySpec(
    name="live_matchups",
    role="news",
    schema=list[Matchup],
    system_instruction=prompts.NEWS_SYSTEM,
)
AVAILABLE_BETS: QuerySpec[list[MarketOption]] = QuerySpec(
    name="available_bets",
    role="news",
    schema=list[MarketOption],
    system_instruction=prompts.MARKETS_SYSTEM,
)
SINGLE_BET: QuerySpec[BetSuggestion] = QuerySpec(
    name="single_bet_analysis",
    role="analysis",
    schema=BetSuggestion,
    system_instruction=prompts.ANALYST_SYSTEM,
    thinking_budget=ANALYSIS_THINKING_BUDGET,
)
MATCHUP_ANALYSIS: QuerySpec[list[BetSuggestion]] = QuerySpec(
    name="matchup_analysis",
    role="analysis",
    schema=list[BetSuggestion],
    system_instruction=prompts.ANALYST_SYSTEM,
    thinking_budget=ANALYSIS_THINKING_BUDGET,
    list_key="bets",
)
PLAYER_STATS: QuerySpec[PlayerStatsReport] = QuerySpec(
    name="player_stats",
    role="analysis",
    schema=PlayerStatsReport,
    system_instruction=prompts.PLAYER_SYSTEM,
)
PARLAY: QuerySpec[AIParlay] = QuerySpec(
    name="parlay",
    role="analysis",
    schema=AIParlay,
    system_instruction=prompts.ANALYST_SYSTEM,
    thinking_budget=ANALYSIS_THINKING_BUDGET,
)
CHAT: QuerySpec[str] = QuerySpec(
    name="chat",
    role="chat",
    system_instruction=prompts.CHAT_SYSTEM,
)


async def fetch_news(client: StructuredRequestClient) -> list[NewsItem]:
    """Top headlines, each tagged with the grounding URL at the same index."""
    result = await client.generate(NEWS, prompts.news_prompt())
    return attach_citations(result.data, result.sources)


async def fetch_live_matchups(client: StructuredRequestClient) -> list[Matchup]:
    result = await client.generate(LIVE_MATCHUPS, prompts.matchups_prompt())
    return result.data


async def fetch_available_bets(
    client: StructuredRequestClient, home: str, away: str
) -> list[MarketOption]:
    result = await client.generate(AVAILABLE_BETS, prompts.available_bets_prompt(home, away))
    return result.data


async def analyze_single_bet(
    client: StructuredRequestClient, bet_label: str, home: str, away: str
) -> BetSuggestion:
    result = await client.generate(SINGLE_BET, prompts.single_bet_prompt(bet_label, home, away))
    return result.data


async def analyze_matchup(
    client: StructuredRequestClient, team_a: str, team_b: str
) -> list[BetSuggestion]:
    result = await client.generate(MATCHUP_ANALYSIS, prompts.matchup_prompt(team_a, team_b))
    return result.data


async def analyze_player_stats(
    client: StructuredRequestClient, player_name: str
) -> PlayerStatsReport:
    result = await client.generate(PLAYER_STATS, prompts.player_stats_prompt(player_name))
    return result.data


async def generate_parlay(
    client: StructuredRequestClient, today: date | None = None
) -> AIParlay:
    result = await client.generate(PARLAY, prompts.parlay_prompt(today))
    return result.data


async def chat(
    client: StructuredRequestClient, history: Sequence[ChatMessage], message: str
) -> str:
    return await client.converse(CHAT, history, message)
