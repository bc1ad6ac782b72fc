from datetime import date

import pytest

from courtside.chat.errors import MalformedResponseError
from courtside.chat.llm_provider import ChatMessage, GenerationResult, GroundingSource
from courtside.chat.system_prompt import ROSTER_RULE
from courtside.queries import operations
from courtside.queries.models import risk_band

from conftest import (
    BET_PAYLOAD,
    MARKETS_PAYLOAD,
    MATCHUPS_PAYLOAD,
    NEWS_PAYLOAD,
    PARLAY_PAYLOAD,
    PLAYER_PAYLOAD,
    as_json,
)


async def test_fetch_news_tags_items_with_citations(client, provider):
    provider.responses["news"] = GenerationResult(
        text=as_json(NEWS_PAYLOAD),
        sources=[
            GroundingSource(url="https://espn.com/injury", title="ESPN"),
            GroundingSource(url="https://theathletic.com/trade", title="The Athletic"),
        ],
    )

    items = await operations.fetch_news(client)

    assert len(items) == 3
    assert items[0].url == "https://espn.com/injury"
    assert items[1].url == "https://theathletic.com/trade"
    assert items[2].url is None
    assert provider.requests[0].model == "gpt-4.1-mini"
    assert provider.requests[0].thinking_budget is None


async def test_fetch_live_matchups_parses_nested_odds(client, provider):
    provider.responses["live_matchups"] = as_json(MATCHUPS_PAYLOAD)

    matchups = await operations.fetch_live_matchups(client)

    assert [m.label for m in matchups] == [
        "Los Angeles Lakers @ Boston Celtics",
        "Phoenix Suns @ Denver Nuggets",
    ]
    assert matchups[0].odds.draft_kings.total == "228.5"
    assert matchups[0].odds.fan_duel.total is None
    assert matchups[1].odds is None


async def test_matchup_with_same_team_twice_is_rejected(client, provider):
    bad = {"items": [{"homeTeam": "Boston Celtics", "awayTeam": "boston celtics", "time": "7", "date": "d"}]}
    provider.responses["live_matchups"] = as_json(bad)

    with pytest.raises(MalformedResponseError):
        await operations.fetch_live_matchups(client)


async def test_fetch_available_bets_prompts_for_team_pair(client, provider):
    provider.responses["available_bets"] = as_json(MARKETS_PAYLOAD)

    options = await operations.fetch_available_bets(client, "Boston Celtics", "Los Angeles Lakers")

    assert len(options) == 6
    request = provider.requests[0]
    assert "Los Angeles Lakers @ Boston Celtics" in request.turns[0].text
    assert ROSTER_RULE in request.system_instruction


async def test_analyze_single_bet(client, provider):
    provider.responses["single_bet_analysis"] = as_json(BET_PAYLOAD)

    bet = await operations.analyze_single_bet(
        client, "Celtics -6.5", "Boston Celtics", "Los Angeles Lakers"
    )

    assert bet.risk_level == 4
    assert risk_band(bet.risk_level) == "medium"
    assert '"Celtics -6.5"' in provider.requests[0].turns[0].text


async def test_analyze_single_bet_malformed_raises(client, provider):
    provider.responses["single_bet_analysis"] = as_json({"title": "Celtics -6.5", "confidence": "Maybe"})

    with pytest.raises(MalformedResponseError):
        await operations.analyze_single_bet(client, "Celtics -6.5", "BOS", "LAL")


async def test_analyze_matchup_unwraps_bets(client, provider):
    provider.responses["matchup_analysis"] = as_json(
        {"bets": [BET_PAYLOAD, {**BET_PAYLOAD, "title": "Under 228.5", "type": "Over/Under"}]}
    )

    bets = await operations.analyze_matchup(client, "Boston Celtics", "Los Angeles Lakers")

    assert [b.title for b in bets] == ["Celtics -6.5", "Under 228.5"]
    assert provider.requests[0].schema["required"] == ["bets"]


async def test_analyze_matchup_without_bets_is_empty(client, provider):
    provider.responses["matchup_analysis"] = "{}"
    assert await operations.analyze_matchup(client, "A", "B") == []


async def test_analyze_player_stats(client, provider):
    provider.responses["player_stats"] = as_json(PLAYER_PAYLOAD)

    report = await operations.analyze_player_stats(client, "LeBron James")

    assert report.season_averages.assists == 8.3
    assert report.prop_recommendations[0].confidence == "Medium"
    assert "LeBron James" in provider.requests[0].turns[0].text


async def test_generate_parlay(client, provider):
    provider.responses["parlay"] = as_json(PARLAY_PAYLOAD)

    parlay = await operations.generate_parlay(client, today=date(2026, 10, 18))

    assert len(parlay.legs) == 4
    assert parlay.total_odds == "+1180"
    assert parlay.confidence_score == 62
    request = provider.requests[0]
    assert "2026-10-18" in request.turns[0].text
    assert request.thinking_budget == 4096


async def test_chat_uses_chat_model_with_search(client, provider):
    provider.responses["chat"] = "Bet responsibly."

    reply = await operations.chat(client, [ChatMessage(role="assistant", text="Hi")], "Odds?")

    assert reply == "Bet responsibly."
    request = provider.requests[0]
    assert request.model == "gpt-4.1-mini"
    assert request.search is True
