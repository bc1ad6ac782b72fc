import pytest

from courtside.chat.errors import EmptyResponseError, MalformedResponseError
from courtside.chat.llm_provider import ChatMessage, GenerationResult, GroundingSource
from courtside.chat.structured import EMPTY_CHAT_REPLY, attach_citations
from courtside.queries import operations
from courtside.queries.models import BetSuggestion, NewsItem

from conftest import BET_PAYLOAD, MARKETS_PAYLOAD, StatusError, as_json


def test_empty_text_is_empty_list_for_list_specs(client):
    assert client.parse(operations.NEWS, "") == []
    assert client.parse(operations.NEWS, "   \n") == []
    assert client.parse(operations.NEWS, '{"items": []}') == []


def test_missing_list_key_is_empty_list(client):
    assert client.parse(operations.MATCHUP_ANALYSIS, "{}") == []


def test_bare_array_accepted_for_list_specs(client):
    items = client.parse(operations.AVAILABLE_BETS, as_json(MARKETS_PAYLOAD["items"]))
    assert len(items) == 6
    assert items[0].high_confidence is True


def test_empty_text_for_object_spec_raises(client):
    with pytest.raises(EmptyResponseError):
        client.parse(operations.SINGLE_BET, "")


def test_malformed_json_raises(client):
    with pytest.raises(MalformedResponseError):
        client.parse(operations.SINGLE_BET, '{"title": "Celtics -6.5",')


def test_schema_violation_raises_for_object_and_list(client):
    with pytest.raises(MalformedResponseError):
        client.parse(operations.SINGLE_BET, as_json({"title": "x"}))

    bad = {"items": [{"label": "Odd line", "category": "Futures", "book": "DraftKings"}]}
    with pytest.raises(MalformedResponseError):
        client.parse(operations.AVAILABLE_BETS, as_json(bad))


def test_float_risk_level_is_rounded(client):
    bet = client.parse(operations.SINGLE_BET, as_json({**BET_PAYLOAD, "riskLevel": 6.6}))
    assert isinstance(bet, BetSuggestion)
    assert bet.risk_level == 7


def test_list_schema_is_wrapped_under_list_key(client):
    schema = client.json_schema(operations.MATCHUP_ANALYSIS)
    assert schema["type"] == "object"
    assert schema["required"] == ["bets"]
    assert schema["properties"]["bets"]["type"] == "array"
    assert "BetSuggestion" in schema["$defs"]
    assert "riskLevel" in schema["$defs"]["BetSuggestion"]["properties"]


def test_object_schema_uses_camel_case(client):
    schema = client.json_schema(operations.PARLAY)
    assert {"legs", "totalOdds", "masterReasoning", "confidenceScore"} <= set(schema["properties"])


async def test_generate_builds_request_from_spec(client, provider):
    provider.responses["single_bet_analysis"] = as_json(BET_PAYLOAD)

    result = await client.generate(operations.SINGLE_BET, "Analyze Celtics -6.5")

    assert result.data.title == "Celtics -6.5"
    request = provider.requests[0]
    assert request.model == "gpt-5-mini"
    assert request.search is True
    assert request.thinking_budget == 4096
    assert request.system_instruction == operations.SINGLE_BET.system_instruction
    assert [t.role for t in request.turns] == ["user"]
    assert request.turns[0].text == "Analyze Celtics -6.5"


async def test_generate_retries_transient_failures(client, provider, retry_sleep):
    provider.responses["single_bet_analysis"] = [StatusError(503), as_json(BET_PAYLOAD)]

    result = await client.generate(operations.SINGLE_BET, "prompt")

    assert result.data.confidence == "High"
    assert len(provider.requests) == 2
    assert retry_sleep.delays == [2.0]


async def test_generate_does_not_retry_malformed_payload(client, provider, retry_sleep):
    provider.responses["single_bet_analysis"] = ["not json", as_json(BET_PAYLOAD)]

    with pytest.raises(MalformedResponseError):
        await client.generate(operations.SINGLE_BET, "prompt")

    assert len(provider.requests) == 1
    assert retry_sleep.delays == []


async def test_generate_returns_sources(client, provider):
    sources = [GroundingSource(url="https://espn.com/a", title="ESPN")]
    provider.responses["news"] = GenerationResult(text='{"items": []}', sources=sources)

    result = await client.generate(operations.NEWS, "prompt")

    assert result.data == []
    assert result.sources == sources


async def test_converse_sends_history_and_new_turn(client, provider):
    provider.responses["chat"] = "Tatum is listed as probable."
    history = [
        ChatMessage(role="assistant", text="Welcome!"),
        ChatMessage(role="user", text="Who plays tonight?"),
        ChatMessage(role="assistant", text="Celtics host the Lakers."),
    ]

    reply = await client.converse(operations.CHAT, history, "Is Tatum playing?")

    assert reply == "Tatum is listed as probable."
    request = provider.requests[0]
    assert request.schema is None
    assert [t.text for t in request.turns][-2:] == ["Celtics host the Lakers.", "Is Tatum playing?"]
    assert len(request.turns) == 4


async def test_converse_empty_reply_falls_back(client, provider):
    provider.responses["chat"] = ""
    assert await client.converse(operations.CHAT, [], "hello") == EMPTY_CHAT_REPLY


async def test_aclose_closes_provider(client, provider):
    await client.aclose()
    assert provider.closed


def test_attach_citations_by_position():
    items = [
        NewsItem(title="A", source="ESPN", snippet="a"),
        NewsItem(title="B", source="ESPN", snippet="b"),
        NewsItem(title="C", source="ESPN", snippet="c", url="https://team.com/c"),
    ]
    sources = [GroundingSource(url="https://x.com/1"), GroundingSource(url="")]

    attached = attach_citations(items, sources)

    assert [i.url for i in attached] == ["https://x.com/1", None, "https://team.com/c"]
    assert items[0].url is None
