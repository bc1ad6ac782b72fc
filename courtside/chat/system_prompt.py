"""System instructions and prompt builders for every query operation."""

from __future__ import annotations

from datetime import date

# Roster consistency and no-fabrication are only asked of the model;
# nothing downstream checks them.
ROSTER_RULE = (
    "Every player you mention must currently be on one of the teams under discussion. "
    "If you are unsure about a player's current team, leave that player out."
)
NO_FABRICATION_RULE = (
    "Never invent odds, lines or statistics. If a bet or prop cannot be verified, "
    "omit it entirely instead of guessing."
)

NEWS_SYSTEM = (
    "You are an NBA news desk. Report only stories you found in today's sources. "
    + NO_FABRICATION_RULE
)

MARKETS_SYSTEM = (
    "You are a precise sports data aggregator. Accuracy is paramount. "
    "Never assign a player to the wrong team. "
    + ROSTER_RULE
    + " "
    + NO_FABRICATION_RULE
)

ANALYST_SYSTEM = (
    "You are a rigorous NBA quantitative analyst. Accuracy is your highest priority. "
    "Use search to confirm every data point and apply statistical models "
    "(Poisson scoring, Monte Carlo simulation, regression) to estimate the most likely outcome. "
    + ROSTER_RULE
    + " "
    + NO_FABRICATION_RULE
)

PLAYER_SYSTEM = (
    "You are an expert NBA player performance analyst. Provide accurate, up-to-date "
    "statistics and actionable betting insights based on recent trends. "
    + NO_FABRICATION_RULE
)

CHAT_SYSTEM = (
    "You are an expert NBA betting assistant. Answer questions about injuries, "
    "player stats, team trends and matchups using live search, cite your sources, "
    "and remind users to bet responsibly. "
    + ROSTER_RULE
)


def news_prompt() -> str:
    return (
        "Search major sports news outlets and insider reports for the top 5 most critical "
        "NBA news stories from the last 24 hours regarding injuries, trades, or significant "
        "lineup changes that would impact betting."
    )


def matchups_prompt() -> str:
    return (
        "Find all scheduled NBA games for today and tomorrow. For each game, find the current "
        "Spread, Moneyline and Total (Over/Under) odds from DraftKings and FanDuel. "
        "If specific odds aren't available, leave them blank, but ensure the game is listed."
    )


def available_bets_prompt(home: str, away: str) -> str:
    return "\n".join(
        [
            f"List the current betting lines available for {away} @ {home} on DraftKings and FanDuel.",
            "1. Include the Spread for both teams, Moneyline for both, and the Over/Under Total.",
            "2. Find 10 popular player props (Points, Rebounds, Assists).",
            f"3. Every player prop must be for a player currently on the {home} or {away} roster.",
            '4. Flag 2-3 bets as "highConfidence" based on recent news.',
            "Return a flat list of bets.",
        ]
    )


def single_bet_prompt(bet_label: str, home: str, away: str) -> str:
    return "\n".join(
        [
            f'Perform a deep-dive analysis for the NBA bet "{bet_label}" in the game {away} @ {home}.',
            f'1. Roster check: the player in "{bet_label}" (if any) must be on the {home} or {away} roster.',
            "2. Breaking news: find the latest injury reports.",
            "3. Statistical trends: look at the last 5 games.",
            "4. Modeling: estimate the true probability of the bet.",
            "5. Market sentiment: check for sharp money.",
            "Provide a confidence rating (High/Medium/Low), a 1-10 risk level and reasoning "
            "that names the models applied.",
        ]
    )


def matchup_prompt(team_a: str, team_b: str) -> str:
    return "\n".join(
        [
            f"Analyze the NBA matchup between {team_a} and {team_b}.",
            "1. Search for latest news and injury reports.",
            f"2. Only mention players currently on the {team_a} or {team_b} roster.",
            "3. Estimate the true probability and most likely outcomes.",
            "4. Provide 3-5 high-value bet suggestions based on this analysis.",
        ]
    )


def player_stats_prompt(player_name: str) -> str:
    return "\n".join(
        [
            f"Analyze the recent performance and statistics for NBA player: {player_name}.",
            "1. Search for their latest game logs (last 5-10 games).",
            "2. Provide their current season averages (Points, Rebounds, Assists).",
            "3. Identify any significant trends (shooting slump, minutes, injury recovery).",
            "4. Analyze their upcoming matchup if available.",
            "5. Provide 3 specific player prop betting recommendations based on this data.",
        ]
    )


def parlay_prompt(today: date | None = None) -> str:
    """Prompt for the 4-leg parlay over today's full slate."""
    today = today or date.today()
    return "\n".join(
        [
            f"Analyze the entire NBA slate for today ({today.isoformat()}).",
            "1. Search for all scheduled games.",
            "2. Search for the latest injury news and lineup changes.",
            "3. Verify that every player is on the active roster of the team they are bet on.",
            "4. Estimate the true probability of each candidate bet with statistical models.",
            "5. Build the best 4-leg parlay from the highest value bets.",
            "Legs can be Spreads, Totals, or Player Props. Give a reason for each leg, a master "
            "reasoning for the combination, the total parlay odds and a 0-100 confidence score.",
        ]
    )
