"""Command parser for CourtSide chat slash commands."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ChatCommand:
    """Parsed chat command with name and optional arguments."""

    name: str
    args: str


COMMANDS: dict[str, str] = {
    "news": "Refresh the news feed",
    "parlay": "Generate the AI 4-leg parlay",
    "player": "Look up a player, e.g. /player LeBron James",
    "help": "Show available commands",
    "clear": "Clear the conversation",
}


def parse_command(text: str) -> ChatCommand | None:
    """Parse a chat input string into a ChatCommand if it starts with /.

    Returns None if text does not start with /.
    Splits on first space: "/player LeBron James" -> ChatCommand(name="player", args="LeBron James").
    Returns ChatCommand for ANY /command (known or unknown).
    """
    stripped = text.strip()
    if not stripped.startswith("/") or len(stripped) == 1:
        return None

    name, _, args = stripped[1:].partition(" ")
    return ChatCommand(name=name.lower(), args=args.strip())
