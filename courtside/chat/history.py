"""In-memory chat history for a single session."""

from __future__ import annotations

from .llm_provider import ChatMessage

WELCOME_TEXT = (
    "Hi, I'm your NBA Betting Copilot. Ask me about player stats, team trends, "
    "or specific matchup details!"
)


def welcome_message() -> ChatMessage:
    return ChatMessage(role="assistant", text=WELCOME_TEXT, id="welcome")


class ChatHistory:
    """Append-only message list, discarded when the session ends."""

    def __init__(self) -> None:
        self._messages: list[ChatMessage] = [welcome_message()]

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    def add(self, message: ChatMessage) -> None:
        """Add a message to history."""
        self._messages.append(message)

    def clear(self) -> None:
        """Drop everything except a fresh welcome message."""
        self._messages = [welcome_message()]
