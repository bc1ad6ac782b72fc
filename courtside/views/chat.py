"""Chat view: optimistic user turns, assistant replies with full context."""

from __future__ import annotations

import logging
from typing import Optional

from ..chat.errors import describe_failure
from ..chat.history import ChatHistory
from ..chat.llm_provider import ChatMessage
from ..chat.structured import StructuredRequestClient
from ..queries import operations
from .state import ViewModel

logger = logging.getLogger(__name__)


class ChatView(ViewModel):
    def __init__(self, client: StructuredRequestClient) -> None:
        super().__init__()
        self._client = client
        self.history = ChatHistory()
        self.is_typing = False
        self.last_error: Optional[str] = None

    @property
    def messages(self) -> list[ChatMessage]:
        return self.history.messages

    async def send(self, text: str) -> bool:
        """Append ``text`` as a user turn, then the assistant's reply.

        Blank input and sends while a reply is pending are ignored. A failed
        call leaves the user turn in place and records ``last_error``.
        """
        text = text.strip()
        if not text or self.is_typing:
            return False

        prior = self.history.messages
        self.history.add(ChatMessage(role="user", text=text))
        self.is_typing = True
        self.last_error = None
        self._notify()

        try:
            reply = await operations.chat(self._client, prior, text)
        except Exception as exc:
            logger.error("Chat request failed: %s", exc)
            self.last_error = describe_failure(exc)
            return False
        else:
            self.history.add(ChatMessage(role="assistant", text=reply))
            return True
        finally:
            self.is_typing = False
            self._notify()

    def clear(self) -> None:
        self.history.clear()
        self.last_error = None
        self._notify()
