"""ChatPanel widget - betting copilot chat with markdown rendering."""

from __future__ import annotations

from textual import work
from textual.app import ComposeResult
from textual.css.query import NoMatches
from textual.containers import VerticalScroll
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Input, Markdown, Static

from ...views.chat import ChatView
from ..commands import COMMANDS, parse_command


class ChatPanel(Widget):
    """Chat panel with input and message history, backed by a shared ChatView."""

    DEFAULT_CSS = """
    ChatPanel {
        height: 1fr;
        width: 100%;
        layout: vertical;
        border: round $accent;
    }
    ChatPanel #chat-messages {
        height: 1fr;
        padding: 0 1;
    }
    ChatPanel .chat-user {
        color: $accent;
        margin: 1 0 0 0;
    }
    ChatPanel .chat-assistant {
        margin: 0 0 0 2;
    }
    ChatPanel .chat-error {
        color: $error;
        margin: 0 0 0 2;
    }
    ChatPanel .chat-info {
        color: $text-muted;
        margin: 1 0;
    }
    ChatPanel .chat-typing {
        color: $text-muted;
        margin: 0 0 0 2;
    }
    ChatPanel #chat-input {
        dock: bottom;
        margin: 0;
    }
    """

    class CommandRequested(Message):
        """Posted when a slash command should be handled by the app."""

        def __init__(self, command: str, args: str) -> None:
            self.command = command
            self.args = args
            super().__init__()

    def __init__(self, view: ChatView, **kwargs) -> None:
        super().__init__(**kwargs)
        self._view = view
        self._rendered = 0
        self._shown_error: str | None = None

    def compose(self) -> ComposeResult:
        yield VerticalScroll(id="chat-messages")
        yield Static("Copilot is typing...", id="chat-typing", classes="chat-typing")
        yield Input(
            placeholder="Ask about injuries, trends, or stats... (/help for commands)",
            id="chat-input",
        )

    def on_mount(self) -> None:
        self._view.subscribe(self._render_view)
        self._render_view()

    def on_unmount(self) -> None:
        self._view.unsubscribe(self._render_view)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "chat-input":
            return

        text = event.value.strip()
        if not text:
            return

        # Check for slash commands before LLM flow
        cmd = parse_command(text)
        if cmd is not None:
            event.input.value = ""
            self._handle_command(cmd)
            return

        if self._view.is_typing:
            return

        event.input.value = ""
        self._send(text)

    @work
    async def _send(self, text: str) -> None:
        await self._view.send(text)

    def _handle_command(self, cmd) -> None:
        """Route a parsed ChatCommand to the appropriate handler."""
        if cmd.name == "clear":
            self._view.clear()
        elif cmd.name == "help":
            self._show_help()
        elif cmd.name in COMMANDS:
            self.post_message(self.CommandRequested(cmd.name, cmd.args))
        else:
            self._add_error(f"Unknown command: /{cmd.name}. Type /help for commands.")

    def _show_help(self) -> None:
        """Render the help text inline as an info message."""
        lines = ["Available commands:", ""]
        for name, description in COMMANDS.items():
            lines.append(f"  /{name} - {description}")
        self._add_info("\n".join(lines))

    def _render_view(self) -> None:
        try:
            container = self.query_one("#chat-messages", VerticalScroll)
            typing = self.query_one("#chat-typing", Static)
            input_widget = self.query_one("#chat-input", Input)
        except NoMatches:
            return

        messages = self._view.messages
        if len(messages) < self._rendered:
            # Conversation was cleared
            container.remove_children()
            self._rendered = 0
            self._shown_error = None

        for msg in messages[self._rendered:]:
            if msg.role == "user":
                container.mount(Static(f"> {msg.text}", classes="chat-user", markup=False))
            else:
                container.mount(Markdown(msg.text, classes="chat-assistant"))
        self._rendered = len(messages)

        error = self._view.last_error
        if error and error != self._shown_error:
            self._add_error(error)
        self._shown_error = error

        typing.display = self._view.is_typing
        input_widget.disabled = self._view.is_typing
        if not self._view.is_typing and self.app.focused is None:
            input_widget.focus()
        container.scroll_end(animate=False)

    def _add_error(self, text: str) -> None:
        container = self.query_one("#chat-messages", VerticalScroll)
        container.mount(Static(text, classes="chat-error", markup=False))
        container.scroll_end(animate=False)

    def _add_info(self, text: str) -> None:
        container = self.query_one("#chat-messages", VerticalScroll)
        container.mount(Static(text, classes="chat-info", markup=False))
        container.scroll_end(animate=False)
