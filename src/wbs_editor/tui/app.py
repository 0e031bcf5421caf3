"""wbs editor: terminal assistant shell.

shows the outline of the tree, the assistant's messages and a command input.
rendering is deliberately thin; every change goes through the session.
"""

from __future__ import annotations

from typing import Optional

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer, Header, Input, RichLog, Static

from ..core.session import AssistantTurn, EditorSession
from ..core.tree import WbsNode


EXAMPLES = [
    "renomear 3.P.1 para Projeto I&C revisado",
    "mover 2.K.1 para 2.M",
    "adicionar filho em 4.L: Relatório de segurança",
    "remover 1.C.1",
    "documento 1.P.1 https://example.org/doc.pdf",
    "gerar eap Microrreator de pesquisa 50kW",
    "/online reorganize a eap em torno do licenciamento",
]


class Outline(Static):
    """indented outline of the tree."""

    DEFAULT_CSS = """
    Outline {
        width: 3fr;
        height: 1fr;
        padding: 0 1;
        border: solid $surface-lighten-2;
        overflow-y: auto;
    }
    """

    def __init__(self, tree: WbsNode, **kwargs) -> None:
        super().__init__(**kwargs)
        self.wbs = tree

    def render(self) -> Text:
        text = Text()
        self._render_node(self.wbs, text, depth=0)
        return text

    def _render_node(self, node: WbsNode, text: Text, depth: int) -> None:
        text.append("  " * depth)
        text.append(node.key, style="bold cyan" if depth < 2 else "cyan")
        text.append(f" {node.label}")
        if node.docs:
            text.append(f"  [{len(node.docs)} doc]", style="dim")
        text.append("\n")
        for child in node.children or []:
            self._render_node(child, text, depth + 1)

    def refresh_tree(self, tree: WbsNode) -> None:
        self.wbs = tree
        self.refresh()


class WbsEditorApp(App):
    """main application."""

    TITLE = "wbs editor"

    CSS = """
    #body {
        height: 1fr;
    }

    #messages {
        width: 2fr;
        border: solid $primary;
    }

    #command {
        dock: bottom;
    }
    """

    BINDINGS = [
        Binding("ctrl+z", "undo", "undo"),
        Binding("ctrl+y", "redo", "redo"),
        Binding("ctrl+q", "quit", "quit"),
    ]

    def __init__(self, session: Optional[EditorSession] = None):
        super().__init__()
        self.session = session or EditorSession()
        self._busy = False

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="body"):
            yield Outline(self.session.tree, id="outline")
            yield RichLog(id="messages", wrap=True, markup=False)
        yield Input(placeholder="type a command… (/online for the online assistant)", id="command")
        yield Footer()

    def on_mount(self) -> None:
        log = self.query_one("#messages", RichLog)
        log.write("examples:")
        for example in EXAMPLES:
            log.write(f"  • {example}")
        self.query_one("#command", Input).focus()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        """send the typed prompt through the session."""
        prompt = event.value.strip()
        event.input.value = ""
        if not prompt:
            return
        if self._busy:
            # one turn at a time; the tree is never edited by two turns at once
            self.notify("still working on the previous request", severity="warning")
            return

        self._say("you", prompt)
        self._busy = True
        try:
            turn = await self.session.handle_prompt(prompt)
        finally:
            self._busy = False
        self._show_turn(turn)

    def _show_turn(self, turn: AssistantTurn) -> None:
        for message in turn.messages:
            self._say("assistant", message)
        if turn.error:
            self.notify(turn.error, severity="error")
        self._refresh_tree()

    def _say(self, who: str, message: str) -> None:
        self.query_one("#messages", RichLog).write(Text(f"{who}: {message}", style="bold" if who == "you" else ""))

    def _refresh_tree(self) -> None:
        self.query_one("#outline", Outline).refresh_tree(self.session.tree)

    def action_undo(self) -> None:
        if self.session.undo():
            self._refresh_tree()
        else:
            self.notify("nothing to undo")

    def action_redo(self) -> None:
        if self.session.redo():
            self._refresh_tree()
        else:
            self.notify("nothing to redo")


def run(session: Optional[EditorSession] = None) -> None:
    """run the shell."""
    WbsEditorApp(session).run()
