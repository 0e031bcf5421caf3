"""tests for the terminal shell."""

import pytest
from textual.widgets import Input

from wbs_editor.core.operations import Remove
from wbs_editor.core.parser import parse_commands, strip_online_prefix
from wbs_editor.core.planner import AssistantReply, MockPlanner
from wbs_editor.core.session import EditorSession
from wbs_editor.core.tree import resolve_path
from wbs_editor.tui.app import EXAMPLES, Outline, WbsEditorApp


class TestWbsEditorApp:
    """tests for WbsEditorApp."""

    @pytest.mark.asyncio
    async def test_local_command_updates_tree(self):
        session = EditorSession()
        app = WbsEditorApp(session)
        async with app.run_test() as pilot:
            app.query_one("#command", Input).value = "remover 1.C.1"
            await pilot.press("enter")
            await pilot.pause()
            assert resolve_path(session.tree, "1.C.1") is None
            assert resolve_path(app.query_one("#outline", Outline).wbs, "1.C.1") is None

            app.action_undo()
            await pilot.pause()
            assert resolve_path(session.tree, "1.C.1") is not None
            assert app.query_one("#outline", Outline).wbs is session.tree

    @pytest.mark.asyncio
    async def test_remote_prompt(self):
        planner = MockPlanner(AssistantReply(ops=[Remove(key="8")], message="dropping quality."))
        session = EditorSession(planner=planner)
        app = WbsEditorApp(session)
        async with app.run_test() as pilot:
            app.query_one("#command", Input).value = "/online drop quality"
            await pilot.press("enter")
            await pilot.pause()
            assert planner.calls[0][0] == "drop quality"
            assert [c.key for c in session.tree.children] == [str(i) for i in range(1, 8)]
            assert app.query_one("#command", Input).value == ""

    @pytest.mark.asyncio
    async def test_undo_with_empty_history(self):
        session = EditorSession()
        app = WbsEditorApp(session)
        async with app.run_test() as pilot:
            app.action_undo()
            await pilot.pause()
            assert session.history.undo_depth == 0

    def test_examples_are_commands(self):
        """every local example in the help text parses to one operation."""
        for example in EXAMPLES:
            forced, rest = strip_online_prefix(example)
            if not forced:
                assert len(parse_commands(rest)) == 1
