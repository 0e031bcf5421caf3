"""tests for the editor session and assistant turns."""

import pytest

from wbs_editor.core.operations import GenerateTree, Move, Remove, Rename
from wbs_editor.core.planner import AssistantReply, CollaboratorError, MockPlanner
from wbs_editor.core.session import EditorSession
from wbs_editor.core.templates import initial_tree
from wbs_editor.core.tree import find_node, resolve_path
from wbs_editor.core.validator import BatchTooLargeError


class TestBatches:
    """tests for committing batches."""

    def test_one_commit_per_batch(self, session):
        session.apply_batch([Remove(key="1.C.1"), Remove(key="2.C.1"), Rename(key="3", label="x")])
        assert session.history.undo_depth == 1
        session.undo()
        assert session.tree.to_dict() == initial_tree().to_dict()

    def test_apply_external_filters(self, session):
        ops = session.apply_external([{"op": "remove", "key": "1.C.1"}, {"op": "remove"}])
        assert ops == [Remove(key="1.C.1")]
        assert resolve_path(session.tree, "1.C.1") is None
        assert session.history.undo_depth == 1

    def test_apply_external_all_invalid_keeps_redo(self, session):
        """a batch where every item is dropped is not committed."""
        session.apply_batch([Rename(key="1", label="changed")])
        session.undo()
        ops = session.apply_external([{"op": "rename"}, {"op": "teleport"}])
        assert ops == []
        assert session.history.can_redo()
        assert session.history.undo_depth == 0
        assert session.redo()
        assert find_node(session.tree, "1").node.label == "changed"

    def test_apply_external_too_large_commits_nothing(self, session):
        with pytest.raises(BatchTooLargeError):
            session.apply_external([{"op": "remove", "key": "1.C.1"}] * 201)
        assert session.history.undo_depth == 0

    def test_direct_edits_are_undoable(self, session):
        session.shift_sibling("1.P", -1)
        session.set_colors("1", bg="abc")
        session.apply_external([{"op": "addDoc", "key": "1.P.1", "doc": "a.pdf"}])
        session.remove_doc("1.P.1", 0)
        assert session.history.undo_depth == 4
        assert find_node(session.tree, "1").node.bg == "#abc"
        while session.undo():
            pass
        assert session.tree.to_dict() == initial_tree().to_dict()

    def test_new_blank_and_reset(self, session):
        session.new_blank()
        assert session.tree.children == []
        session.reset_default()
        assert len(session.tree.children) == 8
        session.undo()
        session.undo()
        assert len(session.tree.children) == 8

    def test_load_tree_copies(self, session, small_tree):
        session.load_tree(small_tree)
        small_tree.children.clear()
        assert [c.key for c in session.tree.children] == ["3", "4"]
        assert session.undo()


class TestLocalTurns:
    """tests for prompts handled by the local parser."""

    @pytest.mark.asyncio
    async def test_local_commands(self, session, mock_planner):
        turn = await session.handle_prompt("mover 2.K.1 para 2.M; remover 1.C.1")
        assert turn.source == "local"
        assert turn.committed
        assert turn.ops == [Move(key="2.K.1", new_parent="2.M"), Remove(key="1.C.1")]
        assert turn.messages[0].startswith("will apply:\n1. move 2.K.1 under 2.M")
        assert session.history.undo_depth == 1
        assert mock_planner.calls == []

    @pytest.mark.asyncio
    async def test_local_turn_reports_tips(self, session):
        turn = await session.handle_prompt("remover 1.C.1")
        assert turn.tips
        assert turn.messages[-1].startswith("suggestions after changes:")

    @pytest.mark.asyncio
    async def test_destructive_warning(self, session):
        turn = await session.handle_prompt("gerar eap Research reactor")
        assert turn.ops == [GenerateTree(description="Research reactor")]
        assert "warning" in turn.messages[0]
        assert session.tree.label == "PROJETO: Research reactor"

    @pytest.mark.asyncio
    async def test_empty_prompt(self, session):
        turn = await session.handle_prompt("   ")
        assert turn.source is None
        assert turn.messages == []

    @pytest.mark.asyncio
    async def test_no_planner(self):
        session = EditorSession()
        turn = await session.handle_prompt("make it better")
        assert not turn.committed
        assert "no online assistant" in turn.messages[0]


class TestRemoteTurns:
    """tests for prompts handed to the planner."""

    @pytest.mark.asyncio
    async def test_fallback_to_planner(self):
        planner = MockPlanner(AssistantReply(
            ops=[Remove(key="1.C.1")],
            tips=["keep licensing early"],
            message="removing the construction package.",
        ))
        session = EditorSession(planner=planner)
        turn = await session.handle_prompt("drop the critical unit construction")
        assert turn.source == "remote"
        assert turn.committed
        assert planner.calls[0][0] == "drop the critical unit construction"
        assert turn.messages[0] == "removing the construction package."
        assert turn.tips[0] == "keep licensing early"
        assert resolve_path(session.tree, "1.C.1") is None

    @pytest.mark.asyncio
    async def test_planner_sees_a_copy(self, session, mock_planner):
        await session.handle_prompt("anything")
        _, tree = mock_planner.calls[0]
        assert tree is not session.tree
        assert tree.to_dict() == session.tree.to_dict()

    @pytest.mark.asyncio
    async def test_online_prefix_skips_parser(self, session, mock_planner):
        turn = await session.handle_prompt("/online remover 1.C.1")
        assert turn.source == "remote"
        assert mock_planner.calls[0][0] == "remover 1.C.1"
        assert resolve_path(session.tree, "1.C.1") is not None

    @pytest.mark.asyncio
    async def test_message_only_reply_commits_nothing(self, session):
        turn = await session.handle_prompt("what do you think?")
        assert not turn.committed
        assert turn.messages == ["renaming the quality section."]
        assert session.history.undo_depth == 0

    @pytest.mark.asyncio
    async def test_empty_reply(self):
        session = EditorSession(planner=MockPlanner(AssistantReply()))
        turn = await session.handle_prompt("hmm")
        assert turn.messages[0].startswith("no valid operations received")

    @pytest.mark.asyncio
    async def test_failure_leaves_tree_untouched(self):
        session = EditorSession(planner=MockPlanner(error=CollaboratorError("timeout")))
        before = session.tree.to_dict()
        turn = await session.handle_prompt("reorganize")
        assert turn.error == "timeout"
        assert not turn.committed
        assert session.tree.to_dict() == before
        assert session.history.undo_depth == 0

    @pytest.mark.asyncio
    async def test_oversized_batch_rejected(self):
        session = EditorSession(planner=MockPlanner(error=BatchTooLargeError(250)))
        turn = await session.handle_prompt("reorganize")
        assert turn.messages[0].startswith("assistant batch rejected")
        assert session.history.undo_depth == 0

    @pytest.mark.asyncio
    async def test_turn_to_dict(self, session):
        turn = await session.handle_prompt("remover 1.C.1")
        data = turn.to_dict()
        assert data["ops"] == [{"op": "remove", "key": "1.C.1"}]
        assert data["source"] == "local"
