"""editor session: the single owner of a tree and its history.

all mutation goes through `apply_batch` (or one of the direct edits), which
commits exactly once per call. the assistant flow tries the local command
parser first and falls back to the remote planner when nothing parses.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from . import engine
from .advisor import make_tips
from .history import History, MAX_UNDO_HISTORY
from .operations import Operation, is_destructive, summarize_ops
from .parser import parse_commands, strip_online_prefix
from .planner import CollaboratorError, Planner
from .templates import blank_tree, initial_tree
from .tree import WbsNode, clone_tree
from .validator import BatchTooLargeError, validate_batch


@dataclass
class AssistantTurn:
    """outcome of one assistant interaction."""

    prompt: str
    source: Optional[str] = None  # "local", "remote" or None when nothing ran
    ops: list[Operation] = field(default_factory=list)
    tips: list[str] = field(default_factory=list)
    messages: list[str] = field(default_factory=list)
    committed: bool = False
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "prompt": self.prompt,
            "source": self.source,
            "ops": [op.to_dict() for op in self.ops],
            "tips": list(self.tips),
            "messages": list(self.messages),
            "committed": self.committed,
            "error": self.error,
        }


class EditorSession:
    """current tree + undo/redo + an optional remote planner."""

    def __init__(
        self,
        tree: Optional[WbsNode] = None,
        planner: Optional[Planner] = None,
        max_undo: int = MAX_UNDO_HISTORY,
    ):
        self.history = History(tree if tree is not None else initial_tree(), max_undo=max_undo)
        self.planner = planner

    @property
    def tree(self) -> WbsNode:
        return self.history.current

    # --- batches ---

    def apply_batch(self, ops: list[Operation]) -> WbsNode:
        """apply a trusted batch and commit it as one undo step."""
        next_tree = engine.apply_ops(self.history.current, ops)
        self.history.commit(next_tree)
        logging.info(f"committed batch of {len(ops)} operation(s)")
        return next_tree

    def apply_external(self, items: Any) -> list[Operation]:
        """validate an untrusted batch, then apply and commit what survives.

        nothing is committed when no item survives. raises BatchTooLargeError
        (nothing applied) when over the ceiling.
        """
        ops = validate_batch(items)
        if not ops:
            # an empty batch is not an undo step
            return ops
        self.apply_batch(ops)
        return ops

    # --- direct edits ---

    def shift_sibling(self, key: str, direction: int) -> WbsNode:
        self.history.commit(engine.shift_sibling(self.history.current, key, direction))
        return self.tree

    def set_colors(self, key: str, bg=engine.UNSET, fg=engine.UNSET) -> WbsNode:
        self.history.commit(engine.set_colors(self.history.current, key, bg=bg, fg=fg))
        return self.tree

    def remove_doc(self, key: str, index: int) -> WbsNode:
        self.history.commit(engine.remove_doc(self.history.current, key, index))
        return self.tree

    def load_tree(self, tree: WbsNode) -> WbsNode:
        """install an externally loaded tree (undoable)."""
        self.history.commit(clone_tree(tree))
        return self.tree

    def new_blank(self) -> WbsNode:
        self.history.commit(blank_tree())
        return self.tree

    def reset_default(self) -> WbsNode:
        self.history.commit(initial_tree())
        return self.tree

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()

    def tips(self) -> list[str]:
        return make_tips(self.tree)

    # --- assistant ---

    async def handle_prompt(self, text: str) -> AssistantTurn:
        """run one assistant turn: local commands first, remote planner otherwise."""
        forced_remote, prompt = strip_online_prefix(text)
        turn = AssistantTurn(prompt=prompt)
        if not prompt:
            return turn

        if not forced_remote:
            ops = parse_commands(prompt)
            if ops:
                turn.source = "local"
                turn.ops = ops
                turn.messages.append(self._ack("will apply", ops))
                new_tree = self.apply_batch(ops)
                turn.committed = True
                turn.tips = make_tips(new_tree)
                if turn.tips:
                    turn.messages.append("suggestions after changes:\n- " + "\n- ".join(turn.tips))
                return turn

        if self.planner is None:
            turn.messages.append("no local command recognized and no online assistant is configured.")
            return turn

        turn.source = "remote"
        try:
            reply = await self.planner.request_ops(prompt, clone_tree(self.tree))
        except BatchTooLargeError as e:
            turn.error = str(e)
            turn.messages.append(f"assistant batch rejected: {e}")
            return turn
        except CollaboratorError as e:
            turn.error = str(e)
            turn.messages.append(f"online assistant failed: {e}")
            return turn

        if reply.message:
            turn.messages.append(reply.message)

        if reply.ops:
            turn.ops = reply.ops
            turn.messages.append(self._ack("applying assistant changes", reply.ops))
            new_tree = self.apply_batch(reply.ops)
            turn.committed = True
            turn.tips = list(reply.tips) + make_tips(new_tree)
            if turn.tips:
                turn.messages.append("tips:\n- " + "\n- ".join(turn.tips))
        elif not reply.message:
            turn.messages.append("no valid operations received. try describing the request in more detail.")
        return turn

    @staticmethod
    def _ack(heading: str, ops: list[Operation]) -> str:
        text = f"{heading}:\n{summarize_ops(ops)}"
        if is_destructive(ops):
            text += "\nwarning: this batch replaces the entire tree (undo to restore it)."
        return text
