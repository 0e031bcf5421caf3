"""undo/redo history built on immutable tree snapshots."""

from __future__ import annotations

from .tree import WbsNode, clone_tree


# --- configuration ---

MAX_UNDO_HISTORY = 50


class History:
    """current tree plus bounded undo and redo stacks.

    commit/undo/redo are the only mutators. the undo stack keeps its newest
    snapshot at the end; the redo stack keeps its next snapshot at the front.
    """

    def __init__(self, initial: WbsNode, max_undo: int = MAX_UNDO_HISTORY):
        self.current = initial
        self.max_undo = max_undo
        self._undo_stack: list[WbsNode] = []
        self._redo_stack: list[WbsNode] = []

    def _push_undo(self, tree: WbsNode) -> None:
        self._undo_stack.append(tree)
        # oldest snapshots go first
        while len(self._undo_stack) > self.max_undo:
            self._undo_stack.pop(0)

    def commit(self, next_tree: WbsNode) -> None:
        """record the current tree and install `next_tree`.

        `next_tree` is installed as is; callers hand over a tree they no
        longer hold (apply_ops always returns a fresh one).
        """
        self._push_undo(clone_tree(self.current))
        self._redo_stack.clear()
        self.current = next_tree

    def undo(self) -> bool:
        """step back one commit. returns True if anything changed."""
        if not self._undo_stack:
            return False
        previous = self._undo_stack.pop()
        self._redo_stack.insert(0, self.current)
        self.current = previous
        return True

    def redo(self) -> bool:
        """re-apply the last undone commit. returns True if anything changed."""
        if not self._redo_stack:
            return False
        following = self._redo_stack.pop(0)
        self._push_undo(self.current)
        self.current = following
        return True

    def can_undo(self) -> bool:
        return len(self._undo_stack) > 0

    def can_redo(self) -> bool:
        return len(self._redo_stack) > 0

    @property
    def undo_depth(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_depth(self) -> int:
        return len(self._redo_stack)

    def snapshots(self) -> list[WbsNode]:
        """copies of the undo stack, oldest first."""
        return [clone_tree(t) for t in self._undo_stack]
