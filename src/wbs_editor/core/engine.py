"""apply engine: pure, clone-on-write application of operation batches.

`apply_ops` never touches its input. it deep-copies the tree once, applies the
batch in order and returns the copy. an operation whose precondition fails
(stale key, root target, ...) is skipped; the rest of the batch still applies.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from .operations import Add, AddDoc, GenerateTree, Move, Operation, Remove, Rename
from .templates import initial_tree
from .tree import ROOT_KEY, WbsNode, all_keys, clone_tree, find_node, is_within, walk


_HEX_COLOR = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# sentinel for "leave this color alone" in set_colors
UNSET = object()


def apply_ops(tree: WbsNode, ops: list[Operation]) -> WbsNode:
    """apply a batch to a copy of `tree` and return the copy."""
    result = clone_tree(tree)
    for op in ops:
        result, applied = _apply_one(result, op)
        if not applied:
            logging.debug(f"skipped inapplicable operation: {op!r}")
    return result


def _apply_one(tree: WbsNode, op: Operation) -> tuple[WbsNode, bool]:
    """apply one op in place (or replace the tree). returns (tree, applied)."""
    if isinstance(op, Rename):
        return tree, _rename(tree, op.key, op.label)
    if isinstance(op, Add):
        return tree, _add_child(tree, op.parent, op.label) is not None
    if isinstance(op, Remove):
        return tree, _remove(tree, op.key)
    if isinstance(op, Move):
        return tree, _move(tree, op.key, op.new_parent)
    if isinstance(op, AddDoc):
        return tree, _add_doc(tree, op.key, op.doc)
    if isinstance(op, GenerateTree):
        return initial_tree(op.description or None), True
    raise TypeError(f"not an operation: {op!r}")


# --- primitive mutations (in place, on the engine's private copy) ---

def next_child_key(tree: WbsNode, parent: WbsNode) -> str:
    """key for a new child of `parent`.

    starts at child count + 1; if that key is already taken anywhere in the
    tree, keeps counting up. removed keys are never reused to fill gaps.
    """
    taken = set(all_keys(tree))
    seq = len(parent.children or []) + 1
    while True:
        key = str(seq) if parent.key == ROOT_KEY else f"{parent.key}.{seq}"
        if key not in taken:
            return key
        seq += 1


def _rename(tree: WbsNode, key: str, label: str) -> bool:
    renamed = False
    for node, _ in walk(tree):
        if node.key == key:
            node.label = label
            renamed = True
    return renamed


def _add_child(tree: WbsNode, parent_key: str, label: str) -> Optional[WbsNode]:
    loc = find_node(tree, parent_key)
    if loc is None:
        return None
    child = WbsNode(key=next_child_key(tree, loc.node), label=label, docs=[])
    loc.node.kids().append(child)
    return child


def _remove(tree: WbsNode, key: str) -> bool:
    if key == ROOT_KEY:
        return False
    loc = find_node(tree, key)
    if loc is None or loc.parent is None:
        return False
    del loc.parent.kids()[loc.index]
    return True


def _move(tree: WbsNode, key: str, new_parent: str) -> bool:
    if key == ROOT_KEY:
        return False
    src = find_node(tree, key)
    dst = find_node(tree, new_parent)
    if src is None or dst is None or src.parent is None:
        return False
    # moving a node under itself or its own descendant would detach a cycle
    if is_within(tree, key, new_parent):
        return False
    item = src.parent.kids().pop(src.index)
    dst.node.kids().append(item)
    return True


def _add_doc(tree: WbsNode, key: str, doc: str) -> bool:
    doc = doc.strip()
    if not doc:
        return False
    attached = False
    for node, _ in walk(tree):
        if node.key == key:
            node.doc_list().append(doc)
            attached = True
    return attached


# --- direct edits ---

def shift_sibling(tree: WbsNode, key: str, direction: int) -> WbsNode:
    """move a node one place up (-1) or down (+1) among its siblings."""
    result = clone_tree(tree)
    if direction not in (-1, 1) or key == ROOT_KEY:
        return result
    loc = find_node(result, key)
    if loc is None or loc.parent is None:
        return result
    siblings = loc.parent.kids()
    new_index = loc.index + direction
    if new_index < 0 or new_index >= len(siblings):
        return result
    siblings.insert(new_index, siblings.pop(loc.index))
    return result


def normalize_hex_color(value: Optional[str]) -> Optional[str]:
    """accept '#abc', 'abc', '#aabbcc' or 'aabbcc'. anything else becomes None."""
    if not value:
        return None
    s = value.strip()
    if not s:
        return None
    if not s.startswith("#"):
        s = "#" + s
    return s if _HEX_COLOR.match(s) else None


def set_colors(tree: WbsNode, key: str, bg=UNSET, fg=UNSET) -> WbsNode:
    """set (or clear, with an invalid/empty value) a node's style hints."""
    result = clone_tree(tree)
    for node, _ in walk(result):
        if node.key == key:
            if bg is not UNSET:
                node.bg = normalize_hex_color(bg)
            if fg is not UNSET:
                node.fg = normalize_hex_color(fg)
    return result


def remove_doc(tree: WbsNode, key: str, index: int) -> WbsNode:
    """drop the document reference at `index` from the node with `key`."""
    result = clone_tree(tree)
    loc = find_node(result, key)
    if loc is None or not loc.node.docs:
        return result
    if 0 <= index < len(loc.node.docs):
        del loc.node.docs[index]
    return result
