"""core tree model for the wbs editor.

a single-rooted, ordered tree of labelled nodes. keys are dot-separated and
unique across the whole tree; the root carries a fixed sentinel key.
"""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass
from typing import Iterator, Optional


# --- configuration ---

ROOT_KEY = "root"
PROMPT_MAX_NODES = 250


@dataclass
class WbsNode:
    """single node of the work-breakdown structure."""

    key: str
    label: str
    bg: Optional[str] = None
    fg: Optional[str] = None
    # None means "absent" in the exchange format, [] means "present but empty"
    docs: Optional[list[str]] = None
    children: Optional[list[WbsNode]] = None

    @property
    def is_root(self) -> bool:
        return self.key == ROOT_KEY

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def kids(self) -> list[WbsNode]:
        """children as a list, creating the slot if absent."""
        if self.children is None:
            self.children = []
        return self.children

    def doc_list(self) -> list[str]:
        """documents as a list, creating the slot if absent."""
        if self.docs is None:
            self.docs = []
        return self.docs

    def to_dict(self) -> dict:
        """serialize to the tree exchange format."""
        d: dict = {"key": self.key, "label": self.label}
        if self.bg is not None:
            d["bg"] = self.bg
        if self.fg is not None:
            d["fg"] = self.fg
        if self.docs is not None:
            d["docs"] = list(self.docs)
        if self.children is not None:
            d["children"] = [c.to_dict() for c in self.children]
        return d

    @classmethod
    def from_dict(cls, d: dict) -> WbsNode:
        """deserialize from the tree exchange format.

        raises ValueError when the value does not match the node shape.
        """
        if not isinstance(d, dict):
            raise ValueError(f"node must be an object, got {type(d).__name__}")
        key = d.get("key")
        label = d.get("label")
        if not isinstance(key, str) or not isinstance(label, str):
            raise ValueError("node requires string 'key' and 'label'")

        for color in ("bg", "fg"):
            if d.get(color) is not None and not isinstance(d[color], str):
                raise ValueError(f"node {key}: '{color}' must be a string")

        docs = d.get("docs")
        if docs is not None:
            if not isinstance(docs, list) or not all(isinstance(x, str) for x in docs):
                raise ValueError(f"node {key}: 'docs' must be a list of strings")
            docs = list(docs)

        children = d.get("children")
        if children is not None:
            if not isinstance(children, list):
                raise ValueError(f"node {key}: 'children' must be a list")
            children = [cls.from_dict(c) for c in children]

        return cls(
            key=key,
            label=label,
            bg=d.get("bg"),
            fg=d.get("fg"),
            docs=docs,
            children=children,
        )

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> WbsNode:
        return cls.from_dict(json.loads(text))


@dataclass
class Location:
    """where a node sits: the node itself, its parent and its index there."""

    node: WbsNode
    parent: Optional[WbsNode] = None
    index: Optional[int] = None


# --- traversal ---

def walk(tree: WbsNode, parent: Optional[WbsNode] = None) -> Iterator[tuple[WbsNode, Optional[WbsNode]]]:
    """yield (node, parent) pairs depth-first, pre-order."""
    yield tree, parent
    for child in tree.children or []:
        yield from walk(child, tree)


def resolve_path(tree: WbsNode, key: str) -> Optional[list[str]]:
    """keys from root down to the node with this key, or None if not found."""
    if tree.key == key:
        return [tree.key]
    for child in tree.children or []:
        sub = resolve_path(child, key)
        if sub is not None:
            return [tree.key] + sub
    return None


def locate(tree: WbsNode, path: list[str]) -> Optional[Location]:
    """follow a root-to-node key path. returns None if any step is missing."""
    if not path or path[0] != tree.key:
        return None

    current = tree
    parent: Optional[WbsNode] = None
    index: Optional[int] = None
    for key in path[1:]:
        children = current.children or []
        idx = next((i for i, c in enumerate(children) if c.key == key), -1)
        if idx < 0:
            return None
        parent, index, current = current, idx, children[idx]
    return Location(node=current, parent=parent, index=index)


def find_node(tree: WbsNode, key: str) -> Optional[Location]:
    """resolve and locate in one step."""
    path = resolve_path(tree, key)
    if path is None:
        return None
    return locate(tree, path)


def clone_tree(tree: WbsNode) -> WbsNode:
    """fully independent deep copy."""
    return copy.deepcopy(tree)


def all_keys(tree: WbsNode) -> list[str]:
    return [node.key for node, _ in walk(tree)]


def duplicate_keys(tree: WbsNode) -> set[str]:
    """keys that appear on more than one node."""
    seen: set[str] = set()
    dupes: set[str] = set()
    for key in all_keys(tree):
        if key in seen:
            dupes.add(key)
        seen.add(key)
    return dupes


def count_nodes(tree: WbsNode) -> int:
    return sum(1 for _ in walk(tree))


def is_within(tree: WbsNode, ancestor_key: str, key: str) -> bool:
    """True if `key` is `ancestor_key` itself or sits somewhere below it."""
    path = resolve_path(tree, key)
    return path is not None and ancestor_key in path


# --- export formats ---

def export_outline(tree: WbsNode) -> str:
    """plain text outline, one node per line, indented by depth."""
    lines: list[str] = []

    def render_node(node: WbsNode, indent: int) -> None:
        prefix = "    " * indent
        docs = f"  [{len(node.docs)} doc(s)]" if node.docs else ""
        lines.append(f"{prefix}- {node.key}: {node.label}{docs}")
        for child in node.children or []:
            render_node(child, indent + 1)

    render_node(tree, 0)
    return "\n".join(lines)


def summarize_for_prompt(tree: WbsNode, max_nodes: int = PROMPT_MAX_NODES) -> dict:
    """reduce the tree to keys and labels, keeping the first `max_nodes` in pre-order.

    used as model context so very large trees still fit in a prompt.
    """
    count = 0

    def clone_limited(node: WbsNode) -> Optional[dict]:
        nonlocal count
        if count >= max_nodes:
            return None
        count += 1
        kids = []
        for child in node.children or []:
            if count >= max_nodes:
                break
            sub = clone_limited(child)
            if sub is not None:
                kids.append(sub)
        return {"key": node.key, "label": node.label, "children": kids}

    return clone_limited(tree) or {"key": tree.key, "label": tree.label, "children": []}
