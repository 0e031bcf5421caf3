"""advisory analyzer: read-only heuristics that suggest improvements.

never mutates the tree and never raises on a well-formed one.
"""

from __future__ import annotations

from .templates import DISCIPLINES
from .tree import WbsNode, walk


# --- configuration ---

MAX_TIPS = 8


def missing_disciplines(section: WbsNode) -> list[str]:
    """discipline suffixes absent from a top-level section's children."""
    present = {".".join(c.key.split(".")[:2]) for c in section.children or []}
    return [s for s in DISCIPLINES if f"{section.key}.{s}" not in present]


def make_tips(tree: WbsNode, limit: int = MAX_TIPS) -> list[str]:
    """hints about sections missing disciplines and leaves without documents."""
    tips: list[str] = []

    for section in tree.children or []:
        missing = missing_disciplines(section)
        if missing:
            tips.append(f"section {section.key} seems to be missing disciplines: {', '.join(missing)}")

    for node, parent in walk(tree):
        if parent is None or node.children or node.docs:
            continue
        tips.append(f'consider attaching related documents to {node.key} ("{node.label}")')

    return tips[:limit]
