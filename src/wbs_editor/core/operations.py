"""the closed vocabulary of tree edit operations.

six kinds, tagged on the wire by "op". every batch, whether typed locally or
proposed by the assistant, is a list of these records.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional, Union


@dataclass(frozen=True)
class Rename:
    key: str
    label: str

    kind: ClassVar[str] = "rename"

    def to_dict(self) -> dict:
        return {"op": self.kind, "key": self.key, "label": self.label}


@dataclass(frozen=True)
class Add:
    parent: str
    label: str

    kind: ClassVar[str] = "add"

    def to_dict(self) -> dict:
        return {"op": self.kind, "parent": self.parent, "label": self.label}


@dataclass(frozen=True)
class Remove:
    key: str

    kind: ClassVar[str] = "remove"

    def to_dict(self) -> dict:
        return {"op": self.kind, "key": self.key}


@dataclass(frozen=True)
class Move:
    key: str
    new_parent: str

    kind: ClassVar[str] = "move"

    def to_dict(self) -> dict:
        return {"op": self.kind, "key": self.key, "newParent": self.new_parent}


@dataclass(frozen=True)
class AddDoc:
    key: str
    doc: str

    kind: ClassVar[str] = "addDoc"

    def to_dict(self) -> dict:
        return {"op": self.kind, "key": self.key, "doc": self.doc}


@dataclass(frozen=True)
class GenerateTree:
    """replace the whole tree with the default one. destructive."""

    description: Optional[str] = None

    kind: ClassVar[str] = "generateTree"

    def to_dict(self) -> dict:
        d = {"op": self.kind}
        if self.description is not None:
            d["description"] = self.description
        return d


Operation = Union[Rename, Add, Remove, Move, AddDoc, GenerateTree]

OPERATION_KINDS: dict[str, type] = {
    cls.kind: cls for cls in (Rename, Add, Remove, Move, AddDoc, GenerateTree)
}


def operation_from_dict(d: dict) -> Operation:
    """build an operation from its wire form.

    for trusted input only; untrusted batches go through the validator.
    raises ValueError on an unknown kind or missing field.
    """
    kind = d.get("op")
    try:
        if kind == "rename":
            return Rename(key=d["key"], label=d["label"])
        if kind == "add":
            return Add(parent=d["parent"], label=d["label"])
        if kind == "remove":
            return Remove(key=d["key"])
        if kind == "move":
            return Move(key=d["key"], new_parent=d["newParent"])
        if kind == "addDoc":
            return AddDoc(key=d["key"], doc=d["doc"])
        if kind == "generateTree":
            return GenerateTree(description=d.get("description"))
    except KeyError as e:
        raise ValueError(f"operation {kind!r} missing field {e}") from e
    raise ValueError(f"unknown operation: {kind!r}")


def describe_op(op: Operation) -> str:
    """one-line human description of an operation."""
    if isinstance(op, Rename):
        return f'rename {op.key} → "{op.label}"'
    if isinstance(op, Add):
        return f'add child to {op.parent}: "{op.label}"'
    if isinstance(op, Remove):
        return f"remove {op.key} (and its subtree)"
    if isinstance(op, Move):
        return f"move {op.key} under {op.new_parent}"
    if isinstance(op, AddDoc):
        return f"attach document to {op.key}: {op.doc}"
    if isinstance(op, GenerateTree):
        seed = f' ("{op.description}")' if op.description else ""
        return f"generate a new wbs{seed} [REPLACES THE ENTIRE TREE]"
    raise TypeError(f"not an operation: {op!r}")


def summarize_ops(ops: list[Operation]) -> str:
    """numbered summary of a batch, one line per operation."""
    return "\n".join(f"{i}. {describe_op(op)}" for i, op in enumerate(ops, start=1))


def is_destructive(ops: list[Operation]) -> bool:
    """True if the batch replaces the whole tree somewhere along the way."""
    return any(isinstance(op, GenerateTree) for op in ops)
