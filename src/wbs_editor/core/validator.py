"""acceptance filter for operation batches from untrusted producers.

items that don't match their kind's shape are dropped one by one; a batch
whose surviving item count exceeds the ceiling is rejected as a whole.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, StrictStr, StringConstraints, TypeAdapter, ValidationError

from .operations import Add, AddDoc, GenerateTree, Move, Operation, Remove, Rename


# --- configuration ---

MAX_BATCH_OPS = 200


class BatchTooLargeError(ValueError):
    """raised when a validated batch exceeds MAX_BATCH_OPS."""

    def __init__(self, count: int, limit: int = MAX_BATCH_OPS):
        self.count = count
        self.limit = limit
        super().__init__(f"too many operations: {count} (limit {limit})")


# --- wire schemas ---

NonEmptyStr = Annotated[StrictStr, StringConstraints(strip_whitespace=True, min_length=1)]


class RenameItem(BaseModel):
    op: Literal["rename"]
    key: StrictStr
    label: StrictStr

    def to_operation(self) -> Rename:
        return Rename(key=self.key, label=self.label)


class AddItem(BaseModel):
    op: Literal["add"]
    parent: StrictStr
    label: StrictStr

    def to_operation(self) -> Add:
        return Add(parent=self.parent, label=self.label)


class RemoveItem(BaseModel):
    op: Literal["remove"]
    key: StrictStr

    def to_operation(self) -> Remove:
        return Remove(key=self.key)


class MoveItem(BaseModel):
    op: Literal["move"]
    key: StrictStr
    newParent: StrictStr

    def to_operation(self) -> Move:
        return Move(key=self.key, new_parent=self.newParent)


class AddDocItem(BaseModel):
    op: Literal["addDoc"]
    key: StrictStr
    doc: NonEmptyStr

    def to_operation(self) -> AddDoc:
        return AddDoc(key=self.key, doc=self.doc)


class GenerateTreeItem(BaseModel):
    op: Literal["generateTree"]
    description: Optional[StrictStr] = None

    def to_operation(self) -> GenerateTree:
        return GenerateTree(description=self.description)


WireOperation = Annotated[
    Union[RenameItem, AddItem, RemoveItem, MoveItem, AddDocItem, GenerateTreeItem],
    Field(discriminator="op"),
]

_item_adapter: TypeAdapter = TypeAdapter(WireOperation)


def validate_item(item: Any) -> Optional[Operation]:
    """validate one wire item. returns None if it doesn't match any shape."""
    try:
        return _item_adapter.validate_python(item).to_operation()
    except ValidationError as e:
        logging.debug(f"dropping malformed operation {item!r}: {e.error_count()} error(s)")
        return None


def validate_batch(items: Any, limit: int = MAX_BATCH_OPS) -> list[Operation]:
    """keep the well-formed items of an external batch, in their original order.

    raises ValueError if `items` is not a list, and BatchTooLargeError if more
    than `limit` items survive validation.
    """
    if not isinstance(items, list):
        raise ValueError(f"operation batch must be a list, got {type(items).__name__}")

    ops = [op for op in (validate_item(item) for item in items) if op is not None]
    dropped = len(items) - len(ops)
    if dropped:
        logging.info(f"validator dropped {dropped} of {len(items)} operation(s)")

    if len(ops) > limit:
        raise BatchTooLargeError(len(ops), limit)
    return ops
