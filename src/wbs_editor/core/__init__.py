"""core primitives shared between frontends."""

from .tree import (
    ROOT_KEY,
    WbsNode,
    Location,
    walk,
    resolve_path,
    locate,
    find_node,
    clone_tree,
    export_outline,
)
from .templates import initial_tree, blank_tree, DISCIPLINES
from .operations import (
    Operation,
    Rename,
    Add,
    Remove,
    Move,
    AddDoc,
    GenerateTree,
    operation_from_dict,
    summarize_ops,
)
from .validator import validate_batch, BatchTooLargeError, MAX_BATCH_OPS
from .parser import parse_commands
from .engine import apply_ops
from .history import History, MAX_UNDO_HISTORY
from .advisor import make_tips, MAX_TIPS
from .client import ClaudeClient, MockClient, ClientProtocol
from .planner import AssistantReply, Planner, ClaudePlanner, MockPlanner, CollaboratorError
from .session import EditorSession, AssistantTurn

__all__ = [
    # tree
    "ROOT_KEY",
    "WbsNode",
    "Location",
    "walk",
    "resolve_path",
    "locate",
    "find_node",
    "clone_tree",
    "export_outline",
    "initial_tree",
    "blank_tree",
    "DISCIPLINES",
    # operations
    "Operation",
    "Rename",
    "Add",
    "Remove",
    "Move",
    "AddDoc",
    "GenerateTree",
    "operation_from_dict",
    "summarize_ops",
    "validate_batch",
    "BatchTooLargeError",
    "MAX_BATCH_OPS",
    "parse_commands",
    "apply_ops",
    # history / advice
    "History",
    "MAX_UNDO_HISTORY",
    "make_tips",
    "MAX_TIPS",
    # collaborator
    "ClaudeClient",
    "MockClient",
    "ClientProtocol",
    "AssistantReply",
    "Planner",
    "ClaudePlanner",
    "MockPlanner",
    "CollaboratorError",
    # session
    "EditorSession",
    "AssistantTurn",
]
