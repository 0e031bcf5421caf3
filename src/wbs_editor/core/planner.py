"""remote collaborator: asks a language model for an operation batch.

the core only depends on the `Planner` protocol. `ClaudePlanner` is the real
implementation; `MockPlanner` returns canned replies.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, runtime_checkable

from .client import ClientProtocol
from .operations import Operation
from .tree import WbsNode, summarize_for_prompt
from .validator import validate_batch


# --- configuration ---

MAX_TIP_LENGTH = 280
MAX_REMOTE_TIPS = 6

SYSTEM_PROMPT = """you are a work-breakdown-structure (wbs) planner. you receive a wbs as json
(nodes with {key, label, children}) and a request from the user.

answer ONLY with a strict json object of this form:

{
  "message": "short text explaining what you will do",
  "ops": [ ...list of operations... ],
  "tips": ["...", "..."]
}

allowed operations:
- {"op": "rename", "key": "X", "label": "new label"}
- {"op": "add", "parent": "X", "label": "new child"}
- {"op": "remove", "key": "X"}
- {"op": "move", "key": "X", "newParent": "Y"}
- {"op": "addDoc", "key": "X", "doc": "url or identifier"}
- {"op": "generateTree", "description": "optional"}

rules:
- never invent keys that don't exist, except for new children (added under an existing parent).
- keep existing keys (e.g. 4.P.1) untouched.
- avoid arbitrary changes; respect the intent of the request.
- if the request is ambiguous, make a conservative transformation (minimal ops).
- include short, useful tips (at most 6, each under 280 characters).
- no text outside the json. no comments. no markdown."""


class CollaboratorError(RuntimeError):
    """the remote collaborator failed; nothing was changed and the call may be retried."""


@dataclass
class AssistantReply:
    """what the collaborator proposes: operations, tips and a free-text message."""

    ops: list[Operation] = field(default_factory=list)
    tips: list[str] = field(default_factory=list)
    message: str = ""

    def to_dict(self) -> dict:
        return {
            "ops": [op.to_dict() for op in self.ops],
            "tips": list(self.tips),
            "message": self.message,
        }


@runtime_checkable
class Planner(Protocol):
    """anything that turns (prompt, tree) into a proposed batch."""

    async def request_ops(self, prompt: str, tree: WbsNode) -> AssistantReply:
        ...


def build_prompt(prompt: str, tree: WbsNode) -> str:
    """user message: the request plus the tree, trimmed for context."""
    mini = summarize_for_prompt(tree)
    return (
        f"user request:\n{prompt}\n\n"
        f"current wbs (trimmed for context):\n{json.dumps(mini, indent=2, ensure_ascii=False)}\n"
    )


def extract_json(text: str) -> Optional[dict]:
    """find the json object in a model reply (raw, or inside a code fence)."""
    candidates = []
    fence = re.search(r"```(?:json)?\s*\n?([\s\S]*?)\n?```", text)
    if fence:
        candidates.append(fence.group(1))
    stripped = text.strip()
    candidates.append(stripped)
    start, end = stripped.find("{"), stripped.rfind("}")
    if 0 <= start < end:
        candidates.append(stripped[start:end + 1])

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed
    return None


def normalize_tips(raw: Any) -> list[str]:
    """keep string tips, trimmed, cut to MAX_TIP_LENGTH characters."""
    if not isinstance(raw, list):
        return []
    tips = []
    for tip in raw:
        if not isinstance(tip, str) or not tip.strip():
            continue
        tip = tip.strip()
        if len(tip) > MAX_TIP_LENGTH:
            tip = tip[:MAX_TIP_LENGTH - 3] + "..."
        tips.append(tip)
    return tips


def parse_reply(data: dict) -> AssistantReply:
    """turn a decoded reply object into a validated AssistantReply.

    raises BatchTooLargeError when the validated batch is over the ceiling.
    """
    raw_ops = data.get("ops")
    ops = validate_batch(raw_ops if isinstance(raw_ops, list) else [])
    message = data.get("message")
    if not isinstance(message, str):
        # older servers called it "reply"
        message = data.get("reply") if isinstance(data.get("reply"), str) else ""
    return AssistantReply(ops=ops, tips=normalize_tips(data.get("tips")), message=message.strip())


class ClaudePlanner:
    """planner backed by a text completion client."""

    def __init__(self, client: ClientProtocol, max_tips: int = MAX_REMOTE_TIPS):
        self.client = client
        self.max_tips = max_tips

    async def request_ops(self, prompt: str, tree: WbsNode) -> AssistantReply:
        try:
            text = await self.client.complete(build_prompt(prompt, tree), system_prompt=SYSTEM_PROMPT)
        except Exception as e:
            logging.warning(f"assistant request failed: {e}")
            raise CollaboratorError(f"assistant request failed: {e}") from e

        data = extract_json(text)
        if data is None:
            logging.warning(f"assistant reply is not json: {text[:200]!r}")
            raise CollaboratorError("assistant reply was not in the expected json format")

        reply = parse_reply(data)
        reply.tips = reply.tips[:self.max_tips]
        logging.info(f"assistant proposed {len(reply.ops)} operation(s)")
        return reply


class MockPlanner:
    """planner returning a fixed reply (or raising a fixed error)."""

    def __init__(self, reply: Optional[AssistantReply] = None, error: Optional[Exception] = None):
        self.reply = reply or AssistantReply(message="mock mode: no changes proposed.")
        self.error = error
        self.calls: list[tuple[str, WbsNode]] = []

    async def request_ops(self, prompt: str, tree: WbsNode) -> AssistantReply:
        self.calls.append((prompt, tree))
        if self.error is not None:
            raise self.error
        return AssistantReply(ops=list(self.reply.ops), tips=list(self.reply.tips), message=self.reply.message)
