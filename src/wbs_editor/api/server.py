"""fastapi server for the wbs editor.

exposes the editor session as REST endpoints, plus the stateless `/ai/ops`
collaborator route that turns a prompt and a tree into a validated batch.
"""

from __future__ import annotations

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from ..core.advisor import make_tips
from ..core.client import ClaudeClient, DEFAULT_MODEL, MockClient
from ..core.engine import UNSET
from ..core.planner import ClaudePlanner, CollaboratorError, Planner, normalize_tips
from ..core.session import EditorSession
from ..core.tree import WbsNode, resolve_path, export_outline
from ..core.validator import BatchTooLargeError, validate_batch


# --- configuration ---

DEFAULT_PORT = int(os.environ.get("WBS_EDITOR_PORT", "8787"))


# --- pydantic models for api ---

class NodeDef(BaseModel):
    """node in the tree exchange format."""
    key: str
    label: str
    bg: Optional[str] = None
    fg: Optional[str] = None
    docs: Optional[list[str]] = None
    children: Optional[list[NodeDef]] = None

    def to_node(self) -> WbsNode:
        return WbsNode.from_dict(self.model_dump(exclude_unset=True))


class OpsRequest(BaseModel):
    """externally sourced batch to apply to the session tree."""
    ops: list = Field(default_factory=list)  # raw items, validated one by one
    tips: list = Field(default_factory=list)  # producer tips, echoed back normalized


class AiOpsRequest(BaseModel):
    """collaborator request: a prompt and the tree it refers to."""
    prompt: str
    tree: NodeDef


class AssistantRequest(BaseModel):
    """one assistant turn on the session tree."""
    prompt: str


class ColorsRequest(BaseModel):
    """style hints to set; omitted fields are left alone, empty ones cleared."""
    bg: Optional[str] = None
    fg: Optional[str] = None


class TreeResponse(BaseModel):
    """session tree in api response."""
    tree: dict
    can_undo: bool
    can_redo: bool
    undo_depth: int
    redo_depth: int

    @classmethod
    def from_session(cls, session: EditorSession) -> TreeResponse:
        return cls(
            tree=session.tree.to_dict(),
            can_undo=session.history.can_undo(),
            can_redo=session.history.can_redo(),
            undo_depth=session.history.undo_depth,
            redo_depth=session.history.redo_depth,
        )


class BatchResponse(BaseModel):
    """result of applying a batch."""
    applied: list[dict]
    tips: list[str]
    tree: TreeResponse


class TurnResponse(BaseModel):
    """result of an assistant turn."""
    source: Optional[str]
    ops: list[dict]
    tips: list[str]
    messages: list[str]
    committed: bool
    error: Optional[str]
    tree: TreeResponse


# --- app state ---

class AppState:
    """shared application state: one editor session and its planner."""

    def __init__(self, mock: bool = False, model: str = DEFAULT_MODEL, planner: Optional[Planner] = None):
        self.mock = mock
        self.model = model
        self.planner = planner or ClaudePlanner(MockClient() if mock else ClaudeClient(model=model))
        self.session = EditorSession(planner=self.planner)
        # batches and assistant turns run one at a time
        self.lock = asyncio.Lock()


state = AppState()


def _tree_response() -> TreeResponse:
    return TreeResponse.from_session(state.session)


def _too_many(e: BatchTooLargeError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "too_many_ops", "count": e.count})


# --- lifespan ---

@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.info(f"wbs editor api starting (mock={state.mock}, model={state.model})")
    yield
    logging.info("wbs editor api stopped")


# --- app ---

app = FastAPI(
    title="wbs editor api",
    description="REST API for incremental, undoable editing of a work-breakdown structure",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # tighten in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- endpoints ---

@app.get("/health")
async def health():
    """health check."""
    return {"status": "ok", "model": "mock" if state.mock else state.model}


@app.get("/tree", response_model=TreeResponse)
async def get_tree():
    """get the current tree and history state."""
    return _tree_response()


@app.put("/tree", response_model=TreeResponse)
async def load_tree(req: NodeDef):
    """replace the tree with a loaded one (undoable)."""
    try:
        tree = req.to_node()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    async with state.lock:
        state.session.load_tree(tree)
    return _tree_response()


@app.post("/tree/new", response_model=TreeResponse)
async def new_tree():
    """start an empty project (undoable)."""
    async with state.lock:
        state.session.new_blank()
    return _tree_response()


@app.post("/tree/reset", response_model=TreeResponse)
async def reset_tree():
    """restore the default project tree (undoable)."""
    async with state.lock:
        state.session.reset_default()
    return _tree_response()


@app.get("/tree/outline", response_class=PlainTextResponse)
async def get_outline():
    """export the tree as a plain text outline."""
    return export_outline(state.session.tree)


@app.post("/ops", response_model=BatchResponse)
async def apply_ops(req: OpsRequest):
    """validate and apply an externally sourced batch as one undo step."""
    async with state.lock:
        try:
            ops = state.session.apply_external(req.ops)
        except BatchTooLargeError as e:
            return _too_many(e)
    return BatchResponse(
        applied=[op.to_dict() for op in ops],
        tips=normalize_tips(req.tips) + make_tips(state.session.tree),
        tree=_tree_response(),
    )


@app.post("/ai/ops")
async def ai_ops(req: AiOpsRequest):
    """ask the collaborator for a batch. never touches the session tree."""
    if not req.prompt.strip():
        raise HTTPException(status_code=400, detail="body must contain a non-empty prompt and a tree")
    try:
        tree = req.tree.to_node()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        reply = await state.planner.request_ops(req.prompt, tree)
    except BatchTooLargeError as e:
        return _too_many(e)
    except CollaboratorError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return reply.to_dict()


@app.post("/assistant", response_model=TurnResponse)
async def assistant(req: AssistantRequest):
    """run an assistant turn: local commands, or the online planner as fallback."""
    async with state.lock:
        turn = await state.session.handle_prompt(req.prompt)
    return TurnResponse(
        source=turn.source,
        ops=[op.to_dict() for op in turn.ops],
        tips=turn.tips,
        messages=turn.messages,
        committed=turn.committed,
        error=turn.error,
        tree=_tree_response(),
    )


# --- undo/redo endpoints ---

@app.post("/undo", response_model=TreeResponse)
async def undo():
    """undo the last committed batch."""
    async with state.lock:
        if not state.session.undo():
            raise HTTPException(status_code=400, detail="nothing to undo")
    return _tree_response()


@app.post("/redo", response_model=TreeResponse)
async def redo():
    """redo the last undone batch."""
    async with state.lock:
        if not state.session.redo():
            raise HTTPException(status_code=400, detail="nothing to redo")
    return _tree_response()


@app.get("/tips", response_model=list[str])
async def get_tips():
    """heuristic improvement hints for the current tree."""
    return state.session.tips()


# --- node endpoints ---

def _require_node(key: str) -> list[str]:
    path = resolve_path(state.session.tree, key)
    if path is None:
        raise HTTPException(status_code=404, detail=f"node not found: {key}")
    return path


@app.get("/node/{key}/path", response_model=list[str])
async def get_path(key: str):
    """keys from the root down to this node."""
    return _require_node(key)


@app.post("/node/{key}/shift", response_model=TreeResponse)
async def shift_node(key: str, direction: int = 1):
    """move a node up (-1) or down (+1) among its siblings."""
    if direction not in (-1, 1):
        raise HTTPException(status_code=400, detail="direction must be -1 or 1")
    _require_node(key)
    async with state.lock:
        state.session.shift_sibling(key, direction)
    return _tree_response()


@app.put("/node/{key}/colors", response_model=TreeResponse)
async def set_colors(key: str, req: ColorsRequest):
    """set or clear a node's background/foreground hints."""
    _require_node(key)
    fields = req.model_dump(exclude_unset=True)
    async with state.lock:
        state.session.set_colors(key, bg=fields.get("bg", UNSET), fg=fields.get("fg", UNSET))
    return _tree_response()


@app.delete("/node/{key}/docs/{index}", response_model=TreeResponse)
async def remove_doc(key: str, index: int):
    """detach one document reference from a node."""
    _require_node(key)
    async with state.lock:
        state.session.remove_doc(key, index)
    return _tree_response()


# --- entrypoint ---

def main():
    """run the api server."""
    import argparse
    import uvicorn

    parser = argparse.ArgumentParser(description="wbs editor api server")
    parser.add_argument("--host", default="127.0.0.1", help="host to bind")
    parser.add_argument("--port", "-p", type=int, default=DEFAULT_PORT, help="port to bind")
    parser.add_argument("--mock", "-m", action="store_true", help="use mock client (no api calls)")
    parser.add_argument("--model", default=DEFAULT_MODEL, help=f"model for the online assistant (default: {DEFAULT_MODEL})")
    parser.add_argument("--reload", action="store_true", help="enable auto-reload")
    parser.add_argument("--log-level", default="info", help="logging level (default: info)")

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(message)s")

    # configure state
    global state
    state = AppState(mock=args.mock, model=args.model)

    uvicorn.run(
        "wbs_editor.api.server:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower(),
    )


if __name__ == "__main__":
    main()
