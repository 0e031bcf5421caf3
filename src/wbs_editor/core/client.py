"""language model client using claude-agent-sdk.

the planner only needs "send a prompt, get text back"; this module provides
that for the real sdk and for tests.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

from claude_agent_sdk import (
    ClaudeAgentOptions,
    ClaudeSDKClient,
)


# --- configuration ---

DEFAULT_MODEL = os.environ.get("WBS_EDITOR_MODEL", "sonnet")


@runtime_checkable
class ClientProtocol(Protocol):
    """protocol for text completion clients (real or mock)."""

    async def complete(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        """send prompt and return the response text."""
        ...


class MockClient:
    """mock client for testing without api calls."""

    def __init__(self, responses: Optional[dict[str, str]] = None, delay: float = 0.0):
        """init with optional response mapping.

        responses: dict mapping prompt substrings to responses.
        if the prompt contains a key (case-insensitive), return its value.
        """
        self.responses = responses or {}
        self.calls: list[str] = []
        self.delay = delay
        self.default_response = '{"message": "mock mode: no changes proposed.", "ops": [], "tips": []}'

    async def __aenter__(self) -> MockClient:
        return self

    async def __aexit__(self, *args) -> None:
        pass

    async def complete(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        self.calls.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)

        prompt_lower = prompt.lower()
        for key, response in self.responses.items():
            if key.lower() in prompt_lower:
                return response
        return self.default_response


class ClaudeClient:
    """async client for claude using claude-agent-sdk.

    creates a fresh connection per query to avoid state conflicts.
    """

    def __init__(self, model: str = DEFAULT_MODEL, cwd: Optional[Path] = None):
        self.model = model
        self.cwd = cwd or Path.cwd()

    async def __aenter__(self) -> ClaudeClient:
        return self

    async def __aexit__(self, *args) -> None:
        pass

    async def complete(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        """send a prompt and collect the full text response.

        raises RuntimeError (with the sdk error chained) on any failure.
        """
        options = ClaudeAgentOptions(
            cwd=str(self.cwd),
            model=self.model,
            system_prompt=system_prompt,
            allowed_tools=[],
            max_turns=1,
        )
        client: Optional[ClaudeSDKClient] = None

        try:
            client = ClaudeSDKClient(options)
            await client.connect()
            await client.query(prompt)

            text_parts: list[str] = []
            async for event in client.receive_response():
                logging.debug(f"event type: {type(event).__name__}")
                if hasattr(event, "message") and hasattr(event.message, "content"):
                    blocks = event.message.content
                elif hasattr(event, "content") and isinstance(event.content, list):
                    blocks = event.content
                else:
                    continue
                for block in blocks:
                    if hasattr(block, "text") and block.text:
                        text_parts.append(block.text)
                    elif isinstance(block, dict) and block.get("text"):
                        text_parts.append(block["text"])

            logging.debug(f"total text parts collected: {len(text_parts)}")
            return "\n".join(text_parts)

        except Exception as e:
            raise RuntimeError(f"claude api error: {e}") from e

        finally:
            if client:
                try:
                    await client.disconnect()
                except Exception:
                    logging.debug("ignoring error during sdk disconnect", exc_info=True)
