"""Fakes for the completion client and vector store."""
from collections import deque
from typing import Any, Iterable, Optional

from task_agent.common.services.vector_store.protocols import QueryMatch


class ScriptedCompletionClient:
    """Completion client that replays scripted replies and embeds text deterministically."""

    def __init__(self, responses: Iterable[Any] = (), embeddings: Optional[dict[str, list[float]]] = None):
        self.responses = deque(responses)
        self.embeddings = embeddings or {}
        self.prompts: list[str] = []
        self.embedded: list[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.responses:
            raise AssertionError("ScriptedCompletionClient exhausted")
        response = self.responses.popleft()
        if isinstance(response, Exception):
            raise response
        return response

    async def embed(self, text: str) -> list[float]:
        self.embedded.append(text)
        if text in self.embeddings:
            return self.embeddings[text]
        # stable, text-dependent vector
        return [float(len(text)), float(sum(map(ord, text)) % 97), 1.0]


class StaticVectorStore:
    """Vector store returning fixed matches; records queries."""

    def __init__(self, matches: Iterable[QueryMatch] = ()):
        self.matches = list(matches)
        self.queries: list[tuple[list[float], int, bool]] = []

    async def list_collections(self) -> set[str]:
        return set()

    async def create_collection(self, name: str) -> None:
        return None

    async def query(self, vector, top_k, include_metadata=True):
        self.queries.append((vector, top_k, include_metadata))
        return list(self.matches)

    async def upsert(self, id, vector, metadata=None):
        return 1
