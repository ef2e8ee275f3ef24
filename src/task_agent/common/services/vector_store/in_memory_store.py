# in-process vector store with the same interface as the Pinecone client
# NOTE: for local runs and tests; nothing is persisted.

from collections import OrderedDict
from typing import Any, Optional

import numpy as np

from task_agent.common.services.vector_store.protocols import QueryMatch, VectorStoreProtocol

class InMemoryVectorStore(VectorStoreProtocol):
    """
    Cosine-similarity store kept in a dict.
    - upsert overwrites by id (insertion order of the first write is kept).
    - query returns the top_k matches in insertion order, NOT sorted by score, same as callers must expect from a remote store.
    """
    def __init__(self, collections: Optional[set[str]] = None):
        self.collections: set[str] = set(collections or ())
        self._records: OrderedDict[str, tuple[list[float], Optional[dict[str, Any]]]] = OrderedDict()

    async def list_collections(self) -> set[str]:
        return set(self.collections)

    async def create_collection(self, name: str) -> None:
        self.collections.add(name)

    async def query(self, vector: list[float], top_k: int, include_metadata: bool = True) -> list[QueryMatch]:
        if top_k <= 0 or not self._records:
            return []
        scored = [
            (record_id, self._cosine_similarity(vector, values), values, metadata)
            for record_id, (values, metadata) in self._records.items()
        ]
        # pick the top_k ids by score, then hand them back in insertion order
        top_ids = {item[0] for item in sorted(scored, key=lambda item: item[1], reverse=True)[:top_k]}
        return [
            QueryMatch(
                id=record_id,
                score=score,
                values=values,
                metadata=dict(metadata) if include_metadata and metadata is not None else None,
            )
            for record_id, score, values, metadata in scored
            if record_id in top_ids
        ]

    async def upsert(self, id: str, vector: list[float], metadata: Optional[dict[str, Any]] = None) -> int:
        self._records[id] = (list(vector), dict(metadata) if metadata is not None else None)
        return 1

    def __len__(self) -> int:
        return len(self._records)

    @staticmethod
    def _cosine_similarity(a: list[float], b: list[float]) -> float:
        """
        Cosine similarity between two vectors using numpy.
        Returns 0.0 if either vector has zero norm (undefined similarity).
        """
        va, vb = np.array(a, dtype=float), np.array(b, dtype=float)
        norm_a, norm_b = np.linalg.norm(va), np.linalg.norm(vb)
        if norm_a == 0.0 or norm_b == 0.0:
            return 0.0
        return float(np.dot(va, vb) / (norm_a * norm_b))
