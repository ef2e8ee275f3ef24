# protocols and wire types for vector stores

from typing import Any, Optional, Protocol
from pydantic import BaseModel, ConfigDict, Field

class SparseValues(BaseModel):
    indices: list[int]
    values: list[float]

class QueryMatch(BaseModel):
    """A single ranked match returned by a similarity query."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    score: float
    values: list[float] = Field(default_factory=list)
    sparse_values: Optional[SparseValues] = Field(default=None, alias="sparseValues")
    metadata: Optional[dict[str, Any]] = None

class QueryResponse(BaseModel):
    matches: list[QueryMatch] = Field(default_factory=list)

class UpsertResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    upserted_count: int = Field(alias="upsertedCount")

# Ensures that all vector stores implement this protocol
# NOTE: query results are NOT guaranteed to be sorted; callers sort by score themselves.
class VectorStoreProtocol(Protocol):
    async def list_collections(self) -> set[str]: ...

    async def create_collection(self, name: str) -> None: ...

    async def query(self, vector: list[float], top_k: int, include_metadata: bool = True) -> list[QueryMatch]: ...

    async def upsert(self, id: str, vector: list[float], metadata: Optional[dict[str, Any]] = None) -> int: ...
