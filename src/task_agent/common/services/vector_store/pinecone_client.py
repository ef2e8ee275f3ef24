# Pinecone REST client (legacy controller/databases API)

from typing import Any, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from task_agent.common.services.vector_store.protocols import (
    QueryMatch,
    QueryResponse,
    UpsertResponse,
    VectorStoreProtocol,
)
from task_agent.common.errors import ResponseFormatError, TransportError, UnexpectedStatusError
from task_agent.common.logging.logger import logger

SERVICE_NAME = "pinecone"

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)

# fixed index configuration used on creation
DEFAULT_INDEX_SPEC: dict[str, Any] = {
    "metric": "cosine",
    "pods": 1,
    "replicas": 1,
    "pod_type": "p1.x1",
}

def controller_url(region: str) -> str:
    return f"https://controller.{region}.pinecone.io"

def index_url(index_name: str, project_id: str, region: str) -> str:
    return f"https://{index_name}-{project_id}.svc.{region}.pinecone.io"

_collection_names = TypeAdapter(list[str])

class PineconeVectorStore(VectorStoreProtocol):
    """
    Thin async wrapper around the Pinecone REST endpoints used by the task loop.
    - One index (collection) per store instance for query/upsert; list/create go through the controller.
    - Transport failures, non-2xx statuses and malformed bodies raise typed errors.
    """
    def __init__(
        self,
        api_key: str,
        region: str,
        project_id: str,
        index_name: str,
        *,
        dimension: int = 1536,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.region = region
        self.project_id = project_id
        self.index_name = index_name
        self.dimension = dimension
        # shared client for the process lifetime, closed by the lifespan exit stack
        self.http_client = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def controller_url(self) -> str:
        return controller_url(self.region)

    @property
    def index_url(self) -> str:
        return index_url(self.index_name, self.project_id, self.region)

    async def list_collections(self) -> set[str]:
        """List the names of all indexes in the project's region."""
        resp = await self._request(
            "GET",
            f"{self.controller_url}/databases",
            headers={"Accept": "application/json; charset=utf-8"},
        )
        try:
            return set(_collection_names.validate_python(resp.json()))
        except (ValueError, ValidationError) as e:
            raise ResponseFormatError(f"Unexpected index list from Pinecone: {e}", service=SERVICE_NAME) from e

    async def create_collection(self, name: str) -> None:
        """
        Create an index with the fixed configuration.
        NOTE: not idempotent on the remote side, check list_collections() first.
        """
        body = {**DEFAULT_INDEX_SPEC, "dimension": self.dimension, "name": name}
        logger.info(f"Creating Pinecone index '{name}' (dimension={self.dimension})...")
        await self._request("POST", f"{self.controller_url}/databases", json=body)

    async def query(self, vector: list[float], top_k: int, include_metadata: bool = True) -> list[QueryMatch]:
        """Top-k similarity query against the configured index. Results are returned as sent by the service."""
        body = {
            "vector": vector,
            "top_k": top_k,
            "include_metadata": include_metadata,
        }
        logger.info("Querying Pinecone...")
        resp = await self._request("POST", f"{self.index_url}/query", json=body)
        return self._parse(resp, QueryResponse).matches

    async def upsert(self, id: str, vector: list[float], metadata: Optional[dict[str, Any]] = None) -> int:
        """Insert or overwrite a single vector; returns the upserted count reported by the service."""
        record: dict[str, Any] = {"id": id, "values": vector}
        if metadata:
            record["metadata"] = metadata
        logger.info("Storing to Pinecone...")
        resp = await self._request("POST", f"{self.index_url}/vectors/upsert", json={"vectors": [record]})
        return self._parse(resp, UpsertResponse).upserted_count

    async def close(self) -> None:
        await self.http_client.aclose()

    # =====================================================================
    # Request helpers
    # =====================================================================

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        headers = {"Api-Key": self.api_key, **kwargs.pop("headers", {})}
        try:
            resp = await self.http_client.request(method, url, headers=headers, **kwargs)
        except httpx.TimeoutException as e:
            raise TransportError(f"Pinecone request timed out: {method} {url}", service=SERVICE_NAME) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Failed to reach Pinecone: {method} {url}: {e}", service=SERVICE_NAME) from e

        if not resp.is_success:
            raise UnexpectedStatusError(
                f"Pinecone returned HTTP {resp.status_code} for {method} {url}",
                service=SERVICE_NAME,
                status_code=resp.status_code,
                body=resp.text,
            )
        return resp

    @staticmethod
    def _parse(resp: httpx.Response, response_model: Type[ResponseModel]) -> ResponseModel:
        try:
            return response_model.model_validate_json(resp.content)
        except ValidationError as e:
            raise ResponseFormatError(
                f"Unexpected {response_model.__name__} body from Pinecone: {e}",
                service=SERVICE_NAME,
            ) from e
