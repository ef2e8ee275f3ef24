# context agent: pulls the most relevant past results out of the vector store

from task_agent.common.services.llm_service.llm_client.protocols import CompletionProtocol
from task_agent.common.services.vector_store.protocols import QueryMatch, VectorStoreProtocol
from task_agent.common.logging.logger import logger

# metadata field holding the originating task's description
TASK_METADATA_KEY = "task"

class ContextAgent():
    """
    Retrieves context snippets for a query.
    - Embeds the query, asks the store for the top-n matches, sorts them by descending score.
    - Each snippet is a match's "task" metadata; matches without it are skipped.
    NOTE: embedding or query failures propagate to the caller.
    """
    def __init__(self, completion_client: CompletionProtocol, vector_store: VectorStoreProtocol):
        self.completion_client = completion_client
        self.vector_store = vector_store

    async def retrieve_context(self, query: str, n: int) -> list[str]:
        """Return up to n snippets, most relevant first. Empty if nothing usable is stored."""
        logger.info("Getting context...")
        query_embedding = await self.completion_client.embed(query)
        matches = await self.vector_store.query(query_embedding, top_k=n, include_metadata=True)

        # stores don't promise an order; sorted() is stable so ties keep the store's order
        ranked = sorted(matches, key=lambda match: match.score, reverse=True)
        snippets = [snippet for snippet in map(self._task_snippet, ranked) if snippet is not None]
        return snippets[:n]

    @staticmethod
    def _task_snippet(match: QueryMatch) -> str | None:
        if not match.metadata or TASK_METADATA_KEY not in match.metadata:
            return None
        value = match.metadata[TASK_METADATA_KEY]
        return value if isinstance(value, str) else str(value)
