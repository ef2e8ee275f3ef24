from contextlib import asynccontextmanager, AsyncExitStack
from dataclasses import dataclass
from typing import AsyncIterator

import httpx

from task_agent.config.app_config import ServiceSettings
from task_agent.common.logging.logger import logger
from task_agent.common.services.llm_service.llm_client.openai_client import AsyncOpenAICompletionClient
from task_agent.common.services.vector_store.pinecone_client import PineconeVectorStore

@dataclass
class ServiceResources:
    """Long-lived clients shared by every agent for one process run."""
    completion_client: AsyncOpenAICompletionClient
    vector_store: PineconeVectorStore

@asynccontextmanager
async def lifespan(settings: ServiceSettings) -> AsyncIterator[ServiceResources]:
    """
    Manages the service's startup and shutdown.
    Uses the AsyncExitStack to clean up resources.

    NOTE:
    - Use stack.enter_async_context when the resource has __aenter__ and __aexit__ support
    - Use stack.push_async_callback to register the clean up method only
    """
    logger.info("Starting task agent!")
    logger.info("Initializing service resources...")

    async with AsyncExitStack() as stack:
        timeout = httpx.Timeout(settings.HTTP_TIMEOUT_SECONDS, connect=10.0)

        # completion + embedding client
        completion_client = AsyncOpenAICompletionClient(
            model_name=settings.OPENAI_API_MODEL,
            api_key=settings.OPENAI_API_KEY,
            embedding_model=settings.OPENAI_EMBEDDING_MODEL,
            chat_temperature=settings.OPENAI_CHAT_TEMPERATURE,
            chat_max_tokens=settings.OPENAI_CHAT_MAX_TOKENS,
            completion_temperature=settings.OPENAI_COMPLETION_TEMPERATURE,
            completion_max_tokens=settings.OPENAI_COMPLETION_MAX_TOKENS,
            rate_limit_wait=settings.RATE_LIMIT_WAIT_SECONDS,
            rate_limit_max_attempts=settings.RATE_LIMIT_MAX_ATTEMPTS,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
        )
        stack.push_async_callback(completion_client.close)
        logger.info(f"Completion client (OPENAI, {completion_client.style.value} style, model={completion_client.model}) initialized.")

        # vector store over a shared httpx client
        http_client = await stack.enter_async_context(httpx.AsyncClient(timeout=timeout))
        vector_store = PineconeVectorStore(
            api_key=settings.PINECONE_API_KEY,
            region=settings.PINECONE_REGION,
            project_id=settings.PINECONE_PROJECT_ID,
            index_name=settings.PINECONE_INDEX_NAME,
            dimension=settings.PINECONE_DIMENSION,
            http_client=http_client,
        )
        logger.info(f"Vector store (PINECONE, index={settings.PINECONE_INDEX_NAME}) initialized.")

        try:
            yield ServiceResources(completion_client=completion_client, vector_store=vector_store)
        finally:
            logger.info("Shutting down service resources...")

    # The AsyncExitStack calls the registered cleanup methods in reverse order.
    logger.info("All global resources have been gracefully closed.")
