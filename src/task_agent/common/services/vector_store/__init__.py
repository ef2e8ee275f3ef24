# vector store clients

from task_agent.common.services.vector_store.protocols import QueryMatch, VectorStoreProtocol
from task_agent.common.services.vector_store.pinecone_client import PineconeVectorStore
from task_agent.common.services.vector_store.in_memory_store import InMemoryVectorStore

__all__ = ["QueryMatch", "VectorStoreProtocol", "PineconeVectorStore", "InMemoryVectorStore"]
