# mixin settings for external services (completion service, vector store) and the task loop
from typing import Literal, Optional
from pydantic import BaseModel, Field

class OpenAISettingsMixin(BaseModel):
    """
    Model for OpenAI completion + embedding client settings.
    NOTE: chat vs. legacy completion style is picked from OPENAI_API_MODEL (prefix "gpt-" means chat).
    """
    OPENAI_API_KEY: str
    OPENAI_API_MODEL: str

    OPENAI_EMBEDDING_MODEL: str = Field(default="text-embedding-ada-002", description="Model used for result/context embeddings.")
    OPENAI_CHAT_TEMPERATURE: float = Field(default=0.5, description="Sampling temperature for chat-style models.")
    OPENAI_CHAT_MAX_TOKENS: int = Field(default=100, description="Max tokens for chat-style completions.")
    OPENAI_COMPLETION_TEMPERATURE: float = Field(default=0.7, description="Sampling temperature for legacy completion models.")
    OPENAI_COMPLETION_MAX_TOKENS: int = Field(default=2000, description="Max tokens for legacy completions.")

    # rate limit backoff, the only retry policy in the service
    RATE_LIMIT_WAIT_SECONDS: float = Field(default=10.0, description="Fixed wait after an HTTP 429 before retrying.")
    RATE_LIMIT_MAX_ATTEMPTS: Optional[int] = Field(default=None, ge=1, description="Bound on attempts while rate limited. None retries forever.")

class PineconeSettingsMixin(BaseModel):
    """
    Model for Pinecone vector store settings.
    """
    PINECONE_API_KEY: str
    PINECONE_REGION: str
    PINECONE_PROJECT_ID: str
    PINECONE_INDEX_NAME: str

    # must match the embedding model's output size (1536 for text-embedding-ada-002)
    PINECONE_DIMENSION: int = Field(default=1536, description="Dimension used when the index is created.")

class TaskLoopSettingsMixin(BaseModel):
    """
    Model for the orchestration loop.
    """
    OBJECTIVE: str
    INITIAL_TASK: str

    LOOP_SLEEP_SECONDS: float = Field(default=1.0, ge=0, description="Delay after each pass of the loop, idle or not.")
    CONTEXT_RESULTS: int = Field(default=5, ge=1, description="Number of past results retrieved as execution context.")
    ERROR_POLICY: Literal["abort", "skip", "requeue"] = Field(default="abort", description="What the loop does when an iteration fails on an external call.")
    MAX_ITERATIONS: Optional[int] = Field(default=None, ge=1, description="Stop after this many executed tasks. None runs until killed.")
    HTTP_TIMEOUT_SECONDS: float = Field(default=30.0, gt=0, description="Timeout for vector store and completion requests.")
