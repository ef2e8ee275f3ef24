# protocols for completion/embedding clients

from typing import Protocol, runtime_checkable
from enum import Enum

# Ensures that all completion clients implement this protocol
class CompletionProtocol(Protocol):
    async def complete(self, prompt: str) -> str: ...

    async def embed(self, text: str) -> list[float]: ...

class CompletionProvider(str, Enum):
    """Enumeration of supported completion providers."""
    OPENAI = "openai"

class CompletionStyle(str, Enum):
    """Request/response shape used for a completion call."""
    CHAT = "chat"
    LEGACY = "legacy"

@runtime_checkable
class ProvidesProviderInfo(Protocol):
    """Optional protocol for exposing provider/model metadata for reporting."""
    provider: CompletionProvider
    model: str
