# completion + embedding clients

from task_agent.common.services.llm_service.llm_client.protocols import CompletionProtocol, CompletionProvider, CompletionStyle
from task_agent.common.services.llm_service.llm_client.openai_client import AsyncOpenAICompletionClient, completion_style_for
from task_agent.common.services.llm_service.llm_client.rate_limit import build_rate_limit_retryer

__all__ = [
    "CompletionProtocol",
    "CompletionProvider",
    "CompletionStyle",
    "AsyncOpenAICompletionClient",
    "completion_style_for",
    "build_rate_limit_retryer",
]
