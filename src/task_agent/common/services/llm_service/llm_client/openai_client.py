# OpenAI completion + embedding client
# NOTE: the SDK's own retries are disabled (max_retries=0); rate limiting is handled by the tenacity retryer below.

import asyncio
from typing import Optional

import httpx
from openai import (
    AsyncOpenAI,
    APIConnectionError,
    APIResponseValidationError,
    APIStatusError,
    APITimeoutError,
    RateLimitError,
)

from .protocols import CompletionProtocol, CompletionProvider, CompletionStyle, ProvidesProviderInfo
from .rate_limit import DEFAULT_RATE_LIMIT_WAIT_SECONDS, SleepFn, build_rate_limit_retryer
from task_agent.common.errors import (
    RateLimitExhaustedError,
    ResponseFormatError,
    TransportError,
    UnexpectedStatusError,
)
from task_agent.common.logging.logger import logger

SERVICE_NAME = "openai"

# model ids with this prefix are served by the chat completions endpoint
CHAT_MODEL_PREFIX = "gpt-"

def completion_style_for(model_name: str) -> CompletionStyle:
    """Chat-style request for chat models, legacy completion otherwise."""
    return CompletionStyle.CHAT if model_name.startswith(CHAT_MODEL_PREFIX) else CompletionStyle.LEGACY

class AsyncOpenAICompletionClient(CompletionProtocol, ProvidesProviderInfo):
    """
    Core OpenAI client used by every agent.
    - complete(): chat or legacy completion, chosen from the model name.
    - embed(): single-line text embedding.
    - HTTP 429 waits a fixed interval and retries (forever by default); any other failure raises a typed error.
    """
    def __init__(
        self,
        model_name: str,
        *,
        api_key: str | None = None,
        embedding_model: str = "text-embedding-ada-002",
        chat_temperature: float = 0.5,
        chat_max_tokens: int = 100,
        completion_temperature: float = 0.7,
        completion_max_tokens: int = 2000,
        rate_limit_wait: float = DEFAULT_RATE_LIMIT_WAIT_SECONDS,
        rate_limit_max_attempts: Optional[int] = None,
        timeout: float = 30.0,
        sleep: SleepFn = asyncio.sleep,
        client: AsyncOpenAI | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        # shared client for the process lifetime, closed by the lifespan exit stack
        self.client = client or AsyncOpenAI(
            api_key=api_key,
            max_retries=0,
            timeout=timeout,
            http_client=http_client,
        )
        self.model_name = model_name
        self.embedding_model = embedding_model
        self.style = completion_style_for(model_name)
        self.chat_temperature = chat_temperature
        self.chat_max_tokens = chat_max_tokens
        self.completion_temperature = completion_temperature
        self.completion_max_tokens = completion_max_tokens
        # Provider metadata for reporting
        self.provider = CompletionProvider.OPENAI
        self.model = model_name
        self.rate_limit_max_attempts = rate_limit_max_attempts
        self.retryer = build_rate_limit_retryer(
            RateLimitError,
            wait_seconds=rate_limit_wait,
            max_attempts=rate_limit_max_attempts,
            sleep=sleep,
        )

    async def complete(self, prompt: str) -> str:
        """
        Request a completion for a prompt and return the generated text.
        Stalls (does not fail) while the service keeps answering 429.
        """
        if self.style is CompletionStyle.CHAT:
            return await self._with_rate_limit_retry(self._chat_completion, prompt)
        return await self._with_rate_limit_retry(self._legacy_completion, prompt)

    async def embed(self, text: str) -> list[float]:
        """
        Embed text and return the first embedding vector.
        Newlines are replaced with spaces since embedding inputs are single-line.
        """
        single_line = text.replace("\n", " ")
        return await self._with_rate_limit_retry(self._embedding, single_line)

    async def close(self) -> None:
        await self.client.close()

    # =====================================================================
    # Request helpers
    # =====================================================================

    async def _with_rate_limit_retry(self, request, payload: str):
        """Run one request under the rate-limit retryer, translating SDK errors into typed errors."""
        attempt_count = 0
        try:
            async for attempt in self.retryer:
                attempt_count += 1
                with attempt: # let tenacity see each attempt's RateLimitError
                    logger.debug(f"Calling OpenAI API ({request.__name__}, attempt {attempt_count})...")
                    return await request(payload)
        except RateLimitError as e:
            # only reachable with a bounded RATE_LIMIT_MAX_ATTEMPTS
            raise RateLimitExhaustedError(
                f"OpenAI API still rate limited after {attempt_count} attempts",
                service=SERVICE_NAME,
                attempts=attempt_count,
            ) from e
        except APITimeoutError as e:
            raise TransportError(f"OpenAI API request timed out: {e}", service=SERVICE_NAME) from e
        except APIConnectionError as e:
            raise TransportError(f"Failed to reach OpenAI API: {e}", service=SERVICE_NAME) from e
        except APIResponseValidationError as e:
            raise ResponseFormatError(f"OpenAI API response could not be parsed: {e}", service=SERVICE_NAME) from e
        except APIStatusError as e:
            raise UnexpectedStatusError(
                f"OpenAI API returned HTTP {e.status_code}: {e.message}",
                service=SERVICE_NAME,
                status_code=e.status_code,
                body=e.response.text,
            ) from e

        # NOTE: only reachable if the retryer yields no attempt at all
        raise RuntimeError(f"{request.__name__} reached unexpected fallthrough after {attempt_count} attempts")

    async def _chat_completion(self, prompt: str) -> str:
        resp = await self.client.chat.completions.create(
            model=self.model_name,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.chat_temperature,
            max_tokens=self.chat_max_tokens,
            n=1,
            stop=None,
        )
        try:
            content = resp.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise ResponseFormatError(f"Chat completion response has no choices: {e}", service=SERVICE_NAME) from e
        if not isinstance(content, str):
            raise ResponseFormatError("Chat completion response has no message content", service=SERVICE_NAME)
        return content

    async def _legacy_completion(self, prompt: str) -> str:
        resp = await self.client.completions.create(
            model=self.model_name,
            prompt=prompt,
            temperature=self.completion_temperature,
            max_tokens=self.completion_max_tokens,
        )
        try:
            text = resp.choices[0].text
        except (AttributeError, IndexError, TypeError) as e:
            raise ResponseFormatError(f"Completion response has no choices: {e}", service=SERVICE_NAME) from e
        if not isinstance(text, str):
            raise ResponseFormatError("Completion response has no text", service=SERVICE_NAME)
        return text

    async def _embedding(self, text: str) -> list[float]:
        resp = await self.client.embeddings.create(
            model=self.embedding_model,
            input=text,
            encoding_format="float",
        )
        data = getattr(resp, "data", None)
        if not data:
            raise ResponseFormatError("Embedding response contains no data", service=SERVICE_NAME)
        embedding = getattr(data[0], "embedding", None)
        if not isinstance(embedding, list) or not embedding:
            raise ResponseFormatError("Embedding response has no embedding vector", service=SERVICE_NAME)
        return [float(value) for value in embedding]
