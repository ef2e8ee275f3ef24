# error taxonomy shared by service clients, agents and the orchestrator
from typing import Optional


class TaskAgentError(Exception):
    """Root of every error raised on purpose by this package."""


class ConfigurationError(TaskAgentError):
    """A required setting is missing or invalid. Fatal at startup."""

    def __init__(self, message: str, missing: Optional[list[str]] = None):
        super().__init__(message)
        self.missing = missing or []


class AgentServiceError(TaskAgentError):
    """
    Failure of an external call (completion service or vector store).
    - The orchestrator catches this family at the iteration boundary and applies its ErrorPolicy.
    """

    def __init__(self, message: str, *, service: str):
        super().__init__(message)
        self.service = service


class TransportError(AgentServiceError):
    """Network failure or timeout before a response was received."""


class UnexpectedStatusError(AgentServiceError):
    """The service answered with a non-success HTTP status (other than a handled 429)."""

    def __init__(self, message: str, *, service: str, status_code: int, body: str = ""):
        super().__init__(message, service=service)
        self.status_code = status_code
        self.body = body


class ResponseFormatError(AgentServiceError):
    """The response body could not be parsed into the expected shape."""


class RateLimitExhaustedError(AgentServiceError):
    """Rate limiting outlasted a bounded retry budget. Never raised with the default (infinite) budget."""

    def __init__(self, message: str, *, service: str, attempts: int):
        super().__init__(message, service=service)
        self.attempts = attempts
