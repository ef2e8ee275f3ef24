# fixed-delay backoff for rate-limited calls
# NOTE: this is the only retry policy in the service. Nothing else is retried.

import asyncio
from typing import Any, Awaitable, Callable, Optional

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    stop_never,
    wait_fixed,
)

from task_agent.common.logging.logger import logger

SleepFn = Callable[[float], Awaitable[Any]]

DEFAULT_RATE_LIMIT_WAIT_SECONDS = 10.0

def _log_rate_limited(retry_state: RetryCallState) -> None:
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.warning(
        f"The API rate limit has been exceeded (attempt {retry_state.attempt_number}). "
        f"Waiting {wait:g} seconds and trying again."
    )

def build_rate_limit_retryer(
    retry_on: type[BaseException] | tuple[type[BaseException], ...],
    *,
    wait_seconds: float = DEFAULT_RATE_LIMIT_WAIT_SECONDS,
    max_attempts: Optional[int] = None,
    sleep: SleepFn = asyncio.sleep,
) -> AsyncRetrying:
    """
    Tenacity retryer that waits a fixed interval after each rate-limit error.
    - max_attempts=None retries forever: rate limiting stalls the caller, it never fails it.
    - sleep is injectable so tests can run on a fake clock.
    - reraise=True surfaces the last rate-limit error itself once a bounded budget is spent.
    """
    return AsyncRetrying(
        sleep=sleep,
        stop=stop_after_attempt(max_attempts) if max_attempts else stop_never,
        wait=wait_fixed(wait_seconds),
        retry=retry_if_exception_type(retry_on),
        before_sleep=_log_rate_limited,
        reraise=True,
    )
