# `python -m task_agent` / `task-agent`
import asyncio
import sys

from task_agent.app import run_service
from task_agent.common.errors import ConfigurationError
from task_agent.common.logging.logger import logger

def main() -> None:
    try:
        asyncio.run(run_service())
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted, stopping task loop.")

if __name__ == "__main__":
    main()
