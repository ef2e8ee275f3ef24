# orchestration loop state types

from enum import Enum
from pydantic import BaseModel, Field

class ErrorPolicy(str, Enum):
    """
    What the loop does when an iteration fails on an external call.
    - ABORT: re-raise, ending the run (the default).
    - SKIP: log it and drop the task.
    - REQUEUE: log it and put the task at the back of the queue under a fresh id.
    """
    ABORT = "abort"
    SKIP = "skip"
    REQUEUE = "requeue"

class IterationOutcome(BaseModel):
    """Summary of one executed (or failed) task, returned by run_iteration()."""
    task_id: int = Field(description="Id of the task popped for this iteration.")
    task_name: str = Field(description="Name of the task popped for this iteration.")
    succeeded: bool = Field(description="False when execution or storage failed and the error policy absorbed it.")
    result: str | None = Field(default=None, description="Execution result, if execution completed.")
    new_task_count: int = Field(default=0, description="Tasks proposed by the task creation agent.")
    error: str | None = Field(default=None, description="Message of the absorbed failure, if any.")
