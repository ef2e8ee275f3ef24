# task types shared by the agents and the orchestrator

from pydantic import BaseModel, Field

# id given to freshly proposed tasks until the orchestrator numbers them
PROVISIONAL_TASK_ID = 0

class Task(BaseModel):
    """
    A single natural-language task in the queue.
    - ids are assigned by the orchestrator (seed + new tasks) and rewritten by the prioritization agent.
    - tasks proposed by the task creation agent carry PROVISIONAL_TASK_ID until numbered.
    """
    id: int = Field(description="Unique, monotonically assigned id. Never reused within a run.")
    name: str = Field(description="Free-text task description.")

def result_record_id(task: Task) -> str:
    """Id of the result record stored for an executed task."""
    return f"result_{task.id}"
