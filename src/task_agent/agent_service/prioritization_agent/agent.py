# prioritization agent: cleans up, reorders and renumbers the queue

from typing import Sequence

from task_agent.agent_service.common.parsing.task_list_parsers import TaskListParser, enumerated_items_only
from task_agent.agent_service.common.system_prompts.task_loop_prompts import TaskLoopPrompts
from task_agent.common.services.llm_service.llm_client.protocols import CompletionProtocol
from task_agent.common.types.tasks import Task
from task_agent.common.logging.logger import logger

class PrioritizationAgent():
    """
    Asks the model to reorder the queue's task names and rebuilds the queue in the reply's order.
    - Ids are assigned locally: previous back id + 1 (or 1 for an empty queue), then +1 per task.
    - starting_id only goes into the prompt; the model's own numbering is discarded.
    - The model is told not to drop tasks but the count is not verified.
    """
    def __init__(self, completion_client: CompletionProtocol, parser: TaskListParser = enumerated_items_only):
        self.completion_client = completion_client
        self.parser = parser

    def build_prompt(self, objective: str, tasks: Sequence[Task], starting_id: int) -> str:
        return TaskLoopPrompts.prioritization_prompt.format(
            task_names=repr([task.name for task in tasks]),
            objective=objective,
            starting_id=starting_id,
        )

    async def reprioritize(self, objective: str, tasks: Sequence[Task], starting_id: int) -> list[Task]:
        """Return the new queue contents, front first."""
        if not tasks:
            # NOTE: nothing to order, skip the model call
            return []
        next_id = tasks[-1].id + 1
        prompt = self.build_prompt(objective, tasks, starting_id)
        response = await self.completion_client.complete(prompt)
        names = self.parser(response)
        if len(names) != len(tasks):
            logger.warning(f"Prioritization returned {len(names)} tasks for a queue of {len(tasks)}")
        return [Task(id=next_id + offset, name=name) for offset, name in enumerate(names)]
