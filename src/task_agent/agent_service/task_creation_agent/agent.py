# task creation agent: derives new tasks from the last result

from typing import Sequence

from task_agent.agent_service.common.parsing.task_list_parsers import TaskListParser, split_on_first_period
from task_agent.agent_service.common.system_prompts.task_loop_prompts import TaskLoopPrompts
from task_agent.common.services.llm_service.llm_client.protocols import CompletionProtocol
from task_agent.common.types.tasks import PROVISIONAL_TASK_ID, Task

class TaskCreationAgent():
    """
    Proposes new, non-overlapping tasks from a completed task's result.
    Proposed tasks carry the provisional id; the orchestrator numbers them.
    """
    def __init__(self, completion_client: CompletionProtocol, parser: TaskListParser = split_on_first_period):
        self.completion_client = completion_client
        self.parser = parser

    def build_prompt(
        self,
        objective: str,
        result: str,
        task_description: str,
        incomplete_tasks: Sequence[Task],
    ) -> str:
        # the incomplete list is rendered as its debug repr, e.g. [Task(id=2, name='...')]
        return TaskLoopPrompts.task_creation_prompt.format(
            objective=objective,
            result=result,
            task_description=task_description,
            incomplete_tasks=repr(list(incomplete_tasks)),
        )

    async def create_tasks(
        self,
        objective: str,
        result: str,
        task_description: str,
        incomplete_tasks: Sequence[Task],
    ) -> list[Task]:
        prompt = self.build_prompt(objective, result, task_description, incomplete_tasks)
        response = await self.completion_client.complete(prompt)
        return [Task(id=PROVISIONAL_TASK_ID, name=name) for name in self.parser(response)]
