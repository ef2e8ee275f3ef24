# execution agent: performs one task with context anchored to the objective

from task_agent.agent_service.context_agent.agent import ContextAgent
from task_agent.agent_service.common.system_prompts.task_loop_prompts import TaskLoopPrompts
from task_agent.common.services.llm_service.llm_client.protocols import CompletionProtocol
from task_agent.common.types.tasks import Task
from task_agent.common.logging.logger import logger

DEFAULT_CONTEXT_RESULTS = 5

class ExecutionAgent():
    """
    Main execution agent.
    - Context is always retrieved for the objective, not the task itself.
    - An empty store gives an empty context string, not an error.
    """
    def __init__(
        self,
        completion_client: CompletionProtocol,
        context_agent: ContextAgent,
        context_results: int = DEFAULT_CONTEXT_RESULTS,
    ):
        self.completion_client = completion_client
        self.context_agent = context_agent
        self.context_results = context_results

    def build_prompt(self, objective: str, context: list[str], task: Task) -> str:
        return TaskLoopPrompts.execution_prompt.format(
            objective=objective,
            context="\n".join(context),
            task=task.name,
        )

    async def execute(self, objective: str, task: Task) -> str:
        """Produce a result for one task."""
        logger.info(f"Executing task: {task.name}...")
        context = await self.context_agent.retrieve_context(objective, self.context_results)
        prompt = self.build_prompt(objective, context, task)
        return await self.completion_client.complete(prompt)
