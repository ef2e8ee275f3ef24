# main orchestrator, a.k.a. the entrypoint for all agent logic
# owns the task queue + objective and sequences the agents each iteration

import asyncio
from collections import deque
from typing import Any, Awaitable, Callable, Optional

# main agents
from task_agent.agent_service.execution_agent.agent import ExecutionAgent
from task_agent.agent_service.task_creation_agent.agent import TaskCreationAgent
from task_agent.agent_service.prioritization_agent.agent import PrioritizationAgent
from task_agent.agent_service.orchestrator.console_reporter import ConsoleReporter
# types
from task_agent.agent_service.common.types.orchestration_state import ErrorPolicy, IterationOutcome
from task_agent.common.types.tasks import Task, result_record_id
# clients
from task_agent.common.services.llm_service.llm_client.protocols import CompletionProtocol
from task_agent.common.services.vector_store.protocols import VectorStoreProtocol
from task_agent.common.errors import AgentServiceError
# logging
from task_agent.common.logging.logger import logger

SleepFn = Callable[[float], Awaitable[Any]]

DEFAULT_LOOP_SLEEP_SECONDS = 1.0
SEED_TASK_ID = 1

class MainOrchestrator():
    """
    Main orchestration loop: pop -> execute -> store result -> create tasks -> reprioritize.
    - The queue and the objective live here only; agents get them as call parameters.
    - Tasks run one at a time; an iteration always finishes (creation + prioritization) before the next task.
    - Failures of external calls while executing or storing are handled per ErrorPolicy.
      After the result is stored the task is done; later failures leave the queue unprioritized.
    - Anything that is not an AgentServiceError propagates.
    """
    def __init__(
        self,
        objective: str,
        completion_client: CompletionProtocol,
        vector_store: VectorStoreProtocol,
        execution_agent: ExecutionAgent,
        task_creation_agent: TaskCreationAgent,
        prioritization_agent: PrioritizationAgent,
        *,
        collection_name: str,
        error_policy: ErrorPolicy = ErrorPolicy.ABORT,
        loop_sleep_seconds: float = DEFAULT_LOOP_SLEEP_SECONDS,
        sleep: SleepFn = asyncio.sleep,
        reporter: ConsoleReporter | None = None,
    ):
        self.objective = objective
        self.completion_client = completion_client
        self.vector_store = vector_store
        self.execution_agent = execution_agent
        self.task_creation_agent = task_creation_agent
        self.prioritization_agent = prioritization_agent
        self.collection_name = collection_name
        self.error_policy = ErrorPolicy(error_policy)
        self.loop_sleep_seconds = loop_sleep_seconds
        self._sleep = sleep
        self.reporter = reporter or ConsoleReporter()
        # state owned by the loop
        self._task_queue: deque[Task] = deque()
        self._task_id_counter = 0

    @property
    def tasks(self) -> tuple[Task, ...]:
        """Read-only snapshot of the queue, front first."""
        return tuple(self._task_queue)

    # =====================================================================
    # Startup
    # =====================================================================

    async def ensure_collection(self) -> None:
        """Create the result collection only if it doesn't exist yet."""
        collections = await self.vector_store.list_collections()
        if self.collection_name in collections:
            logger.info(f"Using existing collection '{self.collection_name}'.")
            return
        await self.vector_store.create_collection(self.collection_name)
        logger.info(f"Created collection '{self.collection_name}'.")

    def seed(self, initial_task: str) -> Task:
        """Queue the initial task with id 1."""
        task = Task(id=SEED_TASK_ID, name=initial_task)
        self.add_task(task)
        return task

    def add_task(self, task: Task) -> None:
        self.reporter.task_added(task)
        self._task_queue.append(task)
        self._task_id_counter = max(self._task_id_counter, task.id)

    # =====================================================================
    # Loop
    # =====================================================================

    async def run(self, max_iterations: Optional[int] = None) -> int:
        """
        Run the loop until killed, or until max_iterations tasks were popped.
        Sleeps loop_sleep_seconds after every pass, including idle ones.
        A bounded run also stops once the queue is empty, since nothing can refill it.
        Returns the number of iterations run.
        """
        iterations = 0
        while max_iterations is None or iterations < max_iterations:
            if self._task_queue:
                await self.run_iteration()
                iterations += 1
            elif max_iterations is not None:
                logger.info(f"Task queue is empty, stopping after {iterations} of {max_iterations} iterations.")
                break
            await self._sleep(self.loop_sleep_seconds)
        return iterations

    async def run_iteration(self) -> IterationOutcome | None:
        """Execute the task at the front of the queue. Returns None if the queue is empty."""
        if not self._task_queue:
            return None

        self.reporter.task_list(self._task_queue)
        task = self._task_queue.popleft()
        self.reporter.next_task(task)

        # the error policy only covers the task itself: once its result is stored it is done
        try:
            result = await self._execute_and_store(task)
        except AgentServiceError as e:
            return self._handle_failure(task, e)
        return await self._update_queue(task, result)

    async def _execute_and_store(self, task: Task) -> str:
        # 1) execute
        result = await self.execution_agent.execute(self.objective, task)
        self.reporter.task_result(result)

        # 2) store result for future context
        await self.store_result(task, result)
        return result

    async def _update_queue(self, task: Task, result: str) -> IterationOutcome:
        new_task_count = 0
        try:
            # 3) create new tasks, numbered from the counter so ids are never reused
            new_tasks = await self.task_creation_agent.create_tasks(
                self.objective,
                result,
                task.name,
                tuple(self._task_queue),
            )
            for new_task in new_tasks:
                self.add_task(new_task.model_copy(update={"id": self._task_id_counter + 1}))
            new_task_count = len(new_tasks)

            # 4) reprioritize the whole queue
            reprioritized = await self.prioritization_agent.reprioritize(
                self.objective,
                tuple(self._task_queue),
                task.id,
            )
            self._task_queue = deque(reprioritized)
            if reprioritized:
                self._task_id_counter = max(self._task_id_counter, reprioritized[-1].id)
        except AgentServiceError as e:
            if self.error_policy is ErrorPolicy.ABORT:
                logger.error(f"Queue update after task {task.id} failed on {e.service}: {e}. Aborting.")
                raise
            # the task itself completed, so it is never requeued; the queue stays as it is
            logger.warning(f"Queue update after task {task.id} failed on {e.service}: {e}. Queue left unprioritized.")
            return IterationOutcome(
                task_id=task.id,
                task_name=task.name,
                succeeded=True,
                result=result,
                new_task_count=new_task_count,
                error=str(e),
            )

        return IterationOutcome(
            task_id=task.id,
            task_name=task.name,
            succeeded=True,
            result=result,
            new_task_count=new_task_count,
        )

    async def store_result(self, task: Task, result: str) -> None:
        """Embed the result and upsert it as result_<task id>, with the task name as metadata."""
        vector = await self.completion_client.embed(result)
        await self.vector_store.upsert(
            result_record_id(task),
            vector,
            metadata={"task": task.name, "result": result},
        )

    def _handle_failure(self, task: Task, error: AgentServiceError) -> IterationOutcome:
        if self.error_policy is ErrorPolicy.ABORT:
            logger.error(f"Task {task.id} failed on {error.service}: {error}. Aborting.")
            raise error
        if self.error_policy is ErrorPolicy.REQUEUE:
            # fresh id, so renumbering from the back of the queue can't hand out an id already used
            self._task_id_counter += 1
            requeued = task.model_copy(update={"id": self._task_id_counter})
            logger.warning(f"Task {task.id} failed on {error.service}: {error}. Requeued at the back as {requeued.id}.")
            self._task_queue.append(requeued)
        else:
            logger.warning(f"Task {task.id} failed on {error.service}: {error}. Skipped.")
        return IterationOutcome(
            task_id=task.id,
            task_name=task.name,
            succeeded=False,
            error=str(error),
        )
