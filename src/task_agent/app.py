# process entrypoint: wires settings, clients and agents into the orchestrator and runs it

from typing import Optional

from task_agent.config.app_config import ServiceSettings, get_service_settings
from task_agent.core.lifespan import ServiceResources, lifespan
from task_agent.common.logging.logger import logger, set_log_level
from task_agent.agent_service.context_agent.agent import ContextAgent
from task_agent.agent_service.execution_agent.agent import ExecutionAgent
from task_agent.agent_service.task_creation_agent.agent import TaskCreationAgent
from task_agent.agent_service.prioritization_agent.agent import PrioritizationAgent
from task_agent.agent_service.orchestrator.main_orchestrator import MainOrchestrator
from task_agent.agent_service.common.types.orchestration_state import ErrorPolicy

def build_orchestrator(settings: ServiceSettings, resources: ServiceResources) -> MainOrchestrator:
    """Assemble the agents around the shared clients."""
    completion_client = resources.completion_client
    vector_store = resources.vector_store
    context_agent = ContextAgent(completion_client, vector_store)
    return MainOrchestrator(
        objective=settings.OBJECTIVE,
        completion_client=completion_client,
        vector_store=vector_store,
        execution_agent=ExecutionAgent(completion_client, context_agent, context_results=settings.CONTEXT_RESULTS),
        task_creation_agent=TaskCreationAgent(completion_client),
        prioritization_agent=PrioritizationAgent(completion_client),
        collection_name=settings.PINECONE_INDEX_NAME,
        error_policy=ErrorPolicy(settings.ERROR_POLICY),
        loop_sleep_seconds=settings.LOOP_SLEEP_SECONDS,
    )

async def run_service(settings: Optional[ServiceSettings] = None) -> int:
    """
    Run the task loop until killed, or until MAX_ITERATIONS tasks ran or the queue ran dry.
    Raises ConfigurationError before any network call if settings are incomplete.
    """
    settings = settings or get_service_settings()
    set_log_level(settings.LOG_LEVEL)
    logger.info(f"Objective: {settings.OBJECTIVE}")

    async with lifespan(settings) as resources:
        orchestrator = build_orchestrator(settings, resources)
        await orchestrator.ensure_collection()
        orchestrator.seed(settings.INITIAL_TASK)
        return await orchestrator.run(max_iterations=settings.MAX_ITERATIONS)
