from task_agent.agent_service.common.parsing.task_list_parsers import (
    TaskListParser,
    enumerated_items_only,
    split_on_first_period,
)

__all__ = ["TaskListParser", "enumerated_items_only", "split_on_first_period"]
