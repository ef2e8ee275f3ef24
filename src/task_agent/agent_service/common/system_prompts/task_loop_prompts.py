# prompts for the execution, task creation and prioritization agents

class TaskLoopPrompts():
    """
    Prompt templates used by the task loop agents.
    Filled with str.format(); every placeholder is a keyword argument.

    NOTE: the prioritization prompt asks the model to start numbering at {starting_id}, but the
    prioritization agent renumbers locally and ignores the model's numbers.
    """

    execution_prompt = """
    You are an AI who performs one task based on the following objective: {objective}.
    Take into account these previously completed tasks: {context}.
    Your task: {task}.
    Response:"""

    task_creation_prompt = """
    You are an task creation AI that uses the result of an execution agent to create new tasks with the following objective: {objective}.
    The last completed task has the result: {result}.
    This result was based on this task description: {task_description}. These are incomplete tasks: {incomplete_tasks}.
    Based on the result, create new tasks to be completed by the AI system that do not overlap with incomplete tasks.
    Return the tasks as an array."""

    prioritization_prompt = """
    You are an task prioritization AI tasked with cleaning the formatting of and reprioritizing the following tasks: {task_names}.
    Consider the ultimate objective of your team:{objective}.
    Do not remove any tasks. Return the result as a numbered list, like:
    #. First task
    #. Second task
    Start the task list with number {starting_id}."""
