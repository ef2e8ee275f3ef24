# human-readable progress lines for the task loop (stdout)

import sys
from typing import Iterable, TextIO

from task_agent.common.types.tasks import Task

class ConsoleReporter():
    """
    Prints the task list, next task and result on every iteration.
    NOTE: not a machine-readable interface, diagnostics go through the logger instead.
    """
    def __init__(self, stream: TextIO | None = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # resolved lazily so pytest's capsys sees the output
        return self._stream or sys.stdout

    def _write(self, text: str) -> None:
        print(text, file=self.stream, flush=True)

    def task_added(self, task: Task) -> None:
        self._write(f"Adding task: {task.name}...")

    def task_list(self, tasks: Iterable[Task]) -> None:
        self._write("\n*****TASK LIST*****")
        for task in tasks:
            self._write(f"{task.id}: {task.name}")

    def next_task(self, task: Task) -> None:
        self._write("\n*****NEXT TASK*****")
        self._write(f"{task.id}: {task.name}")

    def task_result(self, result: str) -> None:
        self._write("\n*****TASK RESULT*****")
        self._write(result)
