"""Task registry.

Holds every task the configuration exposes, keyed by task path
(``:clean``, ``:app:compileDebugKotlin``). Registration is closed once the
configuration is complete.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Protocol

from buildconf.errors import ConfigurationError
from buildconf.types import OperationResult, TaskKind

logger = logging.getLogger(__name__)


class Task(Protocol):
    """Structural interface shared by registered tasks."""

    @property
    def name(self) -> str: ...

    @property
    def path(self) -> str: ...

    @property
    def kind(self) -> TaskKind: ...

    @property
    def description(self) -> str: ...


class TaskRegistry:
    """Ordered collection of registered tasks."""

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}
        self._sealed = False

    def register(self, task: Task) -> None:
        """Register a task.

        Raises:
            ConfigurationError: If the path is taken or the registry is sealed.
        """
        if self._sealed:
            raise ConfigurationError(
                f"Cannot register {task.path}: configuration is complete",
                details={"task": task.path},
            )
        if task.path in self._tasks:
            raise ConfigurationError(
                f"Task with path '{task.path}' already exists",
                details={"task": task.path},
            )
        self._tasks[task.path] = task
        logger.debug("Registered task %s (%s)", task.path, task.kind.value)

    def seal(self) -> None:
        """Refuse any further registration."""
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def get(self, name: str) -> Task:
        """Look up a task by path, or by name for root tasks.

        Raises:
            ConfigurationError: If no such task exists.
        """
        path = name if name.startswith(":") else f":{name}"
        try:
            return self._tasks[path]
        except KeyError:
            raise ConfigurationError(
                f"Task '{name}' not found", details={"task": name}
            ) from None

    def of_kind(self, kind: TaskKind) -> list[Task]:
        """Return registered tasks of one kind, in registration order."""
        return [t for t in self._tasks.values() if t.kind == kind]

    def run(self, name: str) -> OperationResult:
        """Execute a task that buildconf can run itself.

        Compilation tasks belong to the build engine and are rejected.

        Raises:
            ConfigurationError: If the task is unknown or not executable here.
            CleanError: If a delete task fails.
        """
        task = self.get(name)
        run = getattr(task, "run", None)
        if run is None:
            raise ConfigurationError(
                f"Task {task.path} is executed by the build engine, not buildconf",
                details={"task": task.path},
            )
        logger.info("Running task %s", task.path)
        result = run()
        if result.removed:
            message = f"Deleted {result.path}"
        else:
            message = f"Nothing to delete at {result.path}"
        return OperationResult(
            success=True,
            message=message,
            details={
                "task": task.path,
                "path": str(result.path),
                "removed": result.removed,
                "size_bytes": result.size_bytes,
            },
        )

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks.values())

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        path = name if name.startswith(":") else f":{name}"
        return path in self._tasks


__all__ = ["Task", "TaskRegistry"]
