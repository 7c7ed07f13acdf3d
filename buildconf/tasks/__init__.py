"""Task module.

This module handles:
- The task registry exposed by a configured build
- The idempotent clean task
"""

from buildconf.tasks.clean import CLEAN_TASK_NAME, CleanResult, CleanTask, delete_tree
from buildconf.tasks.registry import Task, TaskRegistry

__all__ = [
    "CLEAN_TASK_NAME",
    "CleanResult",
    "CleanTask",
    "Task",
    "TaskRegistry",
    "delete_tree",
]
