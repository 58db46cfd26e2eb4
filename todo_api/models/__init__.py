"""Models package."""
from .user import User
from .task import Task, TaskPriority, TaskStatus

__all__ = ["User", "Task", "TaskPriority", "TaskStatus"]
