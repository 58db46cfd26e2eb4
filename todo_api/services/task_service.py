"""Task service: owner-scoped CRUD over tasks."""
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional
import logging

from sqlmodel import Session, select

from todo_api.errors import NotFoundError, ValidationError
from todo_api.models.task import Task, TaskPriority, TaskStatus
from todo_api.models.user import utcnow
from todo_api.schemas.task import TaskPayload

logger = logging.getLogger(__name__)

VALID_PRIORITIES = [p.value for p in TaskPriority]
VALID_STATUSES = [s.value for s in TaskStatus]
# Matches the VARCHAR(255) title column
MAX_TITLE_LENGTH = 255


@dataclass
class TaskFields:
    """Validated, normalized values for every mutable task field."""
    title: str
    description: Optional[str] = None
    priority: str = TaskPriority.MEDIUM.value
    status: str = TaskStatus.PENDING.value
    due_date: Optional[date] = None


def _is_absent(value: Optional[str]) -> bool:
    return value is None or value == ""


def parse_due_date(value: str) -> date:
    """
    Parse an ISO calendar date, or the date part of an ISO datetime.

    Raises:
        ValidationError: If the value is not a valid date
    """
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValidationError("Invalid due date format")


def validate_task_fields(payload: TaskPayload) -> TaskFields:
    """
    Validate a create/update body.

    Absent optional fields get their defaults; present but invalid values
    are rejected, never coerced.
    """
    if payload.title is None or payload.title.strip() == "":
        raise ValidationError("Title is required")
    if len(payload.title.strip()) > MAX_TITLE_LENGTH:
        raise ValidationError(f"Title must be at most {MAX_TITLE_LENGTH} characters")

    if not _is_absent(payload.priority) and payload.priority not in VALID_PRIORITIES:
        raise ValidationError("Priority must be low, medium, or high")

    if not _is_absent(payload.status) and payload.status not in VALID_STATUSES:
        raise ValidationError("Status must be pending, in_progress, or completed")

    due_date = None
    if not _is_absent(payload.due_date):
        due_date = parse_due_date(payload.due_date)

    description = payload.description.strip() if payload.description is not None else None

    return TaskFields(
        title=payload.title.strip(),
        description=description or None,
        priority=payload.priority or TaskPriority.MEDIUM.value,
        status=payload.status or TaskStatus.PENDING.value,
        due_date=due_date,
    )


class TaskService:
    """
    Service class for task CRUD.

    Every query filters on both the task id and the caller's user id, so a
    task owned by someone else behaves exactly like a missing one.
    """

    def __init__(self, session: Session):
        self.session = session

    def create(self, user_id: int, payload: TaskPayload) -> Task:
        """Create a task owned by the caller."""
        fields = validate_task_fields(payload)

        now = utcnow()
        task = Task(
            user_id=user_id,
            title=fields.title,
            description=fields.description,
            priority=fields.priority,
            status=fields.status,
            due_date=fields.due_date,
            created_at=now,
            updated_at=now,
        )

        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        logger.debug("User %s created task %s", user_id, task.id)
        return task

    def list(self, user_id: int) -> List[Task]:
        """All of the caller's tasks, newest first."""
        statement = (
            select(Task)
            .where(Task.user_id == user_id)
            .order_by(Task.created_at.desc(), Task.id.desc())
        )
        return list(self.session.exec(statement).all())

    def get(self, user_id: int, task_id: int) -> Task:
        """
        Get a specific task, ensuring user ownership.

        Raises:
            NotFoundError: If the task does not exist or belongs to someone else
        """
        task = self._get_owned(user_id, task_id)
        if task is None:
            raise NotFoundError("Task not found")
        return task

    def update(self, user_id: int, task_id: int, payload: TaskPayload) -> Task:
        """
        Replace every mutable field of an owned task.

        Omitted optional fields fall back to their defaults, not to the
        previously stored values.
        """
        fields = validate_task_fields(payload)

        task = self.get(user_id, task_id)
        task.title = fields.title
        task.description = fields.description
        task.priority = fields.priority
        task.status = fields.status
        task.due_date = fields.due_date
        task.updated_at = utcnow()

        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        return task

    def delete(self, user_id: int, task_id: int) -> bool:
        """Delete an owned task. Returns whether a row was removed."""
        task = self._get_owned(user_id, task_id)
        if task is None:
            return False

        self.session.delete(task)
        self.session.commit()
        logger.debug("User %s deleted task %s", user_id, task_id)
        return True

    def _get_owned(self, user_id: int, task_id: int) -> Optional[Task]:
        statement = (
            select(Task)
            .where(Task.id == task_id)
            .where(Task.user_id == user_id)
        )
        return self.session.exec(statement).first()
