"""Task router. Every route requires a bearer token."""
import re

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from todo_api.core.security import TokenClaims
from todo_api.db.config import get_session
from todo_api.errors import NotFoundError, ValidationError
from todo_api.middleware.auth import get_current_user
from todo_api.schemas.task import (
    MessageResponse,
    TaskDetailResponse,
    TaskListResponse,
    TaskMessageResponse,
    TaskPayload,
    TaskResponse,
)
from todo_api.services.task_service import TaskService

router = APIRouter(tags=["Tasks"])

TASK_ID_PATTERN = re.compile(r"[0-9]+\Z")
# Largest signed 64-bit integer, the widest id column we run on
MAX_TASK_ID = 2**63 - 1


def get_task_service(session: Session = Depends(get_session)) -> TaskService:
    """Dependency for getting TaskService instance."""
    return TaskService(session)


def parse_task_id(raw_id: str) -> int:
    """
    Parse a task id path segment.

    Only plain ASCII digits are accepted. Ids outside the database's
    integer range cannot exist, so they are simply not found.
    """
    if not TASK_ID_PATTERN.match(raw_id):
        raise ValidationError("Invalid task ID")

    task_id = int(raw_id)
    if not 1 <= task_id <= MAX_TASK_ID:
        raise NotFoundError("Task not found")
    return task_id


@router.get("", response_model=TaskListResponse)
def list_tasks(
    current_user: TokenClaims = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """List the caller's tasks, newest first."""
    tasks = [TaskResponse.model_validate(t) for t in service.list(current_user.user_id)]
    return TaskListResponse(count=len(tasks), tasks=tasks)


@router.post("", response_model=TaskMessageResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    body: TaskPayload,
    current_user: TokenClaims = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    task = service.create(current_user.user_id, body)
    return TaskMessageResponse(message="Task created successfully", task=TaskResponse.model_validate(task))


@router.get("/{task_id}", response_model=TaskDetailResponse)
def get_task(
    task_id: str,
    current_user: TokenClaims = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Get a specific task by ID."""
    task = service.get(current_user.user_id, parse_task_id(task_id))
    return TaskDetailResponse(task=TaskResponse.model_validate(task))


@router.put("/{task_id}", response_model=TaskMessageResponse)
def update_task(
    task_id: str,
    body: TaskPayload,
    current_user: TokenClaims = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Replace a task. Fields left out of the body reset to their defaults."""
    task = service.update(current_user.user_id, parse_task_id(task_id), body)
    return TaskMessageResponse(message="Task updated successfully", task=TaskResponse.model_validate(task))


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: str,
    current_user: TokenClaims = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Delete a task."""
    if not service.delete(current_user.user_id, parse_task_id(task_id)):
        raise NotFoundError("Task not found")
    return MessageResponse(message="Task deleted successfully")
