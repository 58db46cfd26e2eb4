"""Task schemas."""
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TaskPayload(BaseModel):
    """
    Body for both create (POST) and full replace (PUT).

    Values stay raw strings here; TaskService validates them so that a bad
    priority, status or date is rejected rather than coerced.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    due_date: Optional[str] = Field(default=None, alias="dueDate")


class TaskResponse(BaseModel):
    """Schema for task API responses."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    priority: str
    status: str
    due_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime


class TaskDetailResponse(BaseModel):
    task: TaskResponse


class TaskMessageResponse(BaseModel):
    message: str
    task: TaskResponse


class TaskListResponse(BaseModel):
    count: int
    tasks: List[TaskResponse]


class MessageResponse(BaseModel):
    message: str
