from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class TaskCreate(BaseModel):
    """Schema for creating new tasks.

    Required fields are checked by the handler so a missing one maps to a 400
    with a readable message.
    """
    task_list_id: Optional[str] = Field(default=None, alias="taskListId")
    title: Optional[str] = None
    description: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class TaskReorder(BaseModel):
    """Schema for repositioning the tasks of one list."""
    task_list_id: Optional[str] = Field(default=None, alias="taskListId")
    ordered_task_ids: Optional[List[str]] = Field(default=None, alias="orderedTaskIds")

    model_config = ConfigDict(populate_by_name=True)


class TaskList(BaseModel):
    id: str
    name: str
    owner_id: str = Field(alias="ownerId")
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class Message(BaseModel):
    message: str
