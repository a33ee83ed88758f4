from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class Credentials(BaseModel):
    """Login body. Both fields are checked by the handler, not here."""
    email: Optional[str] = None
    password: Optional[str] = None


class SignupRequest(Credentials):
    created_at: Optional[str] = Field(default=None, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)


class User(BaseModel):
    """Public user record, never carrying the password hash."""
    id: str
    email: str
    default_task_list_id: Optional[str] = Field(default=None, alias="defaultTaskListId")
    created_at: str = Field(alias="createdAt")

    model_config = ConfigDict(populate_by_name=True, extra="allow")
