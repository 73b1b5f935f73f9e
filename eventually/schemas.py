"""
schemas.py — Request and response shapes
Inputs arrive as raw JSON mappings and are coerced here; coercion failures
surface as InvalidInput at the command boundary.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from eventually.models.task import Priority


class CategoryCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    color: str


class CategoryUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    color: Optional[str] = None

    @model_validator(mode="after")
    def _no_null_fields(self):
        for field in self.model_fields_set:
            if getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    color: str
    created_at: int
    updated_at: int


class TaskCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str
    description: Optional[str] = None
    category_id: Optional[int] = None
    priority: Priority
    parent_id: Optional[int] = None
    due_date: Optional[int] = None


# Fields that may be supplied but never cleared.
NON_NULLABLE_TASK_FIELDS = ("title", "priority", "is_done", "position")


class TaskUpdate(BaseModel):
    """Partial patch: only the keys present in the input are applied.

    Supplying null clears description, category_id, parent_id or due_date.
    """

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    description: Optional[str] = None
    category_id: Optional[int] = None
    priority: Optional[Priority] = None
    parent_id: Optional[int] = None
    is_done: Optional[bool] = None
    position: Optional[int] = Field(default=None, ge=0)
    due_date: Optional[int] = None

    @model_validator(mode="after")
    def _no_null_required_fields(self):
        for field in NON_NULLABLE_TASK_FIELDS:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class ReorderInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    new_position: int = Field(ge=0)


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    category_id: Optional[int] = None
    priority: Priority
    parent_id: Optional[int] = None
    is_done: bool
    position: int
    due_date: Optional[int] = None
    created_at: int
    updated_at: int
    completed_at: Optional[int] = None


class TaskTree(TaskOut):
    """A task with its ordered children; task fields sit beside `subtasks`."""

    subtasks: list["TaskTree"] = Field(default_factory=list)
