from pydantic import BaseModel, Field, field_validator
from typing import Annotated, List, Optional
from datetime import date

# Ids and positions are stored as signed 64-bit integers.
INT64_MIN = -2**63
INT64_MAX = 2**63 - 1
RowId = Annotated[int, Field(ge=1, le=INT64_MAX)]


def _blank_to_none(value):
    # HTML forms post "" for an unselected category or an empty date input
    if isinstance(value, str) and not value.strip():
        return None
    return value


class TaskCreate(BaseModel):
    title: Optional[str] = None
    category_id: Optional[RowId] = None
    due_date: Optional[date] = None

    @field_validator("category_id", "due_date", mode="before")
    @classmethod
    def empty_as_null(cls, value):
        return _blank_to_none(value)


class TaskUpdate(BaseModel):
    """Sparse update body. Only keys present in the request are applied."""

    title: Optional[str] = None
    status: Optional[bool] = None
    category_id: Optional[RowId] = None
    due_date: Optional[date] = None
    position: Optional[int] = Field(None, ge=INT64_MIN, le=INT64_MAX)

    @field_validator("category_id", "due_date", mode="before")
    @classmethod
    def empty_as_null(cls, value):
        return _blank_to_none(value)


class TaskReorder(BaseModel):
    ids: List[RowId]


class TaskResponse(BaseModel):
    id: int
    title: str
    status: bool
    due_date: Optional[date]
    category_id: Optional[int]
    category_name: Optional[str] = None
    position: int

    class Config:
        from_attributes = True


class SuccessResponse(BaseModel):
    success: bool = True
