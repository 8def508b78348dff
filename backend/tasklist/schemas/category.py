from pydantic import BaseModel
from typing import Optional


class CategoryCreate(BaseModel):
    name: Optional[str] = None


class CategoryResponse(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True
