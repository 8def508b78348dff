from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from tasklist.core.database import get_db
from tasklist.schemas.category import CategoryCreate, CategoryResponse
from tasklist.services import categories

router = APIRouter(
    prefix="/categories",
    tags=["categories"],
)

@router.get("", response_model=List[CategoryResponse])
async def get_categories(db: AsyncSession = Depends(get_db)):
    return await categories.list_categories(db)

@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(category_in: CategoryCreate, db: AsyncSession = Depends(get_db)):
    return await categories.create_category(db, category_in.name)
