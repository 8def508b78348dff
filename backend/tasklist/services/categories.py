import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tasklist.core.errors import ValidationError
from tasklist.core.validation import require_text
from tasklist.models.category import Category

logger = logging.getLogger(__name__)


async def list_categories(db: AsyncSession) -> List[Category]:
    result = await db.execute(select(Category).order_by(Category.name.asc()))
    return list(result.scalars().all())


async def create_category(db: AsyncSession, name) -> Category:
    category = Category(name=require_text(name, "Name is required"))
    db.add(category)
    await db.commit()
    await db.refresh(category)
    logger.info("Category created id=%s name=%r", category.id, category.name)
    return category


async def ensure_category_exists(db: AsyncSession, category_id: int) -> None:
    found = await db.scalar(select(Category.id).where(Category.id == category_id))
    if found is None:
        raise ValidationError(f"Unknown category {category_id}")
