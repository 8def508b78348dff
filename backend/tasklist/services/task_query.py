"""Read side: the canonical task list the client renders."""
from typing import Any, Dict, List, Optional

from sqlalchemy import case, select
from sqlalchemy.ext.asyncio import AsyncSession

from tasklist.models.category import Category
from tasklist.models.task import Task

# Dated tasks first (earliest deadline first), then manual position,
# newest id first when positions tie.
CANONICAL_ORDER = (
    case((Task.due_date.is_(None), 1), else_=0),
    Task.due_date.asc(),
    Task.position.asc(),
    Task.id.desc(),
)


def task_rows():
    return select(
        Task.id,
        Task.title,
        Task.status,
        Task.due_date,
        Task.category_id,
        Category.name.label("category_name"),
        Task.position,
    ).outerjoin(Category, Task.category_id == Category.id)


async def list_tasks(db: AsyncSession) -> List[Dict[str, Any]]:
    result = await db.execute(task_rows().order_by(*CANONICAL_ORDER))
    return [dict(row) for row in result.mappings().all()]


async def get_task(db: AsyncSession, task_id: int) -> Optional[Dict[str, Any]]:
    result = await db.execute(task_rows().where(Task.id == task_id))
    row = result.mappings().first()
    return dict(row) if row is not None else None
