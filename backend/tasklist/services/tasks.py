"""Write side for single tasks: creation, sparse updates and deletion."""
import logging
from datetime import date
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from tasklist.core.clock import Clock
from tasklist.core.errors import NotFoundError, ValidationError
from tasklist.core.validation import check_deadline, parse_due_date, require_text
from tasklist.models.task import Task
from tasklist.services.categories import ensure_category_exists
from tasklist.services.task_query import get_task

logger = logging.getLogger(__name__)


class UpdatableField(str, Enum):
    TITLE = "title"
    STATUS = "status"
    CATEGORY_ID = "category_id"
    DUE_DATE = "due_date"
    POSITION = "position"


def resolve_change(field: UpdatableField, value: Any, today: Optional[date] = None) -> Any:
    """Validate and normalize one supplied value for its column.

    ``today`` enables the past-deadline check for due dates; without it any
    date (or null) is accepted.
    """
    match field:
        case UpdatableField.TITLE:
            return require_text(value, "Title is required")
        case UpdatableField.STATUS:
            if value is None:
                raise ValidationError("status cannot be null")
            return bool(value)
        case UpdatableField.CATEGORY_ID:
            return None if value is None else int(value)
        case UpdatableField.DUE_DATE:
            if today is None:
                return parse_due_date(value)
            return check_deadline(value, today)
        case UpdatableField.POSITION:
            if value is None:
                raise ValidationError("position cannot be null")
            return int(value)


async def create_task(
    db: AsyncSession,
    clock: Clock,
    title: Optional[str],
    category_id: Optional[int] = None,
    due_date: Optional[date] = None,
) -> Dict[str, Any]:
    title = require_text(title, "Title is required")
    due_date = check_deadline(due_date, clock.today())
    if category_id is not None:
        await ensure_category_exists(db, category_id)

    # New tasks sort after every existing dateless task.
    task = Task(
        title=title,
        status=False,
        due_date=due_date,
        category_id=category_id,
        position=clock.now_millis(),
    )
    db.add(task)
    await db.commit()
    logger.info("Task created id=%s due_date=%s category_id=%s", task.id, due_date, category_id)
    return await get_task(db, task.id)


async def update_task(
    db: AsyncSession,
    task_id: int,
    changes: Mapping[str, Any],
    today: Optional[date] = None,
) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for field in UpdatableField:
        if field.value in changes:
            values[field.value] = resolve_change(field, changes[field.value], today)
    if not values:
        raise ValidationError("Nothing to update")

    if values.get(UpdatableField.CATEGORY_ID.value) is not None:
        await ensure_category_exists(db, values[UpdatableField.CATEGORY_ID.value])

    await db.execute(update(Task).where(Task.id == task_id).values(**values))
    await db.commit()

    # Existence is only known after the write: a vanished row and an unknown
    # id both end up here.
    row = await get_task(db, task_id)
    if row is None:
        raise NotFoundError("Not found")
    logger.debug("Task updated id=%s fields=%s", task_id, sorted(values))
    return row


async def delete_task(db: AsyncSession, task_id: int) -> None:
    result = await db.execute(delete(Task).where(Task.id == task_id))
    await db.commit()
    logger.info("Task delete id=%s removed=%s", task_id, result.rowcount)
