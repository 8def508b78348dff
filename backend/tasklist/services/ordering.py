"""Manual ordering: rewrite task positions to match a client-supplied sequence."""
import logging
from typing import Sequence

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tasklist.core.errors import TransactionError, ValidationError
from tasklist.models.task import Task

logger = logging.getLogger(__name__)


async def _write_position(db: AsyncSession, task_id: int, position: int) -> None:
    await db.execute(update(Task).where(Task.id == task_id).values(position=position))


async def reorder_tasks(db: AsyncSession, ids: Sequence[int]) -> None:
    """Set each task's position to its index in ``ids``, all or nothing.

    Duplicate or unknown ids are rejected before anything is written. Tasks
    not listed keep their current position.
    """
    ids = [int(task_id) for task_id in ids]
    if len(set(ids)) != len(ids):
        raise ValidationError("Duplicate task ids in reorder request")

    try:
        async with db.begin():
            if ids:
                result = await db.execute(select(Task.id).where(Task.id.in_(ids)))
                unknown = set(ids) - set(result.scalars().all())
                if unknown:
                    raise ValidationError(f"Unknown task ids: {sorted(unknown)}")
            for index, task_id in enumerate(ids):
                await _write_position(db, task_id, index)
    except SQLAlchemyError as exc:
        raise TransactionError(f"Reorder of {len(ids)} tasks rolled back") from exc

    logger.info("Reordered %d tasks", len(ids))
