from typing import Annotated, List
from fastapi import APIRouter, Depends, Path, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from tasklist.core.clock import Clock, get_clock
from tasklist.core.database import get_db
from tasklist.schemas.task import (
    SuccessResponse,
    TaskCreate,
    TaskReorder,
    TaskResponse,
    TaskUpdate,
    INT64_MAX,
)
from tasklist.services import ordering, task_query, tasks

TaskId = Annotated[int, Path(ge=1, le=INT64_MAX)]

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
    responses={404: {"description": "Not found"}},
)

@router.get("", response_model=List[TaskResponse])
async def get_tasks(db: AsyncSession = Depends(get_db)):
    return await task_query.list_tasks(db)

@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_in: TaskCreate,
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    return await tasks.create_task(
        db, clock, task_in.title, category_id=task_in.category_id, due_date=task_in.due_date
    )

@router.post("/reorder", response_model=SuccessResponse)
async def reorder_tasks(body: TaskReorder, db: AsyncSession = Depends(get_db)):
    await ordering.reorder_tasks(db, body.ids)
    return SuccessResponse()

@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: TaskId,
    task_in: TaskUpdate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    today = clock.today() if request.app.state.settings.VALIDATE_DUE_DATE_ON_UPDATE else None
    return await tasks.update_task(db, task_id, task_in.model_dump(exclude_unset=True), today=today)

@router.delete("/{task_id}", response_model=SuccessResponse)
async def delete_task(task_id: TaskId, db: AsyncSession = Depends(get_db)):
    await tasks.delete_task(db, task_id)
    return SuccessResponse()
