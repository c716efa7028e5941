"""Task REST API routes.

Routes:
    POST   /tasks          : Buyer posts a task, reserving payable x workers coins
    GET    /tasks          : Open tasks (required_workers > 0), newest first
    GET    /tasks/{id}     : One task
    GET    /buyer/tasks    : The calling buyer's tasks
    GET    /admin/tasks    : Every task (admin)
    DELETE /tasks/{id}     : Remove a task (admin)
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from earnstack.api.auth import Identity, ensure_self, require_roles
from earnstack.api.deps import get_db_session
from earnstack.domain.enums import UserRole
from earnstack.domain.exceptions import InsufficientBalanceError
from earnstack.logging_config import get_logger
from earnstack.schemas.tasks import (
    CreateTaskRequest,
    CreateTaskResponse,
    SoftErrorResponse,
    TaskResponse,
)
from earnstack.schemas.users import DeletedResponse
from earnstack.services.task_service import TaskService

router = APIRouter(tags=["Tasks"])
logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------


@router.post(
    "/tasks",
    response_model=CreateTaskResponse | SoftErrorResponse,
    summary="Post a new task",
)
async def create_task(
    request: CreateTaskRequest,
    identity: Identity = Depends(require_roles(UserRole.BUYER)),
    session: AsyncSession = Depends(get_db_session),
) -> CreateTaskResponse | SoftErrorResponse:
    """Debit the buyer and store the task in one unit of work.

    A buyer without enough coins gets a 200 with ``{error, message}`` and
    nothing is written.
    """
    draft = request.task
    ensure_self(identity, draft.buyer_email)

    svc = TaskService(session)
    try:
        task = await svc.create_task(
            buyer_email=draft.buyer_email,
            payable_amount=draft.payable_amount,
            required_workers=draft.required_workers,
            task_title=draft.task_title,
            task_detail=draft.task_detail,
            submission_info=draft.submission_info,
            task_image_url=draft.task_image_url,
            completion_date=draft.completion_date,
            buyer_name=draft.buyer_name,
        )
    except InsufficientBalanceError as exc:
        await session.rollback()
        logger.info("task.create_declined", buyer=draft.buyer_email, reason=exc.code)
        return SoftErrorResponse(message="Not enough coins")

    return CreateTaskResponse(task_id=task.id)


# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------


@router.get(
    "/tasks",
    response_model=list[TaskResponse],
    summary="List open tasks",
)
async def list_open_tasks(
    session: AsyncSession = Depends(get_db_session),
) -> list[TaskResponse]:
    tasks = await TaskService(session).list_open_tasks()
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get(
    "/tasks/{task_id}",
    response_model=TaskResponse,
    summary="Get a task",
)
async def get_task(
    task_id: uuid.UUID,
    session: AsyncSession = Depends(get_db_session),
) -> TaskResponse:
    task = await TaskService(session).get_task(task_id)
    return TaskResponse.model_validate(task)


@router.get(
    "/buyer/tasks",
    response_model=list[TaskResponse],
    summary="List a buyer's own tasks",
)
async def list_buyer_tasks(
    email: str = Query(...),
    identity: Identity = Depends(require_roles(UserRole.BUYER)),
    session: AsyncSession = Depends(get_db_session),
) -> list[TaskResponse]:
    ensure_self(identity, email)
    tasks = await TaskService(session).list_for_buyer(email)
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get(
    "/admin/tasks",
    response_model=list[TaskResponse],
    summary="List every task",
)
async def list_all_tasks(
    _: Identity = Depends(require_roles(UserRole.ADMIN)),
    session: AsyncSession = Depends(get_db_session),
) -> list[TaskResponse]:
    tasks = await TaskService(session).list_all_tasks()
    return [TaskResponse.model_validate(t) for t in tasks]


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------


@router.delete(
    "/tasks/{task_id}",
    response_model=DeletedResponse,
    summary="Delete a task",
)
async def delete_task(
    task_id: uuid.UUID,
    _: Identity = Depends(require_roles(UserRole.ADMIN)),
    session: AsyncSession = Depends(get_db_session),
) -> DeletedResponse:
    await TaskService(session).delete_task(task_id)
    return DeletedResponse(deleted_count=1)
