"""Submission Service: worker submissions and the buyer's review.

This is the application layer that coordinates between:
    - Task capacity (a slot is claimed on submit, released on reject)
    - The ledger (the worker is paid on approve)
    - The review state machine (pending -> approved | rejected)
    - Notifications (buyer on submit, worker on review)

All writes of one call share the caller's session, so approve/reject either
land completely or not at all.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from earnstack.domain.enums import ActionRoute, SubmissionStatus
from earnstack.domain.exceptions import (
    AuthorizationError,
    InvalidStateError,
    SubmissionNotFoundError,
    ValidationError,
)
from earnstack.domain.state_machine import SubmissionStateMachine, validate_transition
from earnstack.infrastructure.database.orm_models import Submission
from earnstack.infrastructure.database.repositories import SubmissionRepository
from earnstack.logging_config import get_logger
from earnstack.services.ledger_service import LedgerService
from earnstack.services.notification_service import NotificationService
from earnstack.services.task_service import TaskService

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


class SubmissionService:
    """Manages the submission review lifecycle."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._submission_repo = SubmissionRepository(session)
        self._tasks = TaskService(session)
        self._ledger = LedgerService(session)
        self._notifications = NotificationService(session)

    # ------------------------------------------------------------------
    # Submit
    # ------------------------------------------------------------------

    async def submit(
        self,
        task_id: uuid.UUID,
        worker_email: str,
        buyer_email: str,
        payable_amount: int,
        submission_details: str | None = None,
        worker_name: str | None = None,
    ) -> Submission:
        """Claim a slot on the task and record a pending submission.

        Raises:
            TaskNotFoundError: No such task.
            ValidationError: ``buyer_email`` or ``payable_amount`` disagree
                with the task.
            CapacityExhaustedError: The task has no open slot. Nothing is
                persisted.
        """
        task = await self._tasks.get_task(task_id)
        if task.buyer_email != buyer_email:
            raise ValidationError("buyer_email does not match the task owner")
        if task.payable_amount != payable_amount:
            raise ValidationError(
                f"payable_amount {payable_amount} does not match the task's "
                f"{task.payable_amount}"
            )

        await self._tasks.claim_capacity(task_id)

        submission = Submission(
            task_id=task.id,
            task_title=task.task_title,
            worker_email=worker_email,
            worker_name=worker_name,
            buyer_email=task.buyer_email,
            buyer_name=task.buyer_name,
            payable_amount=task.payable_amount,
            submission_details=submission_details,
            status=SubmissionStatus.PENDING.value,
        )
        submission = await self._submission_repo.create(submission)

        await self._notifications.append(
            to_email=task.buyer_email,
            message=(
                f"{worker_name or worker_email} submitted work for "
                f"\"{task.task_title}\""
            ),
            action_route=ActionRoute.BUYER_HOME,
        )

        logger.info(
            "submission.created",
            submission_id=str(submission.id),
            task_id=str(task_id),
            worker=worker_email,
        )
        return submission

    # ------------------------------------------------------------------
    # Review
    # ------------------------------------------------------------------

    async def approve(
        self, submission_id: uuid.UUID, acting_buyer: str | None = None
    ) -> Submission:
        """Approve a pending submission and pay the worker.

        Raises:
            SubmissionNotFoundError: No such submission.
            InvalidStateError: Already approved or rejected. The worker is not
                paid a second time.
            AuthorizationError: ``acting_buyer`` does not own the submission.
        """
        submission = await self._get_submission_or_raise(submission_id)
        self._check_owner(submission, acting_buyer)
        await self._transition(submission, "approve", SubmissionStatus.APPROVED)

        await self._ledger.credit(submission.worker_email, submission.payable_amount)

        await self._notifications.append(
            to_email=submission.worker_email,
            message=(
                f"You have earned {submission.payable_amount} coins from "
                f"{submission.buyer_name or submission.buyer_email} for completing "
                f"\"{submission.task_title}\""
            ),
            action_route=ActionRoute.WORKER_HOME,
        )

        logger.info(
            "submission.approved",
            submission_id=str(submission_id),
            worker=submission.worker_email,
            paid=submission.payable_amount,
        )
        return submission

    async def reject(
        self, submission_id: uuid.UUID, acting_buyer: str | None = None
    ) -> Submission:
        """Reject a pending submission and reopen its slot on the task.

        The buyer's coins for the slot stay spent; only the slot comes back.
        """
        submission = await self._get_submission_or_raise(submission_id)
        self._check_owner(submission, acting_buyer)
        await self._transition(submission, "reject", SubmissionStatus.REJECTED)

        await self._tasks.release_capacity(submission.task_id)

        await self._notifications.append(
            to_email=submission.worker_email,
            message=(
                f"Your submission for \"{submission.task_title}\" was rejected by "
                f"{submission.buyer_name or submission.buyer_email}"
            ),
            action_route=ActionRoute.MY_SUBMISSIONS,
        )

        logger.info(
            "submission.rejected",
            submission_id=str(submission_id),
            task_id=str(submission.task_id),
        )
        return submission

    # ------------------------------------------------------------------
    # Read helpers
    # ------------------------------------------------------------------

    async def get_submission(self, submission_id: uuid.UUID) -> Submission:
        return await self._get_submission_or_raise(submission_id)

    async def list_for_worker(
        self, email: str, page: int, size: int
    ) -> tuple[list[Submission], int]:
        """One zero-based page of a worker's submissions plus their total count."""
        if page < 0 or size <= 0:
            raise ValidationError("page must be >= 0 and size must be > 0")
        items = await self._submission_repo.list_for_worker(
            email, offset=page * size, limit=size
        )
        total = await self._submission_repo.count_for_worker(email)
        return items, total

    async def list_pending_for_buyer(self, email: str) -> list[Submission]:
        return await self._submission_repo.list_for_buyer(email, SubmissionStatus.PENDING)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _get_submission_or_raise(self, submission_id: uuid.UUID) -> Submission:
        submission = await self._submission_repo.get_by_id(submission_id)
        if submission is None:
            raise SubmissionNotFoundError(str(submission_id))
        return submission

    @staticmethod
    def _check_owner(submission: Submission, acting_buyer: str | None) -> None:
        if acting_buyer is not None and acting_buyer != submission.buyer_email:
            raise AuthorizationError("Only the task owner may review this submission")

    async def _transition(
        self, submission: Submission, event_name: str, target: SubmissionStatus
    ) -> None:
        """Guard the transition, then persist it only if still pending.

        The conditional UPDATE catches a concurrent review that landed after
        the row was read.
        """
        validate_transition(SubmissionStateMachine, submission.status, event_name)
        moved = await self._submission_repo.transition_status(
            submission.id, SubmissionStatus.PENDING, target
        )
        if not moved:
            raise InvalidStateError(submission.status, event_name)
        submission.status = target.value
