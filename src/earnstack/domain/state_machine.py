"""Review and cash-out state machine guards.

Uses python-statemachine to enforce legal status transitions at the domain
level. Services instantiate a machine at the record's current status and fire
the event before they issue the conditional UPDATE that persists the change,
so an illegal transition (e.g. approved -> rejected) never reaches SQL.

Transition tables:
    Submission:
        pending  -> approved   (approve)
        pending  -> rejected   (reject)
    Withdrawal:
        pending  -> approved   (approve)
"""

from __future__ import annotations

from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from earnstack.domain.exceptions import InvalidStateError


class _StatusGuard:
    """Shared construction for the status machines."""

    def __init__(self, current_status: str = "pending") -> None:
        valid_values = {s.value for s in self.states}
        if current_status not in valid_values:
            valid = ", ".join(sorted(valid_values))
            raise ValueError(
                f"Unknown status '{current_status}'. Valid states: {valid}"
            )
        super().__init__(start_value=current_status)

    @property
    def status(self) -> str:
        """Return the current state value (matches the status enum)."""
        return str(self.current_state_value)


class SubmissionStateMachine(_StatusGuard, StateMachine):
    """Guards the buyer review of a submission.

    Usage:
        sm = SubmissionStateMachine("pending")
        sm.approve()
        sm.status  # "approved"
    """

    pending = State("Pending", value="pending", initial=True)
    approved = State("Approved", value="approved", final=True)
    rejected = State("Rejected", value="rejected", final=True)

    approve = pending.to(approved)
    reject = pending.to(rejected)


class WithdrawalStateMachine(_StatusGuard, StateMachine):
    """Guards admin approval of a withdrawal request."""

    pending = State("Pending", value="pending", initial=True)
    approved = State("Approved", value="approved", final=True)

    approve = pending.to(approved)


def validate_transition(
    machine_cls: type[_StatusGuard], current_status: str, event_name: str
) -> str:
    """Fire ``event_name`` on a machine at ``current_status`` and return the new status.

    Raises:
        InvalidStateError: If the event is unknown or not allowed from the
            current status.
        ValueError: If ``current_status`` is not a state of ``machine_cls``.
    """
    sm = machine_cls(current_status=current_status)
    event_method = getattr(sm, event_name, None)
    if event_method is None or not callable(event_method):
        raise InvalidStateError(current_status, event_name)
    try:
        event_method()
    except TransitionNotAllowed as err:
        raise InvalidStateError(current_status, event_name) from err
    return sm.status
