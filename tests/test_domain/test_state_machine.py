"""Tests for the submission and withdrawal state machine guards.

These tests verify that:
    1. Pending records can move to each terminal state.
    2. Terminal states accept no further events.
    3. The convenience function validate_transition works.
"""

from __future__ import annotations

import pytest
from statemachine.exceptions import TransitionNotAllowed

from earnstack.domain.exceptions import InvalidStateError
from earnstack.domain.state_machine import (
    SubmissionStateMachine,
    WithdrawalStateMachine,
    validate_transition,
)


class TestSubmissionReview:
    def test_default_start_is_pending(self) -> None:
        sm = SubmissionStateMachine()
        assert sm.status == "pending"

    def test_approve(self) -> None:
        sm = SubmissionStateMachine("pending")
        sm.approve()
        assert sm.status == "approved"

    def test_reject(self) -> None:
        sm = SubmissionStateMachine("pending")
        sm.reject()
        assert sm.status == "rejected"


class TestTerminalStates:
    @pytest.mark.parametrize("status", ["approved", "rejected"])
    def test_terminal_status_is_kept(self, status: str) -> None:
        sm = SubmissionStateMachine(status)
        assert sm.status == status
        with pytest.raises(TransitionNotAllowed):
            sm.approve()

    def test_cannot_approve_twice(self) -> None:
        sm = SubmissionStateMachine("approved")
        with pytest.raises(TransitionNotAllowed):
            sm.approve()

    def test_cannot_reject_after_approve(self) -> None:
        sm = SubmissionStateMachine("approved")
        with pytest.raises(TransitionNotAllowed):
            sm.reject()

    def test_withdrawal_cannot_be_approved_twice(self) -> None:
        sm = WithdrawalStateMachine("approved")
        with pytest.raises(TransitionNotAllowed):
            sm.approve()


class TestValidateTransition:
    def test_valid_transition_returns_new_status(self) -> None:
        assert validate_transition(SubmissionStateMachine, "pending", "reject") == "rejected"
        assert validate_transition(WithdrawalStateMachine, "pending", "approve") == "approved"

    def test_invalid_transition_raises_domain_error(self) -> None:
        with pytest.raises(InvalidStateError) as exc_info:
            validate_transition(SubmissionStateMachine, "rejected", "approve")
        assert exc_info.value.current_state == "rejected"
        assert exc_info.value.attempted_event == "approve"

    def test_unknown_event(self) -> None:
        with pytest.raises(InvalidStateError):
            validate_transition(WithdrawalStateMachine, "pending", "reject")

    def test_unknown_status(self) -> None:
        with pytest.raises(ValueError, match="Unknown status"):
            SubmissionStateMachine("PAID")
