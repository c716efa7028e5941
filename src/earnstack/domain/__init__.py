"""Domain layer: pure business rules with zero framework dependencies."""

from earnstack.domain.enums import (
    ActionRoute,
    SubmissionStatus,
    UserRole,
    WithdrawalStatus,
)
from earnstack.domain.exceptions import (
    AuthorizationError,
    CapacityExhaustedError,
    DuplicateOperationError,
    InsufficientBalanceError,
    InvalidStateError,
    MarketplaceError,
    NotFoundError,
    SubmissionNotFoundError,
    TaskNotFoundError,
    UserNotFoundError,
    ValidationError,
    WithdrawalNotFoundError,
)
from earnstack.domain.state_machine import (
    SubmissionStateMachine,
    WithdrawalStateMachine,
    validate_transition,
)

__all__ = [
    "ActionRoute",
    "SubmissionStatus",
    "UserRole",
    "WithdrawalStatus",
    "AuthorizationError",
    "CapacityExhaustedError",
    "DuplicateOperationError",
    "InsufficientBalanceError",
    "InvalidStateError",
    "MarketplaceError",
    "NotFoundError",
    "SubmissionNotFoundError",
    "TaskNotFoundError",
    "UserNotFoundError",
    "ValidationError",
    "WithdrawalNotFoundError",
    "SubmissionStateMachine",
    "WithdrawalStateMachine",
    "validate_transition",
]
