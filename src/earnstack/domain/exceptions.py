"""Domain exceptions for the EarnStack marketplace.

These exceptions are framework-agnostic and represent business rule violations.
They are caught and translated to HTTP responses by the API layer's middleware.
"""


class MarketplaceError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, code: str = "MARKETPLACE_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


# --- Input & Access Errors ---


class ValidationError(MarketplaceError):
    """Raised when an operation's input is malformed or inconsistent.

    Always raised before any mutation takes place.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message=message, code="VALIDATION_ERROR")


class AuthorizationError(MarketplaceError):
    """Raised when the caller's role or identity does not permit an operation."""

    def __init__(self, message: str = "Forbidden access") -> None:
        super().__init__(message=message, code="FORBIDDEN")


# --- Lookup Errors ---


class NotFoundError(MarketplaceError):
    """Base exception for a referenced record that does not exist."""

    def __init__(self, entity: str, key: str) -> None:
        super().__init__(
            message=f"{entity} not found: {key}",
            code=f"{entity.upper()}_NOT_FOUND",
        )
        self.key = key


class UserNotFoundError(NotFoundError):
    def __init__(self, email: str) -> None:
        super().__init__("User", email)


class TaskNotFoundError(NotFoundError):
    def __init__(self, task_id: str) -> None:
        super().__init__("Task", task_id)


class SubmissionNotFoundError(NotFoundError):
    def __init__(self, submission_id: str) -> None:
        super().__init__("Submission", submission_id)


class WithdrawalNotFoundError(NotFoundError):
    def __init__(self, withdrawal_id: str) -> None:
        super().__init__("Withdrawal", withdrawal_id)


# --- Ledger & Capacity Errors ---


class InsufficientBalanceError(MarketplaceError):
    """Raised when a debit would leave a coin balance below zero."""

    def __init__(self, email: str, required: int, available: int) -> None:
        super().__init__(
            message=(
                f"Insufficient coins: required {required}, available {available}"
            ),
            code="INSUFFICIENT_BALANCE",
        )
        self.email = email
        self.required = required
        self.available = available


class CapacityExhaustedError(MarketplaceError):
    """Raised when a task has no open worker slots left."""

    def __init__(self, task_id: str) -> None:
        super().__init__(
            message=f"Task has no open worker slots: {task_id}",
            code="CAPACITY_EXHAUSTED",
        )
        self.task_id = task_id


# --- State Machine Errors ---


class InvalidStateError(MarketplaceError):
    """Raised when a transition is attempted from a terminal state.

    Example: approving a submission that is already approved.
    """

    def __init__(self, current_state: str, attempted_event: str) -> None:
        super().__init__(
            message=f"Invalid state transition: {attempted_event} from {current_state}",
            code="INVALID_STATE",
        )
        self.current_state = current_state
        self.attempted_event = attempted_event


# --- Idempotency Errors ---


class DuplicateOperationError(MarketplaceError):
    """Raised when a duplicate idempotency key is detected."""

    def __init__(self, idempotency_key: str) -> None:
        super().__init__(
            message=f"Duplicate operation detected for key: {idempotency_key}",
            code="DUPLICATE_OPERATION",
        )
