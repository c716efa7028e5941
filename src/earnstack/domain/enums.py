"""Domain enumerations for the EarnStack marketplace.

These enums define the canonical roles and states used throughout the system.
They are framework-agnostic (no SQLAlchemy, no FastAPI imports).
"""

import enum


class UserRole(enum.StrEnum):
    """Role of a marketplace account. Only admins may change it."""

    BUYER = "buyer"
    WORKER = "worker"
    ADMIN = "admin"


class SubmissionStatus(enum.StrEnum):
    """Review state of a worker submission.

    PENDING is the only non-terminal state. See domain/state_machine.py.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class WithdrawalStatus(enum.StrEnum):
    """State of a worker cash-out request."""

    PENDING = "pending"
    APPROVED = "approved"


class ActionRoute(enum.StrEnum):
    """Client routes a notification links to."""

    BUYER_HOME = "/dashboard/buyer-home"
    WORKER_HOME = "/dashboard/worker-home"
    MY_SUBMISSIONS = "/dashboard/my-submissions"
    WITHDRAWALS = "/dashboard/withdrawals"
