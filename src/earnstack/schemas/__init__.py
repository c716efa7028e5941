"""Pydantic API schemas."""

from earnstack.schemas.notifications import NotificationResponse
from earnstack.schemas.payments import (
    CreatePaymentResponse,
    PaymentResponse,
    PurchaseCoinsRequest,
)
from earnstack.schemas.stats import (
    AdminStatsResponse,
    BuyerStatsResponse,
    HealthResponse,
    WorkerStatsResponse,
)
from earnstack.schemas.submissions import (
    CreateSubmissionRequest,
    CreateSubmissionResponse,
    SubmissionPage,
    SubmissionResponse,
    SuccessResponse,
)
from earnstack.schemas.tasks import (
    CreateTaskRequest,
    CreateTaskResponse,
    SoftErrorResponse,
    TaskDraft,
    TaskResponse,
)
from earnstack.schemas.users import (
    DeletedResponse,
    ModifiedResponse,
    RegisterUserRequest,
    RegisterUserResponse,
    TokenRequest,
    TokenResponse,
    UpdateRoleRequest,
    UserResponse,
)
from earnstack.schemas.withdrawals import (
    CreateWithdrawalRequest,
    CreateWithdrawalResponse,
    WithdrawalResponse,
)

__all__ = [
    "AdminStatsResponse",
    "BuyerStatsResponse",
    "CreatePaymentResponse",
    "CreateSubmissionRequest",
    "CreateSubmissionResponse",
    "CreateTaskRequest",
    "CreateTaskResponse",
    "CreateWithdrawalRequest",
    "CreateWithdrawalResponse",
    "DeletedResponse",
    "HealthResponse",
    "ModifiedResponse",
    "NotificationResponse",
    "PaymentResponse",
    "PurchaseCoinsRequest",
    "RegisterUserRequest",
    "RegisterUserResponse",
    "SoftErrorResponse",
    "SubmissionPage",
    "SubmissionResponse",
    "SuccessResponse",
    "TaskDraft",
    "TaskResponse",
    "TokenRequest",
    "TokenResponse",
    "UpdateRoleRequest",
    "UserResponse",
    "WithdrawalResponse",
]
