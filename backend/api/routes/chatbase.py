"""API routes for chat widget identity."""
from fastapi import APIRouter, Depends

from backend.api.dependencies import get_token_service
from backend.schemas.token import TokenResponse
from backend.schemas.weather import ErrorResponse
from backend.services.token_service import TokenService

router = APIRouter(prefix="/api/chatbase", tags=["chatbase"])


@router.post(
    "/token",
    response_model=TokenResponse,
    responses={500: {"model": ErrorResponse}},
)
async def issue_token(
    token_service: TokenService = Depends(get_token_service),
) -> TokenResponse:
    """Issue a one-hour signed identity token for the chat widget."""
    return TokenResponse(token=token_service.issue_token())
