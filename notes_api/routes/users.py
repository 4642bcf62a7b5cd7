"""
Notes API — User Route Handlers
=================================

What:  Registration and login under /api/users. No authentication required.
How:   Registration stores a bcrypt hash through UserService; login verifies
       the credentials and answers with a token from TokenService.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.database import get_db_session
from notes_api.schemas.common import ErrorResponse, ValidationErrorResponse
from notes_api.schemas.user import CredentialsRequest, RegisterResponse, TokenResponse
from notes_api.services.token_service import TokenService
from notes_api.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Missing fields or username taken", "model": ErrorResponse}},
    summary="Register a new user",
)
async def register(
    body: CredentialsRequest,
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
) -> RegisterResponse:
    user_id = await users.register(db, body.username, body.password)
    return RegisterResponse(id=user_id, username=body.username)


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={
        400: {"description": "Missing fields", "model": ValidationErrorResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
    },
    summary="Exchange credentials for a bearer token",
)
async def login(
    body: CredentialsRequest,
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
    tokens: TokenService = Depends(get_token_service),
) -> TokenResponse:
    user_id = await users.verify(db, body.username, body.password)
    logger.info("User %s logged in", user_id)
    return TokenResponse(token=tokens.issue(user_id))
