"""
API endpoints for accounts and the login session.

Login stores the user id in the signed session cookie managed by Starlette's
``SessionMiddleware``; the catalog endpoints read it back through
``require_user_id``.
"""

from __future__ import annotations

from fastapi import APIRouter, Request, Response, status

from pokecatalog.catalog.errors import UnauthorizedError
from pokecatalog.core.logging_config import get_logger
from pokecatalog.core.models.io.auth import LoginRequest, RegisterRequest, RegisterResponse, UserRead
from pokecatalog.server.services.deps import SESSION_USER_KEY, AccountServiceDep, RequiredUserIdDep

logger = get_logger(__name__)

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create an account with email and password. The display name defaults to the email.",
    responses={
        201: {"description": "Account created"},
        400: {"description": "Missing email/password or password too short"},
        409: {"description": "Email already registered"},
    },
)
async def register(payload: RegisterRequest, accounts: AccountServiceDep) -> RegisterResponse:
    user = await accounts.register(payload.email, payload.password, payload.name)
    return RegisterResponse(message="user registered successfully", user=UserRead.model_validate(user))


@router.post(
    "/login",
    response_model=UserRead,
    summary="Log In",
    description="Verify credentials and start a cookie session.",
    responses={401: {"description": "Invalid credentials"}},
)
async def login(payload: LoginRequest, request: Request, accounts: AccountServiceDep) -> UserRead:
    user = await accounts.authenticate(payload.email, payload.password)
    request.session.clear()
    request.session[SESSION_USER_KEY] = user.id
    logger.info(f"User {user.id} logged in")
    return UserRead.model_validate(user)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Log Out",
    description="End the cookie session.",
)
async def logout(request: Request) -> Response:
    request.session.clear()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/me",
    response_model=UserRead,
    summary="Current User",
    description="Return the account of the logged-in user.",
    responses={401: {"description": "Not logged in"}},
)
async def me(request: Request, user_id: RequiredUserIdDep, accounts: AccountServiceDep) -> UserRead:
    user = await accounts.get_user(user_id)
    if user is None:
        # the account behind a still-valid cookie is gone
        request.session.clear()
        raise UnauthorizedError()
    return UserRead.model_validate(user)
