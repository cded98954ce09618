"""API router for sign-up, sign-in and sign-out.

Identities live in the hosted auth service; this router only forwards
credentials through the AuthClient and creates the matching profile row.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Response, status

from doease.core.dependencies import AuthClientDep, BearerTokenDep, CurrentUserDep, SessionDep
from doease.core.exceptions import (
    ConflictException,
    ServiceUnavailableException,
    UnauthorizedException,
)
from doease.features.auth.schemas import SignInRequest, SignUpRequest, TokenResponse
from doease.features.profiles.schemas import ProfileResponse
from doease.features.profiles.service import ProfileService
from doease.infra.auth import (
    AuthServiceUnavailableError,
    InvalidCredentialsError,
    InvalidTokenError,
    UserAlreadyExistsError,
)

router = APIRouter(prefix="/auth", tags=["auth"])

logger = logging.getLogger(__name__)


def _unavailable(exc: AuthServiceUnavailableError) -> ServiceUnavailableException:
    logger.warning(
        "Auth service unavailable",
        extra={"error": str(exc), "operation": "auth.request"},
    )
    return ServiceUnavailableException("Authentication service unavailable", type="auth-unavailable")


@router.post(
    "/signup",
    response_model=ProfileResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
)
async def sign_up(
    payload: SignUpRequest,
    auth_client: AuthClientDep,
    session: SessionDep,
) -> ProfileResponse:
    try:
        user = await auth_client.sign_up(
            payload.email,
            payload.password,
            {"username": payload.username, "mobile": payload.mobile},
        )
    except UserAlreadyExistsError as exc:
        raise ConflictException("Email already registered", type="user-exists") from exc
    except AuthServiceUnavailableError as exc:
        raise _unavailable(exc) from exc

    profile = await ProfileService(session).create(
        user.id,
        username=payload.username,
        email=user.email or payload.email,
        mobile=payload.mobile,
        timezone=payload.timezone,
    )
    await session.commit()

    logger.info(
        "User signed up",
        extra={"user_id": str(user.id), "auth_mode": auth_client.mode, "operation": "auth.sign_up"},
    )
    return ProfileResponse.model_validate(profile)


@router.post(
    "/signin",
    response_model=TokenResponse,
    summary="Sign in with email and password",
)
async def sign_in(payload: SignInRequest, auth_client: AuthClientDep) -> TokenResponse:
    try:
        auth_session = await auth_client.sign_in(payload.email, payload.password)
    except InvalidCredentialsError as exc:
        raise UnauthorizedException("Invalid email or password", type="invalid-credentials") from exc
    except AuthServiceUnavailableError as exc:
        raise _unavailable(exc) from exc

    return TokenResponse(
        access_token=auth_session.access_token,
        token_type=auth_session.token_type,
        expires_in=auth_session.expires_in,
        refresh_token=auth_session.refresh_token,
        user_id=auth_session.user.id,
    )


@router.post(
    "/signout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Revoke the current access token",
)
async def sign_out(
    user: CurrentUserDep,
    token: BearerTokenDep,
    auth_client: AuthClientDep,
) -> Response:
    try:
        await auth_client.sign_out(token)
    except InvalidTokenError as exc:
        raise UnauthorizedException("Invalid or expired token", type="invalid-token") from exc
    except AuthServiceUnavailableError as exc:
        raise _unavailable(exc) from exc

    logger.info("User signed out", extra={"user_id": str(user.id), "operation": "auth.sign_out"})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
