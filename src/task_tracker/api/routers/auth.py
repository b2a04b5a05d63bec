"""Routes handling registration and login."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...deps import TokenServiceDependency, UserServiceDependency
from ...schemas import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse, UserPublic

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user account",
)
def register(payload: RegisterRequest, users: UserServiceDependency) -> RegisterResponse:
    user = users.register(
        username=payload.username,
        email=payload.email,
        password=payload.password,
    )
    return RegisterResponse(user=UserPublic.model_validate(user))


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Exchange email and password for a session token",
)
def login(
    payload: LoginRequest,
    users: UserServiceDependency,
    tokens: TokenServiceDependency,
) -> LoginResponse:
    user = users.authenticate(email=payload.email, password=payload.password)
    generated = tokens.issue(user)
    return LoginResponse(
        token=generated.token,
        expires_in=int(tokens.lifetime.total_seconds()),
        user=UserPublic.model_validate(user),
    )
