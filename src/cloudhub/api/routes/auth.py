"""Signup, login and availability checks."""

from __future__ import annotations

from fastapi import APIRouter, status

from cloudhub.api.schemas.common import ErrorResponse
from cloudhub.api.schemas.users import (
    AuthResponse,
    CheckEmailRequest,
    CheckRollNoRequest,
    ExistsResponse,
    LoginRequest,
    SignupRequest,
)
from cloudhub.services import auth

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/check-email", response_model=ExistsResponse)
def check_email(request: CheckEmailRequest) -> ExistsResponse:
    """Report whether an account already uses the email."""
    return ExistsResponse(exists=auth.check_email_exists(request.email))


@router.post("/check-rollno", response_model=ExistsResponse)
def check_roll_no(request: CheckRollNoRequest) -> ExistsResponse:
    """Report whether a student already registered the roll number."""
    return ExistsResponse(exists=auth.check_roll_no_exists(request.roll_no))


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Validation failed"},
        409: {"model": ErrorResponse, "description": "Email or roll number already registered"},
    },
)
def signup(request: SignupRequest) -> AuthResponse:
    """Create an account awaiting admin approval."""
    user = auth.signup(request.model_dump())
    return AuthResponse(message=auth.SIGNUP_MESSAGE, user=user)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Email or password missing"},
        401: {"model": ErrorResponse, "description": "Unknown email or wrong password"},
        403: {"model": ErrorResponse, "description": "Account rejected"},
    },
)
def login(request: LoginRequest) -> AuthResponse:
    """Log in. Pending accounts succeed but land on the pending-approval view."""
    result = auth.login(request.email, request.password)
    return AuthResponse(message=result.message, user=result.user, dashboard=result.dashboard)
