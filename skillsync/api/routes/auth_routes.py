"""
Authentication Routes

POST /auth/register - Register new user
POST /auth/login - Login and get JWT token
POST /auth/otp - Send or verify a one-time sign-in code
GET /auth/me - Get current user info
"""

import logging

from fastapi import APIRouter, HTTPException, Depends

from skillsync.core.auth import hash_password, verify_password, create_access_token, get_current_user
from skillsync.core.errors import ValidationFailed
from skillsync.services.otp_service import get_otp_service
from skillsync.services.postgres_service import UserService
from skillsync.schemas.schemas import (
    RegisterRequest, LoginRequest, OtpRequest, OtpAction, TokenResponse, UserResponse,
    RegisterResponse, MessageResponse
)
from skillsync.utils.password_validation import password_strength

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(request: RegisterRequest):
    """
    Register a new user account.

    The password must pass the strength rules (checked by RegisterRequest).
    After registration, login to get an access token.
    """
    users = UserService()
    if users.get_by_email(request.email):
        raise HTTPException(status_code=400, detail="Email already registered")

    user_id = users.create(request.email, hash_password(request.password))
    logger.info("Registered user %s", user_id)

    return RegisterResponse(
        message="Registered successfully. Please login.",
        user_id=user_id,
        password_strength=password_strength(request.password)
    )


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    user = UserService().get_by_email(request.email)

    if not user:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    if not user["is_active"]:
        raise HTTPException(status_code=403, detail="Account deactivated")

    if not verify_password(request.password, user["password_hash"]):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token = create_access_token(data={"sub": str(user["user_id"])})

    return TokenResponse(access_token=token, user_id=user["user_id"])


@router.post("/otp")
async def otp(request: OtpRequest):
    """
    Passwordless sign-in.

    action=send: mail a 6-digit code to an existing account
    action=verify: exchange the code for an access token
    """
    service = get_otp_service()

    if request.action == OtpAction.send:
        service.send(request.email)
        return MessageResponse(message="OTP sent to email")

    if not request.code:
        raise ValidationFailed("OTP code is required")

    result = service.verify(request.email, request.code)
    return TokenResponse(access_token=result["access_token"], user_id=result["user_id"])


@router.get("/me", response_model=UserResponse)
async def get_me(user: dict = Depends(get_current_user)):
    """Get current authenticated user's info."""
    row = UserService().get_by_id(user["user_id"])
    return UserResponse(**row)
