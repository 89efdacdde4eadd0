"""Authentication routes"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ...api.dependencies import get_unit_of_work, get_current_user, get_email_service
from ...application.use_cases.register_user import RegisterUserUseCase
from ...application.use_cases.login_user import LoginUserUseCase, RefreshTokenUseCase
from ...application.use_cases.password_reset import ForgotPasswordUseCase, ResetPasswordUseCase
from ...application.dtos.user_dtos import (
    CreateUserDto, LoginUserDto, RefreshTokenDto, UserResponse, SessionDto, TokenDto,
    ForgotPasswordDto, ResetPasswordDto, PasswordMessageResponse,
)
from ...domain.entities.user import User
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...infrastructure.external_services.email_service import EmailService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    user_data: CreateUserDto,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Register a new donor account"""
    use_case = RegisterUserUseCase(unit_of_work)
    try:
        return await use_case.execute(user_data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error("Registration failed: %s", e)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/login", response_model=UserResponse)
async def login_user(
    login_data: LoginUserDto,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Login user"""
    use_case = LoginUserUseCase(unit_of_work)
    try:
        return await use_case.execute(login_data)
    except ValueError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except Exception as e:
        logger.error("Login failed: %s", e)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/refresh", response_model=TokenDto)
async def refresh_token(
    request: RefreshTokenDto,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Exchange a refresh token for a new access token"""
    use_case = RefreshTokenUseCase(unit_of_work)
    try:
        return await use_case.execute(request.refresh_token)
    except ValueError as e:
        raise HTTPException(status_code=401, detail=str(e))


@router.get("/session", response_model=SessionDto)
async def get_session(current_user: User = Depends(get_current_user)):
    """Session user enriched with roles and the dashboard to land on"""
    return SessionDto.from_entity(current_user)


@router.post("/forgot-password", response_model=PasswordMessageResponse)
async def forgot_password(
    request: ForgotPasswordDto,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    email_service: EmailService = Depends(get_email_service)
):
    """Email a password reset link"""
    use_case = ForgotPasswordUseCase(unit_of_work, email_service)
    try:
        return await use_case.execute(request)
    except Exception as e:
        logger.error("Forgot password failed: %s", e)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/reset-password", response_model=PasswordMessageResponse)
async def reset_password(
    request: ResetPasswordDto,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Set a new password with a token from the reset email"""
    use_case = ResetPasswordUseCase(unit_of_work)
    try:
        return await use_case.execute(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error("Password reset failed: %s", e)
        raise HTTPException(status_code=500, detail="Internal server error")
