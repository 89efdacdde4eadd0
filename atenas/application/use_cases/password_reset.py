"""Password recovery and change use cases"""

import logging
from datetime import datetime, timedelta

from ...application.dtos.user_dtos import (
    ForgotPasswordDto, ResetPasswordDto, ChangePasswordDto, PasswordMessageResponse,
)
from ...core.config import settings
from ...core.security import generate_reset_token, get_password_hash, verify_password
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import UserId
from ...infrastructure.external_services.email_service import EmailService

logger = logging.getLogger(__name__)

FORGOT_PASSWORD_MESSAGE = "If an account with that email exists, a password reset link has been sent."


class ForgotPasswordUseCase:
    """Stores a one-time reset token and emails the link.

    The response is the same whether or not the email is registered.
    """

    def __init__(self, unit_of_work: IUnitOfWork, email_service: EmailService):
        self.unit_of_work = unit_of_work
        self.email_service = email_service

    async def execute(self, request: ForgotPasswordDto) -> PasswordMessageResponse:
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_email(request.email)
            if not user:
                logger.info("Password reset requested for unknown email")
                return PasswordMessageResponse(message=FORGOT_PASSWORD_MESSAGE)

            token = generate_reset_token()
            expires_at = datetime.utcnow() + timedelta(minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES)
            await self.unit_of_work.users.add_reset_token(user.id, token, expires_at)
            await self.unit_of_work.commit()

        # The token is already stored; a failed delivery can be retried by asking again
        sent = await self.email_service.send_password_reset_email(user.email, token, user.first_name)
        if not sent:
            logger.warning("Password reset email for user %s was not delivered", user.id)
        return PasswordMessageResponse(message=FORGOT_PASSWORD_MESSAGE)


class ResetPasswordUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, request: ResetPasswordDto) -> PasswordMessageResponse:
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_reset_token(request.token)
            if not user:
                raise ValueError("Invalid or expired reset token.")

            user.hashed_password = get_password_hash(request.new_password)
            await self.unit_of_work.users.update(user)
            await self.unit_of_work.users.mark_reset_token_used(request.token)

        logger.info("Password reset for user %s", user.id)
        return PasswordMessageResponse(message="Password has been successfully reset.")


class ChangePasswordUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, user_id: UserId, request: ChangePasswordDto) -> PasswordMessageResponse:
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(user_id)
            if not user:
                raise LookupError("User not found")
            if not verify_password(request.current_password, user.hashed_password):
                raise ValueError("Current password is incorrect")
            if request.current_password == request.new_password:
                raise ValueError("New password must be different from the current one")

            user.hashed_password = get_password_hash(request.new_password)
            await self.unit_of_work.users.update(user)

        logger.info("Password changed for user %s", user_id)
        return PasswordMessageResponse(message="Password updated")
