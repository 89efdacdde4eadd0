"""Login and token refresh use cases"""

from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import UserId
from ...application.dtos.user_dtos import LoginUserDto, UserResponse, SessionDto, TokenDto
from ...core.security import verify_password, verify_token, create_access_token
from .register_user import issue_tokens


class LoginUserUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, request: LoginUserDto) -> UserResponse:
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_email(request.email)

        # Same message for unknown email and wrong password
        if not user or not verify_password(request.password, user.hashed_password):
            raise ValueError("Invalid email or password")

        return UserResponse(user=SessionDto.from_entity(user), tokens=issue_tokens(user))


class RefreshTokenUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, refresh_token: str) -> TokenDto:
        subject = verify_token(refresh_token, token_type="refresh")
        if not subject:
            raise ValueError("Invalid refresh token")

        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(UserId.from_str(subject))
        if not user:
            raise ValueError("Invalid refresh token")

        return TokenDto(access_token=create_access_token(subject), refresh_token=refresh_token)
