"""Register user use case"""

import logging

from ...domain.entities.user import User
from ...domain.enums import RoleName
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...application.dtos.user_dtos import CreateUserDto, UserResponse, SessionDto, TokenDto
from ...core.security import get_password_hash, create_access_token, create_refresh_token

logger = logging.getLogger(__name__)


def issue_tokens(user: User) -> TokenDto:
    return TokenDto(
        access_token=create_access_token(str(user.id.value)),
        refresh_token=create_refresh_token(str(user.id.value)),
    )


class RegisterUserUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, request: CreateUserDto) -> UserResponse:
        async with self.unit_of_work:
            if await self.unit_of_work.users.exists_by_email(request.email):
                raise ValueError("User with this email already exists")
            if await self.unit_of_work.users.exists_by_username(request.username):
                raise ValueError("Username already taken")

            user = User.create(
                email=request.email,
                hashed_password=get_password_hash(request.password),
                username=request.username,
                first_name=request.first_name,
                last_name=request.last_name,
                roles=[RoleName.DONATOR],
            )
            user = await self.unit_of_work.users.add(user)
            await self.unit_of_work.commit()

        logger.info("Registered user %s", user.id)
        return UserResponse(user=SessionDto.from_entity(user), tokens=issue_tokens(user))
