"""Profile and admin user-management use cases"""

import logging
from typing import Optional

from ...domain.entities.user import User
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import UserId, HeadquartersId
from ...application.dtos.user_dtos import (
    UpdateProfileDto, AdminCreateUserDto, AdminUpdateUserDto, UserDto, AdminCreatedUserResponse,
)
from ...core.security import get_password_hash, generate_temporary_password
from ...infrastructure.external_services.storage_service import StorageService, timestamped_path

logger = logging.getLogger(__name__)


class UpdateProfileUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, user_id: UserId, request: UpdateProfileDto) -> UserDto:
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(user_id)
            if not user:
                raise LookupError("User not found")
            if request.username and request.username != user.username:
                if await self.unit_of_work.users.exists_by_username(request.username):
                    raise ValueError("Username already taken")
            user.update_profile(**request.model_dump(exclude_unset=True))
            user = await self.unit_of_work.users.update(user)
        return UserDto.from_entity(user)


class UploadProfilePhotoUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, storage_service: StorageService):
        self.unit_of_work = unit_of_work
        self.storage_service = storage_service

    async def execute(self, user_id: UserId, data: bytes, filename: str, content_type: str) -> UserDto:
        url = await self.storage_service.upload_file(
            data, timestamped_path(f"profiles/{user_id}", filename), content_type
        )
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(user_id)
            if not user:
                raise LookupError("User not found")
            previous = user.profile_image_url
            user.profile_image_url = url
            user = await self.unit_of_work.users.update(user)
        if previous:
            await self.storage_service.delete_file(previous)
        return UserDto.from_entity(user)


class AdminCreateUserUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, request: AdminCreateUserDto) -> AdminCreatedUserResponse:
        temporary_password = generate_temporary_password()
        async with self.unit_of_work:
            if await self.unit_of_work.users.exists_by_email(request.email):
                raise ValueError("User with this email already exists")
            if await self.unit_of_work.users.exists_by_username(request.username):
                raise ValueError("Username already taken")

            user = User.create(
                email=request.email,
                hashed_password=get_password_hash(temporary_password),
                username=request.username,
                first_name=request.first_name,
                last_name=request.last_name,
                roles=request.roles,
            )
            user.phone = request.phone
            if request.headquarter_id:
                user.headquarter_id = HeadquartersId(request.headquarter_id)
            user = await self.unit_of_work.users.add(user)

        logger.info("Admin created user %s with roles %s", user.id, [r.value for r in user.roles])
        return AdminCreatedUserResponse(user=UserDto.from_entity(user), temporary_password=temporary_password)


class AdminUpdateUserUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, user_id: UserId, request: AdminUpdateUserDto) -> UserDto:
        fields = request.model_dump(exclude_unset=True)
        roles: Optional[list] = fields.pop("roles", None)
        headquarter_id = fields.pop("headquarter_id", None)

        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(user_id)
            if not user:
                raise LookupError("User not found")
            user.update_profile(**fields)
            if headquarter_id:
                user.headquarter_id = HeadquartersId(headquarter_id)
            if roles is not None:
                user.replace_roles(roles)
            user = await self.unit_of_work.users.update(user)
        return UserDto.from_entity(user)
