"""User profile routes"""

import logging

from fastapi import APIRouter, Depends, HTTPException, UploadFile, File

from ...api.dependencies import get_current_user, get_unit_of_work, get_storage_service
from ...application.dtos.user_dtos import UserDto, UpdateProfileDto, ChangePasswordDto, PasswordMessageResponse
from ...application.use_cases.manage_users import UpdateProfileUseCase, UploadProfilePhotoUseCase
from ...application.use_cases.password_reset import ChangePasswordUseCase
from ...core.config import settings
from ...domain.entities.user import User
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...infrastructure.external_services.storage_service import StorageService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me", response_model=UserDto)
async def get_my_profile(current_user: User = Depends(get_current_user)):
    return UserDto.from_entity(current_user)


@router.put("/me", response_model=UserDto)
async def update_my_profile(
    request: UpdateProfileDto,
    current_user: User = Depends(get_current_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Update own profile fields"""
    use_case = UpdateProfileUseCase(unit_of_work)
    try:
        return await use_case.execute(current_user.id, request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/me/password", response_model=PasswordMessageResponse)
async def change_my_password(
    request: ChangePasswordDto,
    current_user: User = Depends(get_current_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    use_case = ChangePasswordUseCase(unit_of_work)
    try:
        return await use_case.execute(current_user.id, request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.post("/me/photo", response_model=UserDto)
async def upload_my_photo(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    storage_service: StorageService = Depends(get_storage_service)
):
    """Upload a profile picture"""
    if file.content_type not in settings.ALLOWED_IMAGE_TYPES:
        raise HTTPException(status_code=400, detail=f"Unsupported image type: {file.content_type}")
    data = await file.read()
    if len(data) > settings.MAX_FILE_SIZE:
        raise HTTPException(status_code=400, detail="File too large")

    use_case = UploadProfilePhotoUseCase(unit_of_work, storage_service)
    try:
        return await use_case.execute(current_user.id, data, file.filename, file.content_type)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error("Profile photo upload failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to upload photo: {e}")
