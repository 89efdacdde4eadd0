"""Admin routes: dashboard and user management"""

import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from ...api.dependencies import get_current_admin_user, get_unit_of_work
from ...application.dtos.donation_dtos import DonationDto
from ...application.dtos.user_dtos import (
    UserDto, AdminCreateUserDto, AdminUpdateUserDto, AdminCreatedUserResponse,
)
from ...application.use_cases.dashboards import AdminDashboardUseCase
from ...application.use_cases.manage_users import AdminCreateUserUseCase, AdminUpdateUserUseCase
from ...domain.entities.user import User
from ...domain.enums import RoleName
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import UserId, ProjectId

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/dashboard")
async def get_admin_dashboard(
    admin_user: User = Depends(get_current_admin_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Users, beneficiaries, this month's donations and active projects"""
    try:
        return await AdminDashboardUseCase(unit_of_work).execute()
    except Exception as e:
        logger.error("Admin dashboard failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to load dashboard: {e}")


@router.get("/users", response_model=List[UserDto])
async def list_users(
    search: Optional[str] = None,
    role: Optional[RoleName] = None,
    admin_user: User = Depends(get_current_admin_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    async with unit_of_work:
        users = await unit_of_work.users.list(search=search, role=role.value if role else None)
    return [UserDto.from_entity(u) for u in users]


@router.post("/users", response_model=AdminCreatedUserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: AdminCreateUserDto,
    admin_user: User = Depends(get_current_admin_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Create a user with a temporary password, returned once"""
    try:
        return await AdminCreateUserUseCase(unit_of_work).execute(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/users/{user_id}", response_model=UserDto)
async def update_user(
    user_id: UUID,
    request: AdminUpdateUserDto,
    admin_user: User = Depends(get_current_admin_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    try:
        return await AdminUpdateUserUseCase(unit_of_work).execute(UserId(user_id), request)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: UUID,
    admin_user: User = Depends(get_current_admin_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    if admin_user.id == UserId(user_id):
        raise HTTPException(status_code=400, detail="Cannot delete your own account")
    try:
        async with unit_of_work:
            await unit_of_work.users.delete(UserId(user_id))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    logger.info("Admin %s deleted user %s", admin_user.id, user_id)
    return {"message": "User deleted successfully"}


@router.get("/roles", response_model=List[str])
async def list_roles(
    admin_user: User = Depends(get_current_admin_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    async with unit_of_work:
        stored = await unit_of_work.users.list_role_names()
    return list(dict.fromkeys([role.value for role in RoleName] + stored))


@router.get("/donations", response_model=List[DonationDto])
async def list_all_donations(
    status: Optional[str] = None,
    project_id: Optional[UUID] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    admin_user: User = Depends(get_current_admin_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    async with unit_of_work:
        donations = await unit_of_work.donations.list(
            status=status,
            project_id=ProjectId(project_id) if project_id else None,
            date_from=date_from,
            date_to=date_to,
        )
    return [DonationDto.from_entity(d) for d in donations]
