"""Site director routes, scoped to the director's own headquarters"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ...api.dependencies import get_unit_of_work, require_roles
from ...application.use_cases.dashboards import SiteDirectorDashboardUseCase
from ...domain.entities.user import User
from ...domain.enums import RoleName
from ...domain.repositories.unit_of_work import IUnitOfWork

logger = logging.getLogger(__name__)

router = APIRouter()

site_director = require_roles(RoleName.DIRECTOR_SEDE)


async def _dashboard(unit_of_work: IUnitOfWork, user: User) -> dict:
    try:
        return await SiteDirectorDashboardUseCase(unit_of_work).execute(user)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/dashboard")
async def get_site_director_dashboard(
    current_user: User = Depends(site_director),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    return await _dashboard(unit_of_work, current_user)


@router.get("/beneficiaries")
async def get_site_beneficiaries(
    current_user: User = Depends(site_director),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    return (await _dashboard(unit_of_work, current_user))["beneficiaries"]


@router.get("/projects")
async def get_site_projects(
    current_user: User = Depends(site_director),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    return (await _dashboard(unit_of_work, current_user))["projects"]


@router.get("/evaluations")
async def get_site_evaluations(
    current_user: User = Depends(site_director),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    return (await _dashboard(unit_of_work, current_user))["evaluations"]
