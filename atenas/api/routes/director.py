"""Regional director routes"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ...api.dependencies import get_unit_of_work, require_roles
from ...application.use_cases.dashboards import DirectorDashboardUseCase
from ...domain.entities.user import User
from ...domain.enums import RoleName
from ...domain.repositories.unit_of_work import IUnitOfWork

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/dashboard")
async def get_director_dashboard(
    current_user: User = Depends(require_roles(RoleName.DIRECTOR)),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Project, headquarters and beneficiary totals across all sites"""
    try:
        return await DirectorDashboardUseCase(unit_of_work).execute()
    except Exception as e:
        logger.error("Director dashboard failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to load dashboard: {e}")
