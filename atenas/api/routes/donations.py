"""Donation routes"""

import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError

from ...api.dependencies import get_current_user, get_unit_of_work, require_roles
from ...application.dtos.donation_dtos import DonationDto, DonationStatsDto
from ...application.use_cases.donor_dashboard import ListMyDonationsUseCase, DonationStatsUseCase
from ...domain.entities.user import User
from ...domain.enums import DonationSort, RoleName
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import DonationId, ProjectId

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me", response_model=List[DonationDto])
async def list_my_donations(
    sort: DonationSort = Query(DonationSort.DATE_DESC),
    current_user: User = Depends(get_current_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Current donor's donations with their project"""
    use_case = ListMyDonationsUseCase(unit_of_work)
    try:
        return await use_case.execute(current_user.id, sort)
    except SQLAlchemyError as e:
        raise HTTPException(status_code=503, detail=f"Failed to load donations: {e}")


@router.get("/me/stats", response_model=DonationStatsDto)
async def my_donation_stats(
    current_user: User = Depends(get_current_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Approved-donation totals and impact for the donor dashboard"""
    return await DonationStatsUseCase(unit_of_work).execute(current_user.id)


@router.get("/", response_model=List[DonationDto])
async def list_donations(
    status: Optional[str] = Query(None),
    project_id: Optional[UUID] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    current_user: User = Depends(require_roles(RoleName.ADMIN, RoleName.DIRECTOR)),
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


@router.get("/{donation_id}", response_model=DonationDto)
async def get_donation(
    donation_id: UUID,
    current_user: User = Depends(get_current_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    async with unit_of_work:
        donation = await unit_of_work.donations.get_by_id(DonationId(donation_id))
        project = await unit_of_work.projects.get_by_id(donation.project_id) if donation else None
    if not donation:
        raise HTTPException(status_code=404, detail="Donation not found")
    if donation.user_id != current_user.id and not current_user.is_admin:
        raise HTTPException(status_code=403, detail="Not allowed to view this donation")
    return DonationDto.from_entity(donation, project)
