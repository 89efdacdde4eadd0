"""Donor dashboard use cases: donation history and impact stats"""

import asyncio
import logging
from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from ...core.config import settings
from ...domain.entities.project import Project
from ...domain.enums import DonationSort
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import UserId, ProjectId
from ...application.dtos.donation_dtos import DonationDto, DonationStatsDto, SupportedProjectDto

logger = logging.getLogger(__name__)


async def _load_projects(unit_of_work: IUnitOfWork, project_ids) -> Dict[ProjectId, Project]:
    projects = {}
    for project_id in dict.fromkeys(project_ids):
        project = await unit_of_work.projects.get_by_id(project_id)
        if project:
            projects[project_id] = project
    return projects


class ListMyDonationsUseCase:
    """Donation history with a fixed-delay retry on database errors"""

    def __init__(self, unit_of_work: IUnitOfWork, retry_delays: Optional[Sequence[float]] = None, sleep=asyncio.sleep):
        self.unit_of_work = unit_of_work
        self.retry_delays = list(settings.DONATION_FETCH_RETRY_DELAYS if retry_delays is None else retry_delays)
        self.sleep = sleep

    async def execute(self, user_id: UserId, sort: DonationSort = DonationSort.DATE_DESC) -> List[DonationDto]:
        attempts = len(self.retry_delays) + 1
        for attempt in range(1, attempts + 1):
            try:
                return await self._fetch(user_id, sort)
            except SQLAlchemyError as e:
                if attempt == attempts:
                    logger.error("Loading donations for %s failed after %d attempts: %s", user_id, attempts, e)
                    raise
                delay = self.retry_delays[attempt - 1]
                logger.warning("Loading donations failed (attempt %d/%d), retrying in %.1fs", attempt, attempts, delay)
                await self.sleep(delay)

    async def _fetch(self, user_id: UserId, sort: DonationSort) -> List[DonationDto]:
        async with self.unit_of_work:
            donations = await self.unit_of_work.donations.list_by_user(user_id, sort)
            projects = await _load_projects(self.unit_of_work, [d.project_id for d in donations])
        return [DonationDto.from_entity(d, projects.get(d.project_id)) for d in donations]


class DonationStatsUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, user_id: UserId) -> DonationStatsDto:
        async with self.unit_of_work:
            donations = await self.unit_of_work.donations.list_by_user(user_id, DonationSort.DATE_DESC)
            approved = [d for d in donations if d.is_approved]

            donated_by_project: Dict[ProjectId, Decimal] = {}
            for donation in approved:
                donated_by_project[donation.project_id] = (
                    donated_by_project.get(donation.project_id, Decimal("0")) + donation.amount
                )

            project_ids = list(donated_by_project)
            projects = await _load_projects(self.unit_of_work, project_ids)
            raised = await self.unit_of_work.donations.raised_by_project(project_ids)
            beneficiaries = await self.unit_of_work.beneficiaries.ids_for_projects(project_ids)

        supported = [
            SupportedProjectDto(
                project_id=project_id.value,
                name=projects[project_id].name,
                category=projects[project_id].category,
                finance_goal=projects[project_id].finance_goal,
                total_donated=total,
                progress=projects[project_id].progress(raised.get(project_id, Decimal("0"))),
            )
            for project_id, total in donated_by_project.items()
            if project_id in projects
        ]
        supported.sort(key=lambda item: item.total_donated, reverse=True)

        return DonationStatsDto(
            total_donated=sum((d.amount for d in approved), Decimal("0")),
            projects_supported=len(donated_by_project),
            beneficiaries_impacted=len(beneficiaries),
            recent_donations=[DonationDto.from_entity(d, projects.get(d.project_id)) for d in approved[:3]],
            supported_projects=supported,
        )
