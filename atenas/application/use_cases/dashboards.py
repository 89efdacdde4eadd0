"""Role dashboards: admin, regional director and site director"""

from datetime import date
from decimal import Decimal
from typing import Optional

from ...domain.entities.user import User
from ...domain.enums import BeneficiaryStatus, ProjectStatus, HeadquartersStatus
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...application.dtos.beneficiary_dtos import BeneficiaryDto
from ...application.dtos.donation_dtos import DonationDto
from ...application.dtos.evaluation_dtos import EvaluationDto
from ...application.dtos.headquarters_dtos import HeadquartersDto
from ...application.dtos.project_dtos import ProjectDto


def month_bounds(today: Optional[date] = None):
    today = today or date.today()
    start = today.replace(day=1)
    end = start.replace(year=start.year + 1, month=1) if start.month == 12 else start.replace(month=start.month + 1)
    return start, end


def _average(values) -> Optional[float]:
    values = [v for v in values if v is not None]
    return round(sum(values) / len(values), 1) if values else None


class AdminDashboardUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, today: Optional[date] = None) -> dict:
        start, end = month_bounds(today)
        async with self.unit_of_work:
            total_users = await self.unit_of_work.users.count()
            by_status = await self.unit_of_work.beneficiaries.count_by("status")
            month_total, month_count = await self.unit_of_work.donations.approved_totals_between(start, end)
            active_projects = await self.unit_of_work.projects.list(status=ProjectStatus.ACTIVE.value)
            recent = await self.unit_of_work.donations.list(limit=5)

        return {
            "stats": {
                "total_users": total_users,
                "active_beneficiaries": by_status.get(BeneficiaryStatus.ACTIVO.value, 0),
                "donations_this_month": month_total,
                "donations_this_month_count": month_count,
                "active_projects": len(active_projects),
            },
            "recent_donations": [DonationDto.from_entity(d) for d in recent],
        }


class DirectorDashboardUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self) -> dict:
        async with self.unit_of_work:
            projects = await self.unit_of_work.projects.list()
            raised = await self.unit_of_work.donations.raised_by_project([p.id for p in projects])
            headquarters = await self.unit_of_work.headquarters.list()
            by_status = await self.unit_of_work.beneficiaries.count_by("status")
            by_headquarters = await self.unit_of_work.beneficiaries.count_by("headquarters_id")

        return {
            "projects": {
                "total": len(projects),
                "active": len([p for p in projects if p.status == ProjectStatus.ACTIVE]),
                "total_goal": sum((p.finance_goal or Decimal("0") for p in projects), Decimal("0")),
                "total_raised": sum(raised.values(), Decimal("0")),
            },
            "headquarters": {
                "total": len(headquarters),
                "active": len([h for h in headquarters if h.status == HeadquartersStatus.ACTIVE]),
                "beneficiaries": [
                    {
                        "headquarters_id": h.id.value,
                        "name": h.name,
                        "beneficiaries": by_headquarters.get(str(h.id.value), 0),
                    }
                    for h in headquarters
                ],
            },
            "beneficiaries": {
                "total": sum(by_status.values()),
                "by_status": {status.value: by_status.get(status.value, 0) for status in BeneficiaryStatus},
            },
        }


class SiteDirectorDashboardUseCase:
    """Everything a site director sees for the headquarters they run"""

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, director: User) -> dict:
        async with self.unit_of_work:
            headquarters = await self.unit_of_work.headquarters.get_by_director(director.id)
            if not headquarters:
                raise LookupError("No headquarters assigned to this director")

            beneficiaries = await self.unit_of_work.beneficiaries.list(headquarters_id=headquarters.id)
            projects = await self.unit_of_work.projects.list(headquarters_id=headquarters.id)
            raised = await self.unit_of_work.donations.raised_by_project([p.id for p in projects])
            evaluations = await self.unit_of_work.evaluations.list_by_headquarters(headquarters.id)

        by_status = {status.value: 0 for status in BeneficiaryStatus}
        for beneficiary in beneficiaries:
            by_status[beneficiary.status.value] += 1

        return {
            "headquarters": HeadquartersDto.from_entity(headquarters),
            "beneficiaries": [BeneficiaryDto.from_entity(b) for b in beneficiaries],
            "projects": [ProjectDto.from_entity(p, raised.get(p.id, Decimal("0"))) for p in projects],
            "evaluations": [EvaluationDto.from_entity(e) for e in evaluations],
            "stats": {
                "total_beneficiaries": len(beneficiaries),
                "by_status": by_status,
                "average_performance": _average(b.performance for b in beneficiaries),
                "average_attendance": _average(b.attendance for b in beneficiaries),
                "total_projects": len(projects),
                "total_evaluations": len(evaluations),
            },
        }
