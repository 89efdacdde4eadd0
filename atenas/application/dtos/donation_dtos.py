"""Donation DTOs"""

from pydantic import BaseModel
from typing import Optional, List
from datetime import date as date_type, datetime
from decimal import Decimal
from uuid import UUID

from ...domain.entities.donation import Donation
from ...domain.entities.project import Project


class ProjectSummaryDto(BaseModel):
    project_id: UUID
    name: str
    category: Optional[str] = None
    finance_goal: Optional[Decimal] = None
    status: str


class DonationDto(BaseModel):
    donation_id: UUID
    user_id: Optional[UUID] = None
    project_id: UUID
    amount: Decimal
    currency: str
    date: date_type
    status: str
    pay_method: Optional[str] = None
    approve_code: Optional[str] = None
    created_at: Optional[datetime] = None
    project: Optional[ProjectSummaryDto] = None

    @classmethod
    def from_entity(cls, donation: Donation, project: Optional[Project] = None) -> "DonationDto":
        return cls(
            donation_id=donation.id.value,
            user_id=donation.user_id.value if donation.user_id else None,
            project_id=donation.project_id.value,
            amount=donation.amount,
            currency=donation.currency,
            date=donation.date,
            status=donation.status.value,
            pay_method=donation.pay_method,
            approve_code=donation.approve_code,
            created_at=donation.created_at,
            project=ProjectSummaryDto(
                project_id=project.id.value,
                name=project.name,
                category=project.category,
                finance_goal=project.finance_goal,
                status=project.status.value,
            ) if project else None,
        )


class SupportedProjectDto(BaseModel):
    project_id: UUID
    name: str
    category: Optional[str] = None
    finance_goal: Optional[Decimal] = None
    total_donated: Decimal
    progress: int


class DonationStatsDto(BaseModel):
    total_donated: Decimal
    projects_supported: int
    beneficiaries_impacted: int
    recent_donations: List[DonationDto]
    supported_projects: List[SupportedProjectDto]
