"""Beneficiary DTOs"""

from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime
from uuid import UUID

from ...domain.entities.beneficiary import Beneficiary
from ...domain.enums import BeneficiaryStatus


class CreateBeneficiaryDto(BaseModel):
    """Field rules live on the entity so create and update share them"""
    first_name: str
    last_name: str
    birth_date: date
    category: str
    headquarters_id: UUID
    phone: str
    registry_date: Optional[date] = None
    status: Optional[BeneficiaryStatus] = None
    sex: Optional[str] = None
    performance: Optional[float] = None
    attendance: Optional[float] = None
    guardian: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
    medical_info: Optional[str] = None
    observation: Optional[str] = None


class UpdateBeneficiaryDto(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    birth_date: Optional[date] = None
    category: Optional[str] = None
    headquarters_id: Optional[UUID] = None
    phone: Optional[str] = None
    registry_date: Optional[date] = None
    status: Optional[BeneficiaryStatus] = None
    sex: Optional[str] = None
    performance: Optional[float] = None
    attendance: Optional[float] = None
    guardian: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
    medical_info: Optional[str] = None
    observation: Optional[str] = None


class BeneficiaryDto(BaseModel):
    beneficiary_id: UUID
    headquarters_id: UUID
    first_name: str
    last_name: str
    birth_date: date
    age: int
    category: str
    phone: str
    registry_date: Optional[date] = None
    status: str
    sex: Optional[str] = None
    performance: Optional[float] = None
    attendance: Optional[float] = None
    guardian: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
    medical_info: Optional[str] = None
    observation: Optional[str] = None
    photo_url: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, beneficiary: Beneficiary) -> "BeneficiaryDto":
        return cls(
            beneficiary_id=beneficiary.id.value,
            headquarters_id=beneficiary.headquarters_id.value,
            first_name=beneficiary.first_name,
            last_name=beneficiary.last_name,
            birth_date=beneficiary.birth_date,
            age=beneficiary.age,
            category=beneficiary.category,
            phone=beneficiary.phone,
            registry_date=beneficiary.registry_date,
            status=beneficiary.status.value,
            sex=beneficiary.sex,
            performance=beneficiary.performance,
            attendance=beneficiary.attendance,
            guardian=beneficiary.guardian,
            address=beneficiary.address,
            emergency_contact=beneficiary.emergency_contact,
            medical_info=beneficiary.medical_info,
            observation=beneficiary.observation,
            photo_url=beneficiary.photo_url,
            created_at=beneficiary.created_at,
        )
