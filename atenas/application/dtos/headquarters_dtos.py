"""Headquarters DTOs"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from ...domain.entities.headquarters import Headquarters
from ...domain.enums import HeadquartersStatus


class CreateHeadquartersDto(BaseModel):
    name: str = Field(min_length=1)
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    status: HeadquartersStatus = HeadquartersStatus.ACTIVE
    user_id: Optional[UUID] = None


class UpdateHeadquartersDto(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    status: Optional[HeadquartersStatus] = None
    user_id: Optional[UUID] = None


class HeadquartersDto(BaseModel):
    headquarters_id: UUID
    name: str
    address: Optional[str] = None
    city: Optional[str] = None
    status: str
    image_url: Optional[str] = None
    user_id: Optional[UUID] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, headquarters: Headquarters) -> "HeadquartersDto":
        return cls(
            headquarters_id=headquarters.id.value,
            name=headquarters.name,
            address=headquarters.address,
            city=headquarters.city,
            status=headquarters.status.value,
            image_url=headquarters.image_url,
            user_id=headquarters.user_id.value if headquarters.user_id else None,
            created_at=headquarters.created_at,
        )


class MapMarkerDto(BaseModel):
    headquarters_id: UUID
    name: str
    address: str
    lat: float
    lng: float


class MapDto(BaseModel):
    center: List[float]
    markers: List[MapMarkerDto]
