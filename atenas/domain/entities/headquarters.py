"""Headquarters (sede) entity"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..value_objects.entity_ids import HeadquartersId, UserId
from ..enums import HeadquartersStatus


@dataclass
class Headquarters:
    id: HeadquartersId
    name: str
    address: Optional[str] = None
    city: Optional[str] = None
    status: HeadquartersStatus = HeadquartersStatus.ACTIVE
    image_url: Optional[str] = None
    user_id: Optional[UserId] = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def create(
        cls,
        name: str,
        address: str,
        city: str,
        user_id: Optional[UserId] = None,
        status: HeadquartersStatus = HeadquartersStatus.ACTIVE,
        image_url: Optional[str] = None,
    ) -> 'Headquarters':
        if not (name or "").strip() or not (address or "").strip() or not (city or "").strip():
            raise ValueError("Nombre, dirección y ciudad son requeridos")
        return cls(
            id=HeadquartersId.generate(),
            name=name.strip(),
            address=address.strip(),
            city=city.strip(),
            status=status,
            image_url=image_url,
            user_id=user_id,
        )

    def update(self, **fields) -> None:
        for name in ("name", "address", "city"):
            if name in fields and fields[name] is not None:
                if not fields[name].strip():
                    raise ValueError(f"{name} cannot be empty")
                setattr(self, name, fields[name].strip())
        if fields.get("status") is not None:
            self.status = HeadquartersStatus(fields["status"])
        if "user_id" in fields and fields["user_id"] is not None:
            self.user_id = fields["user_id"]
        if "image_url" in fields and fields["image_url"] is not None:
            self.image_url = fields["image_url"]

    def toggle_status(self) -> HeadquartersStatus:
        self.status = (
            HeadquartersStatus.INACTIVE
            if self.status == HeadquartersStatus.ACTIVE
            else HeadquartersStatus.ACTIVE
        )
        return self.status

    @property
    def is_active(self) -> bool:
        return self.status == HeadquartersStatus.ACTIVE

    @property
    def geocode_query(self) -> str:
        return ", ".join(part for part in (self.address, self.city) if part)
