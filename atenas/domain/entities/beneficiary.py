"""Beneficiary entity with enrollment rules"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional
import re

from ..value_objects.entity_ids import BeneficiaryId, HeadquartersId
from ..enums import BeneficiaryStatus


PHONE_PATTERN = re.compile(r"^[0-9+\-\s()]*$")
MAX_AGE = 17

# field -> max length for the optional free-text fields
TEXT_LIMITS = {
    "guardian": 100,
    "address": 200,
    "medical_info": 500,
}


def age_on(birth_date: date, today: Optional[date] = None) -> int:
    today = today or date.today()
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def validate_name(value: str, label: str) -> str:
    value = (value or "").strip()
    if len(value) < 2:
        raise ValueError(f"El {label} debe tener al menos 2 caracteres")
    if len(value) > 50:
        raise ValueError(f"El {label} no debe exceder 50 caracteres")
    return value


def validate_birth_date(birth_date: date, today: Optional[date] = None) -> date:
    today = today or date.today()
    if birth_date >= today:
        raise ValueError("La fecha de nacimiento debe ser anterior a hoy")
    if today.year - birth_date.year > 120:
        raise ValueError("La fecha de nacimiento no es válida")
    if age_on(birth_date, today) > MAX_AGE:
        raise ValueError("El beneficiario debe tener máximo 17 años")
    return birth_date


def validate_phone(phone: str, required: bool = True) -> Optional[str]:
    if not phone:
        if required:
            raise ValueError("El teléfono es requerido")
        return phone
    if not PHONE_PATTERN.match(phone):
        raise ValueError("Número de teléfono inválido")
    return phone


def validate_percentage(value, label: str):
    if value is None:
        return None
    if not 0 <= float(value) <= 100:
        raise ValueError(f"{label} debe estar entre 0 y 100")
    return value


@dataclass
class Beneficiary:
    id: BeneficiaryId
    first_name: str
    last_name: str
    birth_date: date
    category: str
    headquarters_id: HeadquartersId
    phone: str
    registry_date: date = field(default_factory=date.today)
    status: BeneficiaryStatus = BeneficiaryStatus.ACTIVO
    sex: Optional[str] = None
    performance: Optional[float] = None
    attendance: Optional[float] = None
    guardian: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
    medical_info: Optional[str] = None
    observation: Optional[str] = None
    photo_url: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def create(cls, **fields) -> 'Beneficiary':
        """Validate and build a new beneficiary"""
        if not (fields.get("category") or "").strip():
            raise ValueError("La categoría es requerida")
        if not fields.get("headquarters_id"):
            raise ValueError("La sede es requerida")
        if not fields.get("birth_date"):
            raise ValueError("La fecha de nacimiento es requerida")

        fields["first_name"] = validate_name(fields.get("first_name"), "nombre")
        fields["last_name"] = validate_name(fields.get("last_name"), "apellido")
        validate_birth_date(fields["birth_date"])
        validate_phone(fields.get("phone"))
        cls._validate_optional(fields)
        if fields.get("registry_date") is None:
            fields.pop("registry_date", None)
        if fields.get("status") is None:
            fields.pop("status", None)
        else:
            fields["status"] = BeneficiaryStatus(fields["status"])
        return cls(id=BeneficiaryId.generate(), **fields)

    @staticmethod
    def _validate_optional(fields: dict) -> None:
        validate_phone(fields.get("emergency_contact"), required=False)
        validate_percentage(fields.get("performance"), "El rendimiento")
        validate_percentage(fields.get("attendance"), "La asistencia")
        for name, limit in TEXT_LIMITS.items():
            if fields.get(name) and len(fields[name]) > limit:
                raise ValueError(f"{name} no debe exceder {limit} caracteres")

    def update(self, **fields) -> None:
        """Apply a partial update with the same rules as create"""
        fields = {key: value for key, value in fields.items() if value is not None}
        if "first_name" in fields:
            fields["first_name"] = validate_name(fields["first_name"], "nombre")
        if "last_name" in fields:
            fields["last_name"] = validate_name(fields["last_name"], "apellido")
        if "birth_date" in fields:
            validate_birth_date(fields["birth_date"])
        if "phone" in fields:
            validate_phone(fields["phone"])
        if "status" in fields:
            fields["status"] = BeneficiaryStatus(fields["status"])
        self._validate_optional(fields)
        for name, value in fields.items():
            setattr(self, name, value)

    @property
    def age(self) -> int:
        return age_on(self.birth_date)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
