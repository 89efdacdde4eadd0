"""
Domain Enums - Business domain enumerations
"""

from enum import Enum


class RoleName(str, Enum):
    ADMIN = "admin"
    DIRECTOR = "director"
    DIRECTOR_SEDE = "director_sede"
    ENTRENADOR = "entrenador"
    DONATOR = "donator"


# Highest first; picks the dashboard a multi-role user lands on
ROLE_PRIORITY = [
    RoleName.ADMIN,
    RoleName.DIRECTOR,
    RoleName.DIRECTOR_SEDE,
    RoleName.ENTRENADOR,
    RoleName.DONATOR,
]

DASHBOARD_PATHS = {
    RoleName.ADMIN: "/admin",
    RoleName.DIRECTOR: "/director",
    RoleName.DIRECTOR_SEDE: "/director-sede",
    RoleName.ENTRENADOR: "/profile",
    RoleName.DONATOR: "/donator",
}


class DonationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class BoldTransactionStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    DECLINED = "DECLINED"
    ERROR = "ERROR"

    @property
    def is_final(self) -> bool:
        return self != BoldTransactionStatus.PENDING


class ProjectStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    PENDING = "pending"


class HeadquartersStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class BeneficiaryStatus(str, Enum):
    ACTIVO = "activo"
    PENDIENTE = "pendiente"
    INACTIVO = "inactivo"
    SUSPENDIDO = "suspendido"


class TestimonialStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class GalleryItemType(str, Enum):
    PHOTO = "photo"
    VIDEO = "video"


class DonationSort(str, Enum):
    DATE_DESC = "date_desc"
    DATE_ASC = "date_asc"
    AMOUNT_DESC = "amount_desc"
    AMOUNT_ASC = "amount_asc"


class ReportKind(str, Enum):
    DONATIONS = "donations"
    USERS = "users"
    PROJECTS = "projects"
    BENEFICIARIES = "beneficiaries"


class ReportFormat(str, Enum):
    EXCEL = "excel"
    PDF = "pdf"
