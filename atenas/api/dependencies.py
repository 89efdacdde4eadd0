"""API dependencies"""

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from ..core.security import verify_token
from ..db.database import get_db
from ..domain.entities.user import User
from ..domain.enums import RoleName
from ..domain.repositories.unit_of_work import IUnitOfWork
from ..domain.value_objects.entity_ids import UserId, HeadquartersId
from ..infrastructure.repositories.unit_of_work_impl import UnitOfWorkImpl
from ..infrastructure.external_services.bold_payment_service import BoldPaymentService
from ..infrastructure.external_services.email_service import EmailService
from ..infrastructure.external_services.geocoding_service import GeocodingService
from ..infrastructure.external_services.report_service import ReportService
from ..infrastructure.external_services.storage_service import StorageService


security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


async def _load_user(token: str, db: Session) -> User:
    user_id = verify_token(token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token"
        )

    try:
        user_key = UserId.from_str(user_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    unit_of_work = UnitOfWorkImpl(db)
    async with unit_of_work:
        user = await unit_of_work.users.get_by_id(user_key)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )
    return user


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """Get current authenticated user"""
    return await _load_user(credentials.credentials, db)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """Current user when a bearer token is sent, otherwise None"""
    if not credentials:
        return None
    return await _load_user(credentials.credentials, db)


def require_roles(*roles: RoleName):
    """Dependency factory: the user must hold one of the roles; admin always passes"""

    async def checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.is_admin or current_user.has_role(*roles):
            return current_user
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions"
        )

    return checker


async def headquarters_scope(unit_of_work: IUnitOfWork, user: User) -> Optional[HeadquartersId]:
    """Headquarters a site director or coach is restricted to, None for unrestricted roles"""
    if user.is_admin or user.has_role(RoleName.DIRECTOR):
        return None
    if user.has_role(RoleName.DIRECTOR_SEDE):
        headquarters = await unit_of_work.headquarters.get_by_director(user.id)
        if not headquarters:
            raise HTTPException(status_code=403, detail="No headquarters assigned to this director")
        return headquarters.id
    if user.has_role(RoleName.ENTRENADOR):
        if not user.headquarter_id:
            raise HTTPException(status_code=403, detail="No headquarters assigned to this coach")
        return user.headquarter_id
    return None


get_current_admin_user = require_roles(RoleName.ADMIN)


def get_unit_of_work(db: Session = Depends(get_db)) -> IUnitOfWork:
    """Get unit of work"""
    return UnitOfWorkImpl(db)


def get_bold_payment_service() -> BoldPaymentService:
    return BoldPaymentService()


def get_email_service() -> EmailService:
    return EmailService()


def get_geocoding_service() -> GeocodingService:
    return GeocodingService()


def get_storage_service() -> StorageService:
    """Get storage service"""
    return StorageService()


def get_report_service() -> ReportService:
    return ReportService()
