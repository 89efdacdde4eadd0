"""User repository implementation"""

from datetime import datetime
from typing import Optional, List
from sqlalchemy.orm import Session
from sqlalchemy import or_

from ...domain.repositories.user_repository import IUserRepository
from ...domain.entities.user import User
from ...domain.value_objects.entity_ids import UserId, HeadquartersId
from ...domain.enums import RoleName, ROLE_PRIORITY
from ..orm.user_model import UserModel, RoleModel
from ..orm.password_reset_token_model import PasswordResetTokenModel


class UserRepositoryImpl(IUserRepository):
    """Repository implementation for User aggregate"""

    def __init__(self, session: Session):
        self.session = session

    async def get_by_id(self, user_id: UserId) -> Optional[User]:
        model = self.session.query(UserModel).filter(UserModel.id == user_id.value).first()
        return self._map_to_entity(model) if model else None

    async def get_by_email(self, email: str) -> Optional[User]:
        model = self.session.query(UserModel).filter(UserModel.email == email.lower()).first()
        return self._map_to_entity(model) if model else None

    async def exists_by_email(self, email: str) -> bool:
        return self.session.query(UserModel.id).filter(UserModel.email == email.lower()).first() is not None

    async def exists_by_username(self, username: str) -> bool:
        return self.session.query(UserModel.id).filter(UserModel.username == username).first() is not None

    async def add(self, user: User) -> User:
        model = UserModel(id=user.id.value, hashed_password=user.hashed_password)
        self._update_model_from_entity(model, user)
        self.session.add(model)
        self.session.flush()
        return self._map_to_entity(model)

    async def update(self, user: User) -> User:
        model = self.session.query(UserModel).filter(UserModel.id == user.id.value).first()
        if not model:
            raise LookupError("User not found")
        self._update_model_from_entity(model, user)
        self.session.flush()
        return self._map_to_entity(model)

    async def delete(self, user_id: UserId) -> None:
        model = self.session.query(UserModel).filter(UserModel.id == user_id.value).first()
        if not model:
            raise LookupError("User not found")
        self.session.delete(model)
        self.session.flush()

    async def list(self, search: Optional[str] = None, role: Optional[str] = None) -> List[User]:
        query = self.session.query(UserModel)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(or_(
                UserModel.email.ilike(pattern),
                UserModel.username.ilike(pattern),
                UserModel.first_name.ilike(pattern),
                UserModel.last_name.ilike(pattern),
            ))
        if role:
            query = query.filter(UserModel.roles.any(RoleModel.role_name == role))
        models = query.order_by(UserModel.created_at.desc()).all()
        return [self._map_to_entity(model) for model in models]

    async def count(self) -> int:
        return self.session.query(UserModel).count()

    async def list_role_names(self) -> List[str]:
        names = [role.value for role in ROLE_PRIORITY]
        for (role_name,) in self.session.query(RoleModel.role_name).order_by(RoleModel.role_name).all():
            if role_name not in names:
                names.append(role_name)
        return names

    async def add_reset_token(self, user_id: UserId, token: str, expires_at: datetime) -> None:
        self.session.add(PasswordResetTokenModel(user_id=user_id.value, token=token, expires_at=expires_at))
        self.session.flush()

    async def get_by_reset_token(self, token: str) -> Optional[User]:
        model = (
            self.session.query(UserModel)
            .join(PasswordResetTokenModel, PasswordResetTokenModel.user_id == UserModel.id)
            .filter(
                PasswordResetTokenModel.token == token,
                PasswordResetTokenModel.used.is_(False),
                PasswordResetTokenModel.expires_at > datetime.utcnow(),
            )
            .first()
        )
        return self._map_to_entity(model) if model else None

    async def mark_reset_token_used(self, token: str) -> None:
        self.session.query(PasswordResetTokenModel).filter(PasswordResetTokenModel.token == token).update(
            {"used": True, "used_at": datetime.utcnow()}, synchronize_session=False
        )
        self.session.flush()

    def _get_or_create_role(self, role: RoleName) -> RoleModel:
        model = self.session.query(RoleModel).filter(RoleModel.role_name == role.value).first()
        if not model:
            model = RoleModel(role_name=role.value)
            self.session.add(model)
            self.session.flush()
        return model

    def _update_model_from_entity(self, model: UserModel, user: User) -> None:
        model.email = user.email.lower()
        model.username = user.username
        model.hashed_password = user.hashed_password
        model.first_name = user.first_name
        model.last_name = user.last_name
        model.phone = user.phone
        model.birthdate = user.birthdate
        model.headquarter_id = user.headquarter_id.value if user.headquarter_id else None
        model.profile_images_id = user.profile_image_url
        model.roles = [self._get_or_create_role(role) for role in user.roles]

    def _map_to_entity(self, model: UserModel) -> User:
        known = {role.value for role in RoleName}
        return User(
            id=UserId(model.id),
            email=model.email,
            hashed_password=model.hashed_password,
            username=model.username,
            first_name=model.first_name,
            last_name=model.last_name,
            phone=model.phone,
            birthdate=model.birthdate,
            headquarter_id=HeadquartersId(model.headquarter_id) if model.headquarter_id else None,
            profile_image_url=model.profile_images_id,
            roles=[RoleName(role.role_name) for role in model.roles if role.role_name in known],
            created_at=model.created_at,
        )
