"""User and role ORM models"""

import uuid

from sqlalchemy import Column, String, Date, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ...db.models import Base


class UserRoleModel(Base):
    __tablename__ = 'user_role'

    user_id = Column(Uuid, ForeignKey('user.id', ondelete='CASCADE'), primary_key=True)
    role_id = Column(Uuid, ForeignKey('role.role_id', ondelete='CASCADE'), primary_key=True)
    assigned_at = Column(DateTime, server_default=func.now())


class RoleModel(Base):
    __tablename__ = 'role'

    role_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    role_name = Column(String(50), unique=True, nullable=False)


class UserModel(Base):
    __tablename__ = 'user'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String, unique=True, index=True, nullable=False)
    username = Column(String(20), unique=True, index=True, nullable=True)
    hashed_password = Column(String, nullable=False)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    birthdate = Column(Date, nullable=True)
    # Plain column: headquarters.user_id already points back at user
    headquarter_id = Column(Uuid, index=True, nullable=True)
    profile_images_id = Column(String, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    roles = relationship('RoleModel', secondary='user_role', lazy='selectin')
