"""Headquarters ORM models"""

import uuid

from sqlalchemy import Column, String, DateTime, ForeignKey, Uuid
from sqlalchemy.sql import func

from ...db.models import Base


class HeadquartersModel(Base):
    __tablename__ = 'headquarters'

    headquarters_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    address = Column(String, nullable=True)
    city = Column(String, nullable=True)
    status = Column(String(20), nullable=False, default='active')
    image_url = Column(String, nullable=True)
    user_id = Column(Uuid, ForeignKey('user.id', ondelete='SET NULL'), nullable=True, index=True)
    created_at = Column(DateTime, server_default=func.now())


class HeadquartersProjectModel(Base):
    __tablename__ = 'headquarters_project'

    headquarters_id = Column(Uuid, ForeignKey('headquarters.headquarters_id', ondelete='CASCADE'), primary_key=True)
    project_id = Column(Uuid, ForeignKey('project.project_id', ondelete='CASCADE'), primary_key=True)
    assigned_at = Column(DateTime, server_default=func.now())
