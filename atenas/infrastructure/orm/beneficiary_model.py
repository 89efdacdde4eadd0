"""Beneficiary and evaluation ORM models"""

import uuid

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Float, JSON, ForeignKey, Uuid
from sqlalchemy.sql import func

from ...db.models import Base


class BeneficiaryModel(Base):
    __tablename__ = 'beneficiary'

    beneficiary_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    headquarters_id = Column(Uuid, ForeignKey('headquarters.headquarters_id'), nullable=False, index=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    birth_date = Column(Date, nullable=False)
    category = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    registry_date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default='activo')
    sex = Column(String, nullable=True)
    performance = Column(Float, nullable=True)
    attendance = Column(Float, nullable=True)
    guardian = Column(String(100), nullable=True)
    address = Column(String(200), nullable=True)
    emergency_contact = Column(String, nullable=True)
    medical_info = Column(String(500), nullable=True)
    observation = Column(Text, nullable=True)
    photo_url = Column(String, nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class BeneficiaryProjectModel(Base):
    __tablename__ = 'beneficiaries_project'

    beneficiary_id = Column(Uuid, ForeignKey('beneficiary.beneficiary_id', ondelete='CASCADE'), primary_key=True)
    project_id = Column(Uuid, ForeignKey('project.project_id', ondelete='CASCADE'), primary_key=True)


class EvaluationModel(Base):
    __tablename__ = 'evaluation'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime, server_default=func.now())
    anthropometric_detail = Column(JSON, nullable=True)
    technical_tactic_detail = Column(JSON, nullable=True)
    emotional_detail = Column(JSON, nullable=True)


class BeneficiaryEvaluationModel(Base):
    __tablename__ = 'beneficiary_evaluation'

    id = Column(Integer, primary_key=True, autoincrement=True)
    beneficiary_id = Column(Uuid, ForeignKey('beneficiary.beneficiary_id', ondelete='CASCADE'), nullable=False, index=True)
    evaluation_id = Column(Uuid, ForeignKey('evaluation.id', ondelete='CASCADE'), nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now())
