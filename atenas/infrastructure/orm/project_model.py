"""Project ORM models"""

import uuid

from sqlalchemy import Column, String, Text, Date, DateTime, Numeric, ForeignKey, Uuid
from sqlalchemy.sql import func

from ...db.models import Base


class ProjectModel(Base):
    __tablename__ = 'project'

    project_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    category = Column(String, nullable=True)
    type = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    finance_goal = Column(Numeric(14, 2), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    status = Column(String(20), nullable=False, default='active')


class DonationReportModel(Base):
    __tablename__ = 'donation_report'

    donation_report_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id = Column(Uuid, ForeignKey('project.project_id', ondelete='CASCADE'), nullable=False)
    generated_at = Column(DateTime, server_default=func.now())
