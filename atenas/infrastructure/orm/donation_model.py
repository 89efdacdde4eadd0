"""Donation and Bold transaction ORM models"""

import uuid

from sqlalchemy import Column, String, Text, Date, DateTime, Numeric, JSON, ForeignKey, Uuid
from sqlalchemy.sql import func

from ...db.models import Base


class DonationModel(Base):
    __tablename__ = 'donation'

    donation_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('user.id', ondelete='SET NULL'), nullable=True, index=True)
    project_id = Column(Uuid, ForeignKey('project.project_id'), nullable=False, index=True)
    amount = Column(Numeric(14, 2), nullable=False)
    currency = Column(String(3), nullable=False, default='COP')
    date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default='pending')
    pay_method = Column(String, nullable=True)
    approve_code = Column(String, nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class BoldTransactionModel(Base):
    __tablename__ = 'bold_transactions'

    bold_transaction_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    order_id = Column(String, unique=True, index=True, nullable=False)
    user_id = Column(Uuid, ForeignKey('user.id', ondelete='SET NULL'), nullable=True, index=True)
    project_id = Column(Uuid, ForeignKey('project.project_id', ondelete='SET NULL'), nullable=True)
    donation_id = Column(Uuid, ForeignKey('donation.donation_id', ondelete='SET NULL'), nullable=True)
    amount = Column(Numeric(14, 2), nullable=False)
    currency = Column(String(3), nullable=False, default='COP')
    status = Column(String(20), nullable=False, default='PENDING')
    payment_method = Column(String, nullable=True)
    transaction_id = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    integrity_signature = Column(String, nullable=True)
    webhook_payload = Column(JSON, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
