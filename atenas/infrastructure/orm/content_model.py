"""Public content ORM models: testimonials, gallery and site contents"""

import uuid

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Boolean, JSON, ForeignKey, Uuid
from sqlalchemy.sql import func

from ...db.models import Base


class TestimonialModel(Base):
    __tablename__ = 'testimonial'

    testimonial_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('user.id', ondelete='CASCADE'), nullable=True, index=True)
    beneficiary_id = Column(Uuid, ForeignKey('beneficiary.beneficiary_id', ondelete='SET NULL'), nullable=True)
    title = Column(String, nullable=True)
    content = Column(Text, nullable=False)
    rating = Column(Integer, nullable=True)
    status = Column(String(20), nullable=False, default='pending')
    approve = Column(Boolean, nullable=False, default=False)
    date = Column(Date, nullable=True)


class GalleryItemModel(Base):
    __tablename__ = 'gallery_items'

    gallery_item_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String, nullable=True)
    type = Column(String(10), nullable=False, default='photo')
    bucket_path = Column(String, nullable=True)
    thumbnail_path = Column(String, nullable=True)
    video_url = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    display_order = Column(Integer, nullable=False, default=0)
    uploaded_by = Column(Uuid, ForeignKey('user.id', ondelete='SET NULL'), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class SiteContentModel(Base):
    __tablename__ = 'site_contents'

    content_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    content_key = Column(String, unique=True, index=True, nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String, nullable=True)
    content_type = Column(String(20), nullable=False, default='image')
    page_section = Column(String, nullable=False, index=True)
    bucket_path = Column(String, nullable=True)
    thumbnail_path = Column(String, nullable=True)
    video_url = Column(String, nullable=True)
    display_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    # "metadata" is reserved on declarative classes
    content_metadata = Column('metadata', JSON, nullable=True)
    uploaded_by = Column(Uuid, ForeignKey('user.id', ondelete='SET NULL'), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
