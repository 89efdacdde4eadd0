"""Testimonial, gallery and site content DTOs"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date as date_type, datetime
from uuid import UUID

from ...domain.enums import GalleryItemType


class CreateTestimonialDto(BaseModel):
    title: Optional[str] = None
    content: str = Field(min_length=1)
    rating: int = Field(ge=1, le=5)
    beneficiary_id: Optional[UUID] = None


class TestimonialDto(BaseModel):
    testimonial_id: UUID
    title: Optional[str] = None
    content: str
    rating: Optional[int] = None
    status: str
    approve: bool
    date: Optional[date_type] = None
    user_id: Optional[UUID] = None
    author_name: Optional[str] = None
    author_photo: Optional[str] = None


class UpdateGalleryItemDto(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    video_url: Optional[str] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class GalleryItemDto(BaseModel):
    gallery_item_id: UUID
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    type: GalleryItemType
    bucket_path: Optional[str] = None
    video_url: Optional[str] = None
    is_active: bool
    display_order: int
    public_url: Optional[str] = None
    created_at: Optional[datetime] = None


class ReorderItemDto(BaseModel):
    gallery_item_id: UUID
    display_order: int


class ReorderGalleryDto(BaseModel):
    items: List[ReorderItemDto] = Field(min_length=1)


class UpdateSiteContentDto(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    page_section: Optional[str] = None
    video_url: Optional[str] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class SiteContentDto(BaseModel):
    content_id: UUID
    content_key: str
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    content_type: str
    page_section: str
    bucket_path: Optional[str] = None
    video_url: Optional[str] = None
    display_order: int
    is_active: bool
    metadata: Optional[dict] = None
    public_url: Optional[str] = None
    created_at: Optional[datetime] = None
