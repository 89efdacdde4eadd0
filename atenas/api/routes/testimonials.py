"""Testimonial routes"""

import logging
from datetime import date
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ...api.dependencies import get_current_user, get_current_admin_user
from ...application.dtos.content_dtos import CreateTestimonialDto, TestimonialDto
from ...db.database import get_db
from ...domain.entities.user import User
from ...domain.enums import TestimonialStatus
from ...infrastructure.orm.content_model import TestimonialModel
from ...infrastructure.orm.user_model import UserModel

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_dto(model: TestimonialModel, author: UserModel = None) -> TestimonialDto:
    author_name = None
    if author:
        author_name = " ".join(part for part in (author.first_name, author.last_name) if part) or author.username
    return TestimonialDto(
        testimonial_id=model.testimonial_id,
        title=model.title,
        content=model.content,
        rating=model.rating,
        status=model.status,
        approve=model.approve,
        date=model.date,
        user_id=model.user_id,
        author_name=author_name,
        author_photo=author.profile_images_id if author else None,
    )


def _get_or_404(db: Session, testimonial_id: UUID) -> TestimonialModel:
    model = db.query(TestimonialModel).filter(TestimonialModel.testimonial_id == testimonial_id).first()
    if not model:
        raise HTTPException(status_code=404, detail="Testimonial not found")
    return model


@router.get("/", response_model=List[TestimonialDto])
async def list_approved_testimonials(db: Session = Depends(get_db)):
    """Approved testimonials with their author"""
    rows = (
        db.query(TestimonialModel, UserModel)
        .outerjoin(UserModel, UserModel.id == TestimonialModel.user_id)
        .filter(TestimonialModel.status == TestimonialStatus.APPROVED.value)
        .order_by(TestimonialModel.date.desc())
        .all()
    )
    return [_to_dto(testimonial, author) for testimonial, author in rows]


@router.get("/all", response_model=List[TestimonialDto])
async def list_all_testimonials(
    admin_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    rows = (
        db.query(TestimonialModel, UserModel)
        .outerjoin(UserModel, UserModel.id == TestimonialModel.user_id)
        .order_by(TestimonialModel.date.desc())
        .all()
    )
    return [_to_dto(testimonial, author) for testimonial, author in rows]


@router.post("/", response_model=TestimonialDto, status_code=status.HTTP_201_CREATED)
async def create_testimonial(
    request: CreateTestimonialDto,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Submit a testimonial; it stays pending until an admin approves it"""
    model = TestimonialModel(
        user_id=current_user.id.value,
        beneficiary_id=request.beneficiary_id,
        title=request.title,
        content=request.content,
        rating=request.rating,
        status=TestimonialStatus.PENDING.value,
        approve=False,
        date=date.today(),
    )
    try:
        db.add(model)
        db.commit()
        db.refresh(model)
    except Exception as e:
        db.rollback()
        logger.error("Testimonial creation failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to create testimonial: {e}")
    return _to_dto(model)


def _moderate(db: Session, testimonial_id: UUID, new_status: TestimonialStatus) -> TestimonialDto:
    model = _get_or_404(db, testimonial_id)
    model.status = new_status.value
    model.approve = new_status == TestimonialStatus.APPROVED
    db.commit()
    db.refresh(model)
    logger.info("Testimonial %s marked %s", testimonial_id, new_status.value)
    return _to_dto(model)


@router.patch("/{testimonial_id}/approve", response_model=TestimonialDto)
async def approve_testimonial(
    testimonial_id: UUID,
    admin_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    return _moderate(db, testimonial_id, TestimonialStatus.APPROVED)


@router.patch("/{testimonial_id}/reject", response_model=TestimonialDto)
async def reject_testimonial(
    testimonial_id: UUID,
    admin_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    return _moderate(db, testimonial_id, TestimonialStatus.REJECTED)


@router.delete("/{testimonial_id}")
async def delete_testimonial(
    testimonial_id: UUID,
    admin_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    db.delete(_get_or_404(db, testimonial_id))
    db.commit()
    return {"message": "Testimonial deleted successfully"}
