"""Gallery routes"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Form, status
from sqlalchemy.orm import Session

from ...api.dependencies import get_current_admin_user, get_storage_service
from ...application.dtos.content_dtos import GalleryItemDto, UpdateGalleryItemDto, ReorderGalleryDto
from ...core.config import settings
from ...db.database import get_db
from ...domain.entities.user import User
from ...domain.enums import GalleryItemType
from ...infrastructure.orm.content_model import GalleryItemModel
from ...infrastructure.external_services.storage_service import (
    StorageService, timestamped_path, public_object_url,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_dto(model: GalleryItemModel) -> GalleryItemDto:
    return GalleryItemDto(
        gallery_item_id=model.gallery_item_id,
        title=model.title,
        description=model.description,
        category=model.category,
        type=model.type,
        bucket_path=model.bucket_path,
        video_url=model.video_url,
        is_active=model.is_active,
        display_order=model.display_order,
        public_url=public_object_url(model.bucket_path, settings.MINIO_GALLERY_BUCKET) if model.bucket_path else model.video_url,
        created_at=model.created_at,
    )


def _get_or_404(db: Session, item_id: UUID) -> GalleryItemModel:
    model = db.query(GalleryItemModel).filter(GalleryItemModel.gallery_item_id == item_id).first()
    if not model:
        raise HTTPException(status_code=404, detail="Gallery item not found")
    return model


def _ordered(query):
    return query.order_by(GalleryItemModel.display_order.asc(), GalleryItemModel.created_at.desc())


@router.get("/", response_model=List[GalleryItemDto])
async def list_gallery(category: Optional[str] = None, db: Session = Depends(get_db)):
    """Active items, by display order then newest"""
    query = db.query(GalleryItemModel).filter(GalleryItemModel.is_active.is_(True))
    if category:
        query = query.filter(GalleryItemModel.category == category)
    return [_to_dto(model) for model in _ordered(query).all()]


@router.get("/all", response_model=List[GalleryItemDto])
async def list_all_gallery(
    admin_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    return [_to_dto(model) for model in _ordered(db.query(GalleryItemModel)).all()]


@router.post("/", response_model=GalleryItemDto, status_code=status.HTTP_201_CREATED)
async def upload_gallery_item(
    file: UploadFile = File(...),
    title: str = Form(...),
    description: Optional[str] = Form(None),
    category: str = Form("general"),
    type: GalleryItemType = Form(GalleryItemType.PHOTO),
    video_url: Optional[str] = Form(None),
    display_order: int = Form(0),
    admin_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db),
    storage_service: StorageService = Depends(get_storage_service)
):
    data = await file.read()
    if len(data) > settings.MAX_FILE_SIZE:
        raise HTTPException(status_code=400, detail="File too large")

    object_name = timestamped_path(f"gallery/{category}", file.filename)
    try:
        await storage_service.upload_file(
            data, object_name, file.content_type or "application/octet-stream", bucket=settings.MINIO_GALLERY_BUCKET
        )
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))

    model = GalleryItemModel(
        title=title,
        description=description,
        category=category,
        type=type.value,
        bucket_path=object_name,
        video_url=video_url,
        display_order=display_order,
        uploaded_by=admin_user.id.value,
    )
    try:
        db.add(model)
        db.commit()
        db.refresh(model)
    except Exception as e:
        db.rollback()
        await storage_service.delete_file(object_name, settings.MINIO_GALLERY_BUCKET)
        logger.error("Gallery item insert failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to create gallery item: {e}")
    logger.info("Uploaded gallery item %s", object_name)
    return _to_dto(model)


@router.put("/reorder", response_model=List[GalleryItemDto])
async def reorder_gallery(
    request: ReorderGalleryDto,
    admin_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    models = []
    for item in request.items:
        model = _get_or_404(db, item.gallery_item_id)
        model.display_order = item.display_order
        models.append(model)
    db.commit()
    return [_to_dto(model) for model in models]


@router.put("/{item_id}", response_model=GalleryItemDto)
async def update_gallery_item(
    item_id: UUID,
    request: UpdateGalleryItemDto,
    admin_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    model = _get_or_404(db, item_id)
    for name, value in request.model_dump(exclude_unset=True).items():
        setattr(model, name, value)
    db.commit()
    db.refresh(model)
    return _to_dto(model)


@router.patch("/{item_id}/toggle", response_model=GalleryItemDto)
async def toggle_gallery_item(
    item_id: UUID,
    admin_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    model = _get_or_404(db, item_id)
    model.is_active = not model.is_active
    db.commit()
    db.refresh(model)
    return _to_dto(model)


@router.delete("/{item_id}")
async def delete_gallery_item(
    item_id: UUID,
    admin_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db),
    storage_service: StorageService = Depends(get_storage_service)
):
    model = _get_or_404(db, item_id)
    bucket_path = model.bucket_path
    db.delete(model)
    db.commit()
    if bucket_path:
        await storage_service.delete_file(bucket_path, settings.MINIO_GALLERY_BUCKET)
    return {"message": "Gallery item deleted successfully"}
