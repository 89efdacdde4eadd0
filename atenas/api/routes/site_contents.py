"""Site content routes: images and videos placed on the public pages"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Form, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from ...api.dependencies import get_current_admin_user, get_storage_service
from ...application.dtos.content_dtos import SiteContentDto, UpdateSiteContentDto
from ...core.config import settings
from ...db.database import get_db
from ...domain.entities.user import User
from ...infrastructure.orm.content_model import SiteContentModel
from ...infrastructure.external_services.storage_service import (
    StorageService, timestamped_path, public_object_url,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_dto(model: SiteContentModel) -> SiteContentDto:
    public_url = model.video_url
    if model.bucket_path:
        public_url = public_object_url(model.bucket_path, settings.MINIO_GALLERY_BUCKET)
    return SiteContentDto(
        content_id=model.content_id,
        content_key=model.content_key,
        title=model.title,
        description=model.description,
        category=model.category,
        content_type=model.content_type,
        page_section=model.page_section,
        bucket_path=model.bucket_path,
        video_url=model.video_url,
        display_order=model.display_order,
        is_active=model.is_active,
        metadata=model.content_metadata,
        public_url=public_url,
        created_at=model.created_at,
    )


def _get_or_404(db: Session, content_id: UUID) -> SiteContentModel:
    model = db.query(SiteContentModel).filter(SiteContentModel.content_id == content_id).first()
    if not model:
        raise HTTPException(status_code=404, detail="Content not found")
    return model


def _ordered(query):
    return query.order_by(SiteContentModel.display_order.asc(), SiteContentModel.created_at.desc())


def _file_metadata(file: UploadFile, size: int) -> dict:
    return {"filename": file.filename, "size": size, "mime_type": file.content_type}


@router.get("/", response_model=List[SiteContentDto])
async def list_active_contents(db: Session = Depends(get_db)):
    query = db.query(SiteContentModel).filter(SiteContentModel.is_active.is_(True))
    return [_to_dto(model) for model in _ordered(query).all()]


@router.get("/all", response_model=List[SiteContentDto])
async def list_all_contents(
    admin_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    return [_to_dto(model) for model in _ordered(db.query(SiteContentModel)).all()]


@router.get("/stats")
async def site_content_stats(
    admin_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    total = db.query(SiteContentModel).count()
    active = db.query(SiteContentModel).filter(SiteContentModel.is_active.is_(True)).count()
    by_section = (
        db.query(SiteContentModel.page_section, func.count(SiteContentModel.content_id))
        .group_by(SiteContentModel.page_section)
        .all()
    )
    by_type = (
        db.query(SiteContentModel.content_type, func.count(SiteContentModel.content_id))
        .group_by(SiteContentModel.content_type)
        .all()
    )
    return {
        "total": total,
        "active": active,
        "by_section": {section: count for section, count in by_section},
        "by_type": {content_type: count for content_type, count in by_type},
    }


@router.get("/key/{content_key}", response_model=SiteContentDto)
async def get_content_by_key(content_key: str, db: Session = Depends(get_db)):
    model = (
        db.query(SiteContentModel)
        .filter(SiteContentModel.content_key == content_key, SiteContentModel.is_active.is_(True))
        .first()
    )
    if not model:
        raise HTTPException(status_code=404, detail="Content not found")
    return _to_dto(model)


@router.get("/section/{page_section}", response_model=List[SiteContentDto])
async def list_contents_by_section(page_section: str, db: Session = Depends(get_db)):
    query = db.query(SiteContentModel).filter(
        SiteContentModel.page_section == page_section,
        SiteContentModel.is_active.is_(True),
    )
    return [_to_dto(model) for model in _ordered(query).all()]


@router.post("/", response_model=SiteContentDto, status_code=status.HTTP_201_CREATED)
async def create_content(
    file: UploadFile = File(...),
    content_key: str = Form(...),
    title: str = Form(...),
    page_section: str = Form(...),
    content_type: str = Form("image"),
    description: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    video_url: Optional[str] = Form(None),
    display_order: int = Form(0),
    admin_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db),
    storage_service: StorageService = Depends(get_storage_service)
):
    """Upload the file, then insert the row; the object is removed if the insert fails"""
    if db.query(SiteContentModel).filter(SiteContentModel.content_key == content_key).first():
        raise HTTPException(status_code=400, detail=f"Content key '{content_key}' already exists")

    data = await file.read()
    if len(data) > settings.MAX_FILE_SIZE:
        raise HTTPException(status_code=400, detail="File too large")

    object_name = timestamped_path(f"sites-content/{page_section}/{content_key}", file.filename)
    try:
        await storage_service.upload_file(
            data, object_name, file.content_type or "application/octet-stream", bucket=settings.MINIO_GALLERY_BUCKET
        )
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))

    model = SiteContentModel(
        content_key=content_key,
        title=title,
        description=description,
        category=category,
        content_type=content_type,
        page_section=page_section,
        bucket_path=object_name,
        video_url=video_url,
        display_order=display_order,
        content_metadata=_file_metadata(file, len(data)),
        uploaded_by=admin_user.id.value,
    )
    try:
        db.add(model)
        db.commit()
        db.refresh(model)
    except Exception as e:
        db.rollback()
        await storage_service.delete_file(object_name, settings.MINIO_GALLERY_BUCKET)
        logger.error("Site content insert failed, removed %s: %s", object_name, e)
        raise HTTPException(status_code=500, detail=f"Failed to create content: {e}")
    return _to_dto(model)


@router.put("/{content_id}", response_model=SiteContentDto)
async def update_content(
    content_id: UUID,
    request: UpdateSiteContentDto,
    admin_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    model = _get_or_404(db, content_id)
    for name, value in request.model_dump(exclude_unset=True).items():
        setattr(model, name, value)
    db.commit()
    db.refresh(model)
    return _to_dto(model)


@router.put("/{content_id}/file", response_model=SiteContentDto)
async def replace_content_file(
    content_id: UUID,
    file: UploadFile = File(...),
    admin_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db),
    storage_service: StorageService = Depends(get_storage_service)
):
    model = _get_or_404(db, content_id)
    data = await file.read()
    if len(data) > settings.MAX_FILE_SIZE:
        raise HTTPException(status_code=400, detail="File too large")

    object_name = timestamped_path(f"sites-content/{model.page_section}/{model.content_key}", file.filename)
    try:
        await storage_service.upload_file(
            data, object_name, file.content_type or "application/octet-stream", bucket=settings.MINIO_GALLERY_BUCKET
        )
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))

    previous = model.bucket_path
    model.bucket_path = object_name
    model.content_metadata = _file_metadata(file, len(data))
    db.commit()
    db.refresh(model)
    if previous:
        await storage_service.delete_file(previous, settings.MINIO_GALLERY_BUCKET)
    return _to_dto(model)


@router.delete("/{content_id}")
async def delete_content(
    content_id: UUID,
    admin_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db),
    storage_service: StorageService = Depends(get_storage_service)
):
    model = _get_or_404(db, content_id)
    bucket_path = model.bucket_path
    db.delete(model)
    db.commit()
    if bucket_path:
        await storage_service.delete_file(bucket_path, settings.MINIO_GALLERY_BUCKET)
    return {"message": "Content deleted successfully"}
