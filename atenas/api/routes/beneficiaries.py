"""Beneficiary routes"""

import logging
import os
import time
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile, File, status

from ...api.dependencies import get_unit_of_work, require_roles, get_storage_service, headquarters_scope
from ...application.dtos.beneficiary_dtos import CreateBeneficiaryDto, UpdateBeneficiaryDto, BeneficiaryDto
from ...application.dtos.evaluation_dtos import EvaluationDto
from ...core.config import settings
from ...domain.entities.beneficiary import Beneficiary
from ...domain.entities.user import User
from ...domain.enums import RoleName
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import BeneficiaryId, HeadquartersId
from ...infrastructure.external_services.storage_service import StorageService

logger = logging.getLogger(__name__)

router = APIRouter()

beneficiary_readers = require_roles(RoleName.DIRECTOR, RoleName.DIRECTOR_SEDE, RoleName.ENTRENADOR)
beneficiary_managers = require_roles(RoleName.DIRECTOR, RoleName.DIRECTOR_SEDE)


def _check_scope(scope: Optional[HeadquartersId], headquarters_id: HeadquartersId) -> None:
    if scope and scope != headquarters_id:
        raise HTTPException(status_code=403, detail="Beneficiary belongs to another headquarters")


async def _get_scoped(unit_of_work: IUnitOfWork, user: User, beneficiary_id: UUID) -> Beneficiary:
    beneficiary = await unit_of_work.beneficiaries.get_by_id(BeneficiaryId(beneficiary_id))
    if not beneficiary:
        raise HTTPException(status_code=404, detail="Beneficiary not found")
    _check_scope(await headquarters_scope(unit_of_work, user), beneficiary.headquarters_id)
    return beneficiary


async def _list(unit_of_work: IUnitOfWork, user: User, headquarters_id: Optional[UUID] = None, **filters):
    async with unit_of_work:
        scope = await headquarters_scope(unit_of_work, user)
        if headquarters_id:
            _check_scope(scope, HeadquartersId(headquarters_id))
            scope = HeadquartersId(headquarters_id)
        beneficiaries = await unit_of_work.beneficiaries.list(headquarters_id=scope, **filters)
    return [BeneficiaryDto.from_entity(b) for b in beneficiaries]


@router.get("/", response_model=List[BeneficiaryDto])
async def list_beneficiaries(
    search: Optional[str] = None,
    headquarters_id: Optional[UUID] = None,
    category: Optional[str] = None,
    status: Optional[str] = None,
    current_user: User = Depends(beneficiary_readers),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    return await _list(
        unit_of_work, current_user, headquarters_id, search=search, category=category, status=status
    )


@router.get("/low-performance", response_model=List[BeneficiaryDto])
async def low_performance_beneficiaries(
    threshold: float = Query(60, ge=0, le=100),
    headquarters_id: Optional[UUID] = None,
    current_user: User = Depends(beneficiary_readers),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    return await _list(unit_of_work, current_user, headquarters_id, performance_below=threshold)


@router.get("/low-attendance", response_model=List[BeneficiaryDto])
async def low_attendance_beneficiaries(
    threshold: float = Query(80, ge=0, le=100),
    headquarters_id: Optional[UUID] = None,
    current_user: User = Depends(beneficiary_readers),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    return await _list(unit_of_work, current_user, headquarters_id, attendance_below=threshold)


@router.get("/stats")
async def beneficiary_stats(
    current_user: User = Depends(beneficiary_readers),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Counts by headquarters, category and status"""
    async with unit_of_work:
        scope = await headquarters_scope(unit_of_work, current_user)
        by_headquarters = await unit_of_work.beneficiaries.count_by("headquarters_id", scope)
        by_category = await unit_of_work.beneficiaries.count_by("category", scope)
        by_status = await unit_of_work.beneficiaries.count_by("status", scope)
    return {
        "total": sum(by_status.values()),
        "by_headquarters": by_headquarters,
        "by_category": by_category,
        "by_status": by_status,
    }


@router.get("/{beneficiary_id}", response_model=BeneficiaryDto)
async def get_beneficiary(
    beneficiary_id: UUID,
    current_user: User = Depends(beneficiary_readers),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    async with unit_of_work:
        beneficiary = await _get_scoped(unit_of_work, current_user, beneficiary_id)
    return BeneficiaryDto.from_entity(beneficiary)


@router.post("/", response_model=BeneficiaryDto, status_code=status.HTTP_201_CREATED)
async def create_beneficiary(
    request: CreateBeneficiaryDto,
    current_user: User = Depends(beneficiary_managers),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    fields = request.model_dump()
    fields["headquarters_id"] = HeadquartersId(request.headquarters_id)
    try:
        async with unit_of_work:
            _check_scope(await headquarters_scope(unit_of_work, current_user), fields["headquarters_id"])
            if not await unit_of_work.headquarters.get_by_id(fields["headquarters_id"]):
                raise HTTPException(status_code=404, detail="Headquarters not found")
            beneficiary = Beneficiary.create(**fields)
            await unit_of_work.beneficiaries.add(beneficiary)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info("Created beneficiary %s in headquarters %s", beneficiary.id, beneficiary.headquarters_id)
    return BeneficiaryDto.from_entity(beneficiary)


@router.put("/{beneficiary_id}", response_model=BeneficiaryDto)
async def update_beneficiary(
    beneficiary_id: UUID,
    request: UpdateBeneficiaryDto,
    current_user: User = Depends(beneficiary_managers),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    fields = request.model_dump(exclude_unset=True)
    if fields.get("headquarters_id"):
        fields["headquarters_id"] = HeadquartersId(fields["headquarters_id"])
    try:
        async with unit_of_work:
            beneficiary = await _get_scoped(unit_of_work, current_user, beneficiary_id)
            if fields.get("headquarters_id"):
                _check_scope(await headquarters_scope(unit_of_work, current_user), fields["headquarters_id"])
            beneficiary.update(**fields)
            await unit_of_work.beneficiaries.update(beneficiary)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return BeneficiaryDto.from_entity(beneficiary)


@router.delete("/{beneficiary_id}")
async def delete_beneficiary(
    beneficiary_id: UUID,
    current_user: User = Depends(beneficiary_managers),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    async with unit_of_work:
        beneficiary = await _get_scoped(unit_of_work, current_user, beneficiary_id)
        await unit_of_work.beneficiaries.delete(beneficiary.id)
    return {"message": "Beneficiary deleted successfully"}


@router.post("/{beneficiary_id}/photo", response_model=BeneficiaryDto)
async def upload_beneficiary_photo(
    beneficiary_id: UUID,
    file: UploadFile = File(...),
    current_user: User = Depends(beneficiary_managers),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    storage_service: StorageService = Depends(get_storage_service)
):
    if file.content_type not in settings.ALLOWED_IMAGE_TYPES:
        raise HTTPException(status_code=400, detail=f"Unsupported image type: {file.content_type}")
    data = await file.read()
    if len(data) > settings.MAX_FILE_SIZE:
        raise HTTPException(status_code=400, detail="File too large")

    extension = os.path.splitext(file.filename or "")[1].lstrip(".").lower() or "jpg"
    object_name = f"beneficiaries/{beneficiary_id}-{int(time.time() * 1000)}.{extension}"

    async with unit_of_work:
        beneficiary = await _get_scoped(unit_of_work, current_user, beneficiary_id)
        try:
            url = await storage_service.upload_file(data, object_name, file.content_type)
        except RuntimeError as e:
            logger.error("Beneficiary photo upload failed: %s", e)
            raise HTTPException(status_code=500, detail=f"Failed to upload photo: {e}")
        beneficiary.photo_url = url
        await unit_of_work.beneficiaries.update(beneficiary)
    return BeneficiaryDto.from_entity(beneficiary)


@router.get("/{beneficiary_id}/evaluations", response_model=List[EvaluationDto])
async def list_beneficiary_evaluations(
    beneficiary_id: UUID,
    current_user: User = Depends(beneficiary_readers),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    async with unit_of_work:
        beneficiary = await _get_scoped(unit_of_work, current_user, beneficiary_id)
        evaluations = await unit_of_work.evaluations.list_by_beneficiary(beneficiary.id)
    return [EvaluationDto.from_entity(e) for e in evaluations]
