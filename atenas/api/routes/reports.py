"""Report export routes"""

import logging
from io import BytesIO
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from ...api.dependencies import get_unit_of_work, require_roles, get_report_service
from ...application.use_cases.export_reports import ExportReportUseCase, ExportedReport
from ...domain.entities.user import User
from ...domain.enums import RoleName, ReportKind, ReportFormat
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import ProjectId
from ...infrastructure.external_services.report_service import ReportService

logger = logging.getLogger(__name__)

router = APIRouter()

report_viewers = require_roles(RoleName.ADMIN, RoleName.DIRECTOR)


def _stream(report: ExportedReport) -> StreamingResponse:
    return StreamingResponse(
        BytesIO(report.content),
        media_type=report.media_type,
        headers={"Content-Disposition": f'attachment; filename="{report.filename}"'},
    )


@router.get("/consolidated")
async def consolidated_report(
    current_user: User = Depends(report_viewers),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    report_service: ReportService = Depends(get_report_service)
):
    """One workbook with a summary sheet and every report"""
    try:
        report = await ExportReportUseCase(unit_of_work, report_service).consolidated()
    except Exception as e:
        logger.error("Consolidated report failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to generate report: {e}")
    return _stream(report)


@router.get("/{kind}")
async def export_report(
    kind: ReportKind,
    format: ReportFormat = ReportFormat.EXCEL,
    project_id: Optional[UUID] = None,
    current_user: User = Depends(report_viewers),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    report_service: ReportService = Depends(get_report_service)
):
    try:
        report = await ExportReportUseCase(unit_of_work, report_service).execute(
            kind, format, ProjectId(project_id) if project_id else None
        )
    except Exception as e:
        logger.error("Report %s (%s) failed: %s", kind.value, format.value, e)
        raise HTTPException(status_code=500, detail=f"Failed to generate report: {e}")
    return _stream(report)
