"""Report export use case"""

import logging
import time
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ...domain.enums import ReportKind, ReportFormat
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import ProjectId
from ...infrastructure.external_services.report_service import (
    ReportService, donations_table, users_table, projects_table, beneficiaries_table, summary_table,
    XLSX_MEDIA_TYPE, PDF_MEDIA_TYPE,
)

logger = logging.getLogger(__name__)


@dataclass
class ExportedReport:
    content: bytes
    filename: str
    media_type: str


def report_filename(kind: str, extension: str) -> str:
    return f"reporte_{kind}_{int(time.time() * 1000)}.{extension}"


class ExportReportUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, report_service: ReportService):
        self.unit_of_work = unit_of_work
        self.report_service = report_service

    async def execute(
        self,
        kind: ReportKind,
        format: ReportFormat,
        project_id: Optional[ProjectId] = None,
    ) -> ExportedReport:
        builders = {
            ReportKind.DONATIONS: lambda: self._donation_rows(project_id),
            ReportKind.USERS: self._user_rows,
            ReportKind.PROJECTS: self._project_rows,
            ReportKind.BENEFICIARIES: self._beneficiary_rows,
        }
        tables = {
            ReportKind.DONATIONS: donations_table,
            ReportKind.USERS: users_table,
            ReportKind.PROJECTS: projects_table,
            ReportKind.BENEFICIARIES: beneficiaries_table,
        }

        async with self.unit_of_work:
            rows = await builders[kind]()
            if kind == ReportKind.DONATIONS and project_id:
                await self.unit_of_work.donations.record_report(project_id)

        table = tables[kind](rows)
        logger.info("Exporting %s report (%s, %d rows)", kind.value, format.value, len(rows))
        if format == ReportFormat.PDF:
            return ExportedReport(self.report_service.to_pdf(table), report_filename(kind.value, "pdf"), PDF_MEDIA_TYPE)
        return ExportedReport(self.report_service.to_excel([table]), report_filename(kind.value, "xlsx"), XLSX_MEDIA_TYPE)

    async def consolidated(self) -> ExportedReport:
        async with self.unit_of_work:
            donations = await self._donation_rows()
            users = await self._user_rows()
            projects = await self._project_rows()
            beneficiaries = await self._beneficiary_rows()

        content = self.report_service.to_excel([
            summary_table(donations, users, projects),
            donations_table(donations),
            users_table(users),
            projects_table(projects),
            beneficiaries_table(beneficiaries),
        ])
        return ExportedReport(content, report_filename("consolidado", "xlsx"), XLSX_MEDIA_TYPE)

    async def _donation_rows(self, project_id: Optional[ProjectId] = None) -> list:
        donations = await self.unit_of_work.donations.list(project_id=project_id)
        users = {u.id: u for u in await self.unit_of_work.users.list()}
        projects = {p.id: p for p in await self.unit_of_work.projects.list()}
        return [
            {
                "id": index,
                "donor": users[d.user_id].full_name if d.user_id in users else "Anónimo",
                "amount": d.amount,
                "project": projects[d.project_id].name if d.project_id in projects else "",
                "date": d.date,
                "status": d.status.value,
            }
            for index, d in enumerate(donations, start=1)
        ]

    async def _user_rows(self) -> list:
        users = await self.unit_of_work.users.list()
        return [
            {
                "id": index,
                "name": u.full_name,
                "email": u.email,
                "role": u.primary_role.value,
                "status": "completo" if u.has_completed_profile else "incompleto",
                "date": u.created_at,
            }
            for index, u in enumerate(users, start=1)
        ]

    async def _project_rows(self) -> list:
        projects = await self.unit_of_work.projects.list()
        raised = await self.unit_of_work.donations.raised_by_project([p.id for p in projects])
        rows = []
        for index, p in enumerate(projects, start=1):
            project_raised = raised.get(p.id, Decimal("0"))
            rows.append({
                "id": index,
                "name": p.name,
                "category": p.category,
                "goal": p.finance_goal or Decimal("0"),
                "raised": project_raised,
                "progress": p.progress(project_raised),
                "status": p.status.value,
            })
        return rows

    async def _beneficiary_rows(self) -> list:
        beneficiaries = await self.unit_of_work.beneficiaries.list()
        headquarters = {h.id: h.name for h in await self.unit_of_work.headquarters.list()}
        return [
            {
                "id": str(b.id.value),
                "name": b.full_name,
                "age": b.age,
                "category": b.category,
                "headquarters": headquarters.get(b.headquarters_id, str(b.headquarters_id.value)),
                "phone": b.phone,
                "status": b.status.value,
                "performance": b.performance,
            }
            for b in beneficiaries
        ]
