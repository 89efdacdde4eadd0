"""Excel (openpyxl) and PDF (fpdf2) report rendering"""

import io
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Union

from fpdf import FPDF
from fpdf.enums import XPos, YPos
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter


MONTHS_ES = [
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
]

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MEDIA_TYPE = "application/pdf"


def format_currency(amount) -> str:
    """Colombian pesos without decimals: $ 1.500.000"""
    whole = int(Decimal(str(amount or 0)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    sign = "-" if whole < 0 else ""
    return f"{sign}$ " + f"{abs(whole):,}".replace(",", ".")


def format_date(value: Optional[Union[date, datetime, str]]) -> str:
    """Long Spanish date: 8 de diciembre de 2024"""
    if not value:
        return ""
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    return f"{value.day} de {MONTHS_ES[value.month - 1]} de {value.year}"


def _latin1_safe(text) -> str:
    """Core PDF fonts are latin-1 only"""
    text = "" if text is None else str(text)
    for original, plain in {"“": '"', "”": '"', "‘": "'", "’": "'", "–": "-", "—": "-", "…": "..."}.items():
        text = text.replace(original, plain)
    return text.encode("latin-1", "replace").decode("latin-1")


def _cell_value(value):
    if value is None:
        return ""
    if isinstance(value, (int, float)):
        return value
    return str(value)


@dataclass
class ReportTable:
    sheet: str
    title: str
    headers: List[str]
    widths: List[int]
    rows: List[list] = field(default_factory=list)
    footer: List[str] = field(default_factory=list)
    # PDF tables can drop wide columns that only make sense in a spreadsheet
    pdf_columns: Optional[List[int]] = None


def donations_table(donations: List[dict]) -> ReportTable:
    total = sum(Decimal(str(d["amount"] or 0)) for d in donations)
    return ReportTable(
        sheet="Donaciones",
        title="Reporte de Donaciones",
        headers=["ID", "Donante", "Monto", "Proyecto", "Fecha", "Estado"],
        widths=[8, 25, 15, 30, 20, 12],
        rows=[
            [d["id"], d["donor"], format_currency(d["amount"]), d["project"], format_date(d["date"]), d["status"]]
            for d in donations
        ],
        footer=[f"Total: {format_currency(total)}"],
    )


def users_table(users: List[dict]) -> ReportTable:
    return ReportTable(
        sheet="Usuarios",
        title="Reporte de Usuarios",
        headers=["ID", "Nombre", "Email", "Rol", "Estado", "Fecha Registro"],
        widths=[8, 25, 30, 12, 12, 20],
        rows=[
            [u["id"], u["name"], u["email"], u["role"], u["status"], format_date(u["date"])]
            for u in users
        ],
        footer=[f"Total Usuarios: {len(users)}"],
    )


def projects_table(projects: List[dict]) -> ReportTable:
    total_goal = sum(Decimal(str(p["goal"] or 0)) for p in projects)
    total_raised = sum(Decimal(str(p["raised"] or 0)) for p in projects)
    return ReportTable(
        sheet="Proyectos",
        title="Reporte de Proyectos",
        headers=["ID", "Nombre", "Categoría", "Meta", "Recaudado", "Progreso", "Estado"],
        widths=[8, 30, 15, 15, 15, 12, 12],
        rows=[
            [
                p["id"], p["name"], p["category"] or "", format_currency(p["goal"]),
                format_currency(p["raised"]), f"{p['progress']}%", p["status"],
            ]
            for p in projects
        ],
        footer=[
            f"Total Meta: {format_currency(total_goal)}",
            f"Total Recaudado: {format_currency(total_raised)}",
        ],
    )


def beneficiaries_table(beneficiaries: List[dict]) -> ReportTable:
    return ReportTable(
        sheet="Beneficiarios",
        title="Reporte de Beneficiarios",
        headers=["ID", "Nombre", "Edad", "Categoría", "Sede", "Teléfono", "Estado", "Rendimiento"],
        widths=[30, 25, 8, 15, 30, 15, 12, 12],
        rows=[
            [
                b["id"], b["name"], b["age"] if b["age"] is not None else "N/A", b["category"],
                b["headquarters"], b["phone"], b["status"] or "activo",
                f"{b['performance']:g}%" if b["performance"] else "N/A",
            ]
            for b in beneficiaries
        ],
        footer=[f"Total Beneficiarios: {len(beneficiaries)}"],
        pdf_columns=[1, 2, 3, 6, 7],
    )


def summary_table(donations: List[dict], users: List[dict], projects: List[dict]) -> ReportTable:
    approved = [d for d in donations if d["status"] == "approved"]
    return ReportTable(
        sheet="Resumen",
        title="Resumen General",
        headers=["Indicador", "Valor"],
        widths=[30, 20],
        rows=[
            ["Generado", format_date(datetime.now())],
            ["Total donaciones", len(donations)],
            ["Donaciones aprobadas", len(approved)],
            ["Monto aprobado", format_currency(sum(Decimal(str(d["amount"])) for d in approved))],
            ["Total usuarios", len(users)],
            ["Total proyectos", len(projects)],
            ["Proyectos activos", len([p for p in projects if p["status"] == "active"])],
        ],
    )


class ReportService:

    def to_excel(self, tables: List[ReportTable]) -> bytes:
        workbook = Workbook()
        workbook.remove(workbook.active)
        for table in tables:
            sheet = workbook.create_sheet(title=table.sheet)
            sheet.append(table.headers)
            for cell in sheet[1]:
                cell.font = Font(bold=True, color="FFFFFF")
                cell.fill = PatternFill("solid", fgColor="2980B9")
            for row in table.rows:
                sheet.append([_cell_value(value) for value in row])
            for index, width in enumerate(table.widths, start=1):
                sheet.column_dimensions[get_column_letter(index)].width = width

        buffer = io.BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()

    def to_pdf(self, table: ReportTable) -> bytes:
        columns = table.pdf_columns or list(range(len(table.headers)))
        headers = [table.headers[i] for i in columns]
        widths = [table.widths[i] for i in columns]

        pdf = FPDF()
        pdf.add_page()
        pdf.set_font("Helvetica", "B", 18)
        pdf.cell(0, 10, _latin1_safe(table.title), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font("Helvetica", "", 10)
        pdf.cell(0, 8, _latin1_safe(f"Generado: {format_date(datetime.now())}"), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        # Scale spreadsheet widths to the printable page width
        scale = pdf.epw / sum(widths)
        col_widths = [w * scale for w in widths]

        pdf.set_font("Helvetica", "B", 8)
        pdf.set_fill_color(41, 128, 185)
        pdf.set_text_color(255, 255, 255)
        for header, width in zip(headers, col_widths):
            pdf.cell(width, 7, _latin1_safe(header), border=1, fill=True)
        pdf.ln()

        pdf.set_font("Helvetica", "", 8)
        pdf.set_text_color(0, 0, 0)
        pdf.set_fill_color(245, 245, 245)
        for number, row in enumerate(table.rows):
            values = [row[i] for i in columns]
            for value, width in zip(values, col_widths):
                text = _latin1_safe(value)
                # Truncate to the cell instead of wrapping
                while text and pdf.get_string_width(text) > width - 2:
                    text = text[:-1]
                pdf.cell(width, 6, text, border=1, fill=number % 2 == 1)
            pdf.ln()

        pdf.ln(4)
        pdf.set_font("Helvetica", "B", 12)
        for line in table.footer:
            pdf.cell(0, 7, _latin1_safe(line), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        return bytes(pdf.output())
