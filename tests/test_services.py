import base64
import hashlib
import hmac
import io
from datetime import date
from decimal import Decimal

import httpx
import pytest
from openpyxl import load_workbook

from atenas.domain.enums import BoldTransactionStatus
from atenas.infrastructure.external_services.bold_payment_service import BoldPaymentService
from atenas.infrastructure.external_services.email_service import EmailService
from atenas.infrastructure.external_services.geocoding_service import GeocodingService, cache_key
from atenas.infrastructure.external_services.report_service import (
    ReportService, donations_table, beneficiaries_table, format_currency, format_date,
)
from atenas.infrastructure.external_services.storage_service import safe_filename, timestamped_path


class TestBoldPaymentService:

    service = BoldPaymentService(api_key="pk_test", secret_key="s3cret")

    def test_integrity_signature(self):
        expected = hashlib.sha256(b"ATENAS-1-2" b"50000" b"COP" b"s3cret").hexdigest()
        assert self.service.generate_integrity_signature("ATENAS-1-2", "50000", "COP") == expected

    def test_signature_needs_secret(self):
        with pytest.raises(ValueError):
            BoldPaymentService(api_key="pk", secret_key="").generate_integrity_signature("o", "1", "COP")

    def test_checkout_config(self):
        config = self.service.build_checkout_config("ATENAS-1-2", "50000", "COP", "abc")
        assert config["apiKey"] == "pk_test"
        assert config["renderMode"] == "embedded"
        assert config["description"] == "Donación Fundación Atenas"

    def _sign(self, body: bytes) -> str:
        return hmac.new(b"s3cret", base64.b64encode(body), hashlib.sha256).hexdigest()

    def test_webhook_signature_verifies(self):
        body = b'{"status": "APPROVED"}'
        assert self.service.verify_webhook_signature(body, self._sign(body))

    def test_tampered_body_rejected(self):
        signature = self._sign(b'{"status": "APPROVED"}')
        assert not self.service.verify_webhook_signature(b'{"status": "DECLINED"}', signature)
        assert not self.service.verify_webhook_signature(b"{}", None)

    def test_parse_event_payload(self):
        event = self.service.parse_webhook({
            "type": "SALE_APPROVED",
            "data": {"payment_id": "pay-1", "payment_method": "PSE", "metadata": {"reference": "ATENAS-1-2"}},
        })
        assert event.order_id == "ATENAS-1-2"
        assert event.status == BoldTransactionStatus.APPROVED
        assert event.transaction_id == "pay-1"

    def test_parse_flat_payload(self):
        event = self.service.parse_webhook({"orderId": "ATENAS-1-2", "status": "rejected", "transactionId": 7})
        assert event.status == BoldTransactionStatus.DECLINED
        assert event.transaction_id == "7"

    def test_parse_rejects_unknown_event(self):
        with pytest.raises(ValueError):
            self.service.parse_webhook({"type": "SOMETHING", "data": {}})


class TestEmailService:

    async def test_unconfigured_smtp_skips_delivery(self, monkeypatch):
        service = EmailService()
        service.smtp_host = ""

        async def fail(msg):
            raise AssertionError("SMTP should not be contacted")

        monkeypatch.setattr(service, "_send_smtp_email", fail)
        assert await service.send_password_reset_email("ana@example.com", "tok") is False

    async def test_reset_email_links_to_frontend(self, monkeypatch):
        service = EmailService()
        service.smtp_host = "smtp.test"
        sent = []

        async def capture(msg):
            sent.append(msg)

        monkeypatch.setattr(service, "_send_smtp_email", capture)
        assert await service.send_password_reset_email("ana@example.com", "tok123", "Ana") is True
        [msg] = sent
        assert msg["To"] == "ana@example.com"
        body = msg.get_payload()[0].get_payload(decode=True).decode()
        assert f"{service.frontend_url}/reset-password?token=tok123" in body

    async def test_smtp_failure_returns_false(self, monkeypatch):
        service = EmailService()
        service.smtp_host = "smtp.test"

        async def refuse(msg):
            raise ConnectionRefusedError("down")

        monkeypatch.setattr(service, "_send_smtp_email", refuse)
        assert await service.send_email("ana@example.com", "Hola", "<p>hola</p>") is False


class TestGeocodingService:

    def _service(self, handler, cache):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return GeocodingService(client=client, cache=cache)

    def test_cache_key_is_normalised(self):
        assert cache_key("Calle 5", "CALI") == cache_key("calle 5", "cali") == "calle 5_cali"
        assert cache_key("Calle 5", None) == "calle 5_"

    async def test_fetches_once_per_key(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=[{"lat": "3.45", "lon": "-76.53"}])

        service = self._service(handler, {})
        assert await service.geocode("Calle 5", "Cali") == (3.45, -76.53)
        assert await service.geocode("CALLE 5", "cali") == (3.45, -76.53)
        assert len(calls) == 1
        assert calls[0].headers["User-Agent"]
        assert calls[0].url.params["q"] == "Calle 5, Cali"

    async def test_misses_are_cached(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=[])

        cache = {}
        service = self._service(handler, cache)
        assert await service.geocode("Nowhere", "Cali") is None
        assert await service.geocode("Nowhere", "Cali") is None
        assert len(calls) == 1
        assert cache == {"nowhere_cali": None}

    async def test_http_errors_are_cached_as_misses(self):
        service = self._service(lambda request: httpx.Response(503), {})
        assert await service.geocode("Calle 9", "Cali") is None

    async def test_empty_address_skips_lookup(self):
        def handler(request):
            raise AssertionError("no request expected")

        assert await self._service(handler, {}).geocode("", "Cali") is None


class TestReportService:

    def _donations(self):
        return [
            {"id": 1, "donor": "Ana Gómez", "amount": Decimal("1500000"), "project": "Becas",
             "date": date(2024, 12, 8), "status": "approved"},
            {"id": 2, "donor": "Luis Pérez", "amount": Decimal("50000"), "project": "Uniformes",
             "date": date(2024, 1, 2), "status": "pending"},
        ]

    def test_format_currency(self):
        assert format_currency(Decimal("1500000")) == "$ 1.500.000"
        assert format_currency(None) == "$ 0"

    def test_format_date(self):
        assert format_date(date(2024, 12, 8)) == "8 de diciembre de 2024"

    def test_excel_sheet_and_headers(self):
        content = ReportService().to_excel([donations_table(self._donations())])
        workbook = load_workbook(io.BytesIO(content))
        assert workbook.sheetnames == ["Donaciones"]
        sheet = workbook["Donaciones"]
        assert [cell.value for cell in sheet[1]] == ["ID", "Donante", "Monto", "Proyecto", "Fecha", "Estado"]
        assert sheet["C2"].value == "$ 1.500.000"
        assert sheet["E2"].value == "8 de diciembre de 2024"
        assert sheet.column_dimensions["B"].width == 25

    def test_donation_footer_totals(self):
        assert donations_table(self._donations()).footer == ["Total: $ 1.550.000"]

    def test_pdf_output(self):
        content = ReportService().to_pdf(donations_table(self._donations()))
        assert content.startswith(b"%PDF")
        assert len(content) > 500

    def test_beneficiary_pdf_handles_accents(self):
        table = beneficiaries_table([{
            "id": "b-1", "name": "José Núñez", "age": 12, "category": "sub-13", "headquarters": "Sede Sur",
            "phone": "300", "status": "activo", "performance": 75.0,
        }])
        assert ReportService().to_pdf(table).startswith(b"%PDF")


def test_safe_filename():
    assert safe_filename("mi foto (1).jpg") == "mi_foto__1_.jpg"
    assert safe_filename("") == "file"


def test_timestamped_path():
    path = timestamped_path("gallery/eventos/", "foto final.png")
    prefix, name = path.rsplit("/", 1)
    assert prefix == "gallery/eventos"
    assert name.split("-", 1)[1] == "foto_final.png"
