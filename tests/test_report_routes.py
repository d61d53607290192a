"""
Incident Report Tests
=======================

POST /api/reports validation, persistence and store-failure mapping.
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from helpcenter.exceptions import DatabaseError
from helpcenter.models.report import Report
from helpcenter.services.report_service import ReportService

VALID_REPORT = {
    "incidentType": "phishing",
    "severity": "alta",
    "description": "Recibí un correo sospechoso",
    "wantsFollowUp": True,
    "contactMethod": "email",
}


async def _count_reports(session_factory) -> int:
    async with session_factory() as session:
        return await session.scalar(select(func.count()).select_from(Report))


class TestSubmitReport:

    @pytest.mark.asyncio
    async def test_submit_report(self, test_client, session_factory):
        response = await test_client.post("/api/reports", json=VALID_REPORT)

        assert response.status_code == 201
        body = response.json()
        assert body["reportId"] == 1
        assert body["message"] == "Reporte enviado exitosamente. Gracias por tu contribución."

        async with session_factory() as session:
            report = await session.get(Report, 1)
        assert report.incident_type == "phishing"
        assert report.wants_follow_up is True
        assert report.contact_method == "email"

    @pytest.mark.asyncio
    async def test_optional_fields_default(self, test_client, session_factory):
        body = {k: VALID_REPORT[k] for k in ("incidentType", "severity", "description")}

        response = await test_client.post("/api/reports", json=body)

        assert response.status_code == 201
        async with session_factory() as session:
            report = await session.get(Report, response.json()["reportId"])
        assert report.wants_follow_up is False
        assert report.contact_method is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["incidentType", "severity", "description"])
    async def test_missing_required_field_is_400_and_stores_nothing(self, test_client, session_factory, field):
        body = {k: v for k, v in VALID_REPORT.items() if k != field}

        response = await test_client.post("/api/reports", json=body)

        assert response.status_code == 400
        assert response.json()["message"] == "Tipo de incidente, gravedad y descripción son obligatorios."
        assert response.json()["details"]["fields"] == [field]
        assert await _count_reports(session_factory) == 0

    @pytest.mark.asyncio
    async def test_empty_description_is_400(self, test_client):
        response = await test_client.post("/api/reports", json={**VALID_REPORT, "description": ""})
        assert response.status_code == 400


class TestReportServiceErrors:

    @pytest.mark.asyncio
    async def test_store_failure_becomes_database_error(self, mock_db_session):
        mock_db_session.flush.side_effect = OperationalError("INSERT", {}, Exception("down"))

        with pytest.raises(DatabaseError) as exc_info:
            await ReportService().submit_report(
                mock_db_session,
                incident_type="phishing",
                severity="alta",
                description="...",
            )

        assert exc_info.value.message == "Error interno del servidor al procesar el reporte."
        mock_db_session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_validation_happens_before_store_access(self, mock_db_session):
        from helpcenter.exceptions import ValidationError

        with pytest.raises(ValidationError):
            await ReportService().submit_report(
                mock_db_session, incident_type=None, severity="alta", description="...",
            )

        mock_db_session.add.assert_not_called()
        mock_db_session.flush.assert_not_awaited()
