"""
Help Center Backend — Incident Report Service
===============================================

What:  Validates and stores incident reports (POST /api/reports).

incident_type, severity and description are required; a missing or blank
one is rejected before any store access, so no row is created.
wants_follow_up is stored as a strict boolean; contact_method as sent. The
insert is committed before the id is returned.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from helpcenter.exceptions import DatabaseError, ValidationError, missing_fields
from helpcenter.messages import msg
from helpcenter.models.report import Report

logger = logging.getLogger(__name__)


class ReportService:

    async def submit_report(
        self,
        db: AsyncSession,
        incident_type: Optional[str],
        severity: Optional[str],
        description: Optional[str],
        wants_follow_up: Optional[bool] = None,
        contact_method: Optional[str] = None,
    ) -> int:
        """
        Insert a report and return its generated report_id.

        Raises:
            ValidationError: a required field is missing (→ 400)
            DatabaseError: the insert failed (→ 500)
        """
        missing = missing_fields(
            incidentType=incident_type,
            severity=severity,
            description=description,
        )
        if missing:
            raise ValidationError(message=msg("report_missing_fields"), fields=missing)

        report = Report(
            incident_type=incident_type,
            severity=severity,
            description=description,
            wants_follow_up=bool(wants_follow_up),
            contact_method=contact_method,
        )
        try:
            db.add(report)
            await db.flush()
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Error saving report: %s", str(e), exc_info=True)
            raise DatabaseError(
                message=msg("report_failed"),
                context={"error_type": type(e).__name__},
            )

        logger.info(
            "Report %s stored (type=%s, severity=%s, follow_up=%s)",
            report.report_id,
            incident_type,
            severity,
            report.wants_follow_up,
        )
        return report.report_id


report_service = ReportService()
