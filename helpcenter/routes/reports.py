"""
Help Center Backend — Incident Report Route
=============================================

    POST /api/reports  {incidentType, severity, description, wantsFollowUp?, contactMethod?}
                       → 201 {message, reportId}
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from helpcenter.database import get_db_session
from helpcenter.messages import msg
from helpcenter.schemas.common import ErrorResponse
from helpcenter.schemas.report import ReportCreatedResponse, ReportCreateRequest
from helpcenter.services.report_service import report_service

router = APIRouter(prefix="/api", tags=["Reports"])


@router.post(
    "/reports",
    status_code=201,
    response_model=ReportCreatedResponse,
    responses={
        400: {"description": "Missing required field", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Submit an incident report",
)
async def submit_report(
    body: ReportCreateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> ReportCreatedResponse:
    report_id = await report_service.submit_report(
        db,
        incident_type=body.incident_type,
        severity=body.severity,
        description=body.description,
        wants_follow_up=body.wants_follow_up,
        contact_method=body.contact_method,
    )
    return ReportCreatedResponse(message=msg("report_created"), report_id=report_id)
