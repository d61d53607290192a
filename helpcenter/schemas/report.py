"""
Help Center Backend — Incident Report Schemas
===============================================

The site's frontend posts camelCase keys (incidentType, wantsFollowUp, ...);
the alias generator maps them onto snake_case attributes.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ReportCreateRequest(BaseModel):
    """
    Body of POST /api/reports.

    incident_type, severity and description are required, but declared
    Optional so ReportService can answer a missing field with a 400.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    incident_type: Optional[str] = Field(default=None, description="Kind of incident")
    severity: Optional[str] = Field(default=None, description="Reported severity")
    description: Optional[str] = Field(default=None, description="What happened")
    wants_follow_up: Optional[bool] = Field(default=None, description="Reporter wants a reply")
    contact_method: Optional[str] = Field(default=None, description="How to reach the reporter")


class ReportCreatedResponse(BaseModel):
    """201 body: {"message": ..., "reportId": 7}."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str
    report_id: int
