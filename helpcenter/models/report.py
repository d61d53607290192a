"""
Help Center Backend — Incident Report Model
=============================================

What:  ORM model for the `Reports` table.
Who:   ReportService (POST /api/reports).

Reports are created once and never updated; there is no read endpoint.
"""

from typing import Optional

from sqlalchemy import Boolean, Integer, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from helpcenter.database import Base


class Report(Base):
    """An incident report submitted from the public site."""

    __tablename__ = "Reports"

    report_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    incident_type: Mapped[str] = mapped_column(String(100), nullable=False)
    severity: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    wants_follow_up: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
        comment="Reporter asked to be contacted",
    )

    # Free text ("email", "phone", an address...); only meaningful when
    # wants_follow_up is true, but stored as sent.
    contact_method: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return (
            f"<Report(report_id={self.report_id}, incident_type='{self.incident_type}', "
            f"severity='{self.severity}')>"
        )
