"""Data access helpers for reports."""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from safe_space.core.errors import NotFound
from safe_space.models import Report

from .base import storage_guard
from .targets import Target

__all__ = ["ReportRepository"]


class ReportRepository:
    """Create and list reports against posts and comments."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(
        self,
        *,
        target: Target,
        reporter_id: str,
        reason: str,
        description: str | None = None,
    ) -> Report:
        """File a report. Repeated reports on the same target are accepted.

        Raises:
            NotFound: If the reported post or comment does not exist.
        """
        report = Report(
            **target.columns(),
            reporter_id=reporter_id,
            reason=reason,
            description=description,
        )
        with storage_guard(self.session):
            if self.session.get(target.model, target.id) is None:
                raise NotFound(f"{target.label} not found")
            self.session.add(report)
            self.session.commit()
            self.session.refresh(report)
        return report

    def list_for(self, target: Target) -> list[Report]:
        """Return reports on `target`, newest first."""
        stmt = (
            select(Report)
            .where(target.matches(Report))
            .order_by(Report.created_at.desc(), Report.id.desc())
        )
        with storage_guard(self.session):
            return list(self.session.scalars(stmt))

    def count_for(self, target: Target) -> int:
        """Return the number of reports on `target`."""
        stmt = select(func.count()).select_from(Report).where(target.matches(Report))
        with storage_guard(self.session):
            return int(self.session.scalar(stmt) or 0)
