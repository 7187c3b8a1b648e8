# src/safe_space/api/v1/endpoints/reports.py
"""Content report endpoints."""

import logging

from fastapi import APIRouter, Query, status

from safe_space.models import Report
from safe_space.repositories.report_repo import ReportRepository
from safe_space.repositories.targets import Target
from safe_space.schemas.reaction import CountResponse
from safe_space.schemas.report import ReportCreate, ReportResponse

from ..dependencies import OptionalIdentityDep, SessionDep, SettingsDep, resolve_acting_user

router = APIRouter(prefix="/reports", tags=["reports"])
logger = logging.getLogger(__name__)


@router.get("", response_model=list[ReportResponse] | CountResponse)
async def list_reports(
    db: SessionDep,
    post_id: str | None = Query(None),
    comment_id: str | None = Query(None),
    count: bool = Query(False, description="Return only the number of reports"),
) -> list[Report] | CountResponse:
    """List reports filed against one post or one comment, newest first."""
    target = Target.from_fields(post_id, comment_id)
    repo = ReportRepository(db)
    if count:
        return CountResponse(count=repo.count_for(target))
    return repo.list_for(target)


@router.post("", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
async def create_report(
    report_data: ReportCreate,
    identity: OptionalIdentityDep,
    db: SessionDep,
    settings: SettingsDep,
) -> Report:
    """Report a post or a comment for moderator review."""
    target = Target.from_fields(report_data.post_id, report_data.comment_id)
    reporter_id = resolve_acting_user(identity, report_data.reporter_id, "reporter_id", settings)
    report = ReportRepository(db).create(
        target=target,
        reporter_id=reporter_id,
        reason=report_data.reason,
        description=report_data.description,
    )
    logger.info("Report %s filed on %s %s", report.id, target.kind, target.id)
    return report
