"""
Pure helpers for reports: stats, filtering, identifiers and timestamps.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from community_reports.reports import schemas

# Filter value meaning "do not filter on this field"
MATCH_ALL = "all"


def new_id() -> str:
    return str(uuid.uuid4())


def current_timestamp() -> str:
    """UTC ISO-8601 with millisecond precision and a trailing Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def recompute_stats(reports: List[schemas.Report]) -> schemas.Stats:
    """Count reports overall and per status."""
    return schemas.Stats(
        total=len(reports),
        pending=sum(1 for r in reports if r.status == schemas.ReportStatus.pending),
        reviewing=sum(1 for r in reports if r.status == schemas.ReportStatus.reviewing),
        resolved=sum(1 for r in reports if r.status == schemas.ReportStatus.resolved),
    )


def filter_reports(
    reports: List[schemas.Report],
    category: Optional[str] = None,
    status: Optional[str] = None,
) -> List[schemas.Report]:
    """Filter reports by exact category and status; "all" or None skips a field."""
    if category and category != MATCH_ALL:
        reports = [r for r in reports if r.category == category]
    if status and status != MATCH_ALL:
        reports = [r for r in reports if r.status.value == status]
    return reports


def build_report(data: schemas.ReportCreate) -> schemas.Report:
    timestamp = current_timestamp()
    return schemas.Report(
        id=new_id(),
        reporter_name=data.reporter_name,
        reporter_email=data.reporter_email,
        title=data.title,
        category=data.category,
        location=data.location,
        description=data.description,
        image=data.image,
        status=schemas.ReportStatus.pending,
        created_at=timestamp,
        updated_at=timestamp,
        comments=[],
    )


def build_comment(data: schemas.CommentCreate) -> schemas.Comment:
    return schemas.Comment(
        id=new_id(),
        author=data.author,
        text=data.comment,
        created_at=current_timestamp(),
    )
