"""
Handles report creation, retrieval, filtering, status changes, deletion and comments.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from community_reports.reports import schemas, utils
from community_reports.reports.storage import JsonReportStore, ReportNotFound, StorageError, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Reports"])

REPORT_NOT_FOUND = "Report not found"


@router.get("/reports", response_model=schemas.ReportListResponse)
def list_reports(store: JsonReportStore = Depends(get_store)):
    """Return every report plus fresh stats."""
    document = store.load()
    return {"reports": document.reports, "stats": document.stats}


@router.get("/reports/filter", response_model=schemas.ReportListResponse)
def filter_reports(
    category: Optional[str] = Query(None, description='Exact category, or "all"'),
    status: Optional[str] = Query(None, description='Pending, Reviewing, Resolved, or "all"'),
    store: JsonReportStore = Depends(get_store),
):
    """Filter by category/status. Stats always cover the unfiltered list."""
    document = store.load()
    return {
        "reports": utils.filter_reports(document.reports, category=category, status=status),
        "stats": document.stats,
    }


@router.get("/reports/{report_id}", response_model=schemas.ReportDetailResponse)
def get_report(report_id: str, store: JsonReportStore = Depends(get_store)):
    """Fetch a single report by id."""
    try:
        report = store.get_report(report_id)
    except ReportNotFound:
        raise HTTPException(status_code=404, detail=REPORT_NOT_FOUND)
    return {"report": report}


@router.post("/reports", response_model=schemas.ReportMutationResponse, status_code=status.HTTP_201_CREATED)
def submit_report(payload: schemas.ReportCreate, store: JsonReportStore = Depends(get_store)):
    """Create a Pending report with a fresh id and timestamps."""
    report = utils.build_report(payload)
    try:
        document = store.append_report(report)
    except StorageError:
        raise HTTPException(status_code=500, detail="Error saving report")
    logger.info("Report %s submitted in category %s", report.id, report.category)
    return {"message": "Report submitted successfully", "report": report, "stats": document.stats}


@router.put("/reports/{report_id}/status", response_model=schemas.ReportMutationResponse)
def update_report_status(
    report_id: str,
    update: schemas.StatusUpdate,
    store: JsonReportStore = Depends(get_store),
):
    """Set a report's status (Pending/Reviewing/Resolved) and bump its updatedAt."""
    def change(report: schemas.Report) -> None:
        report.status = update.status
        report.updated_at = utils.current_timestamp()

    try:
        report, document = store.update_report(report_id, change)
    except ReportNotFound:
        raise HTTPException(status_code=404, detail=REPORT_NOT_FOUND)
    except StorageError:
        raise HTTPException(status_code=500, detail="Error updating report")
    logger.info("Report %s status set to %s", report_id, update.status.value)
    return {"message": "Report status updated", "report": report, "stats": document.stats}


@router.delete("/reports/{report_id}", response_model=schemas.DeleteResponse)
def delete_report(report_id: str, store: JsonReportStore = Depends(get_store)):
    """Remove a report and return the new stats."""
    try:
        document = store.delete_report(report_id)
    except ReportNotFound:
        raise HTTPException(status_code=404, detail=REPORT_NOT_FOUND)
    except StorageError:
        raise HTTPException(status_code=500, detail="Error deleting report")
    logger.info("Report %s deleted", report_id)
    return {"message": "Report deleted successfully", "stats": document.stats}


@router.post(
    "/reports/{report_id}/comments",
    response_model=schemas.CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_comment(
    report_id: str,
    payload: schemas.CommentCreate,
    store: JsonReportStore = Depends(get_store),
):
    """Append a comment to a report and bump its updatedAt."""
    comment = utils.build_comment(payload)

    def change(report: schemas.Report) -> None:
        report.comments.append(comment)
        report.updated_at = utils.current_timestamp()

    try:
        report, _ = store.update_report(report_id, change)
    except ReportNotFound:
        raise HTTPException(status_code=404, detail=REPORT_NOT_FOUND)
    except StorageError:
        raise HTTPException(status_code=500, detail="Error adding comment")
    logger.info("Comment %s added to report %s", comment.id, report_id)
    return {"message": "Comment added", "comment": comment, "report": report}


@router.get("/stats", response_model=schemas.StatsResponse)
def get_stats(store: JsonReportStore = Depends(get_store)):
    """Return fresh stats only."""
    return {"stats": store.load().stats}
