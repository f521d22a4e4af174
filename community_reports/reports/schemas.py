"""
Defines the data models and enums for community reports.
Field names are snake_case in Python and camelCase on the wire and on disk.
"""

from enum import Enum
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel

NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]


class ReportStatus(str, Enum):
    pending = "Pending"
    reviewing = "Reviewing"
    resolved = "Resolved"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Comment(CamelModel):
    id: str
    author: str
    text: str
    created_at: str


class Report(CamelModel):
    id: str
    reporter_name: str
    reporter_email: str
    title: str
    category: str  # e.g., "Infrastructure", "Safety", "Other"
    location: str
    description: str
    image: Optional[str] = None
    status: ReportStatus = ReportStatus.pending
    created_at: str
    updated_at: str
    comments: List[Comment] = []


class Stats(BaseModel):
    total: int = 0
    pending: int = 0
    reviewing: int = 0
    resolved: int = 0


class StoreDocument(BaseModel):
    reports: List[Report] = []
    stats: Stats = Field(default_factory=Stats)


# ────────────────────────────────
# Request bodies
# ────────────────────────────────
class ReportCreate(CamelModel):
    reporter_name: NonEmptyStr
    reporter_email: NonEmptyStr
    title: NonEmptyStr
    category: NonEmptyStr
    location: NonEmptyStr
    description: NonEmptyStr
    image: Optional[str] = None

    @field_validator("image")
    @classmethod
    def blank_image_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class StatusUpdate(BaseModel):
    status: ReportStatus


class CommentCreate(BaseModel):
    comment: NonEmptyStr
    author: NonEmptyStr


# ────────────────────────────────
# Response envelopes
# ────────────────────────────────
class ReportListResponse(BaseModel):
    success: bool = True
    reports: List[Report]
    stats: Stats


class ReportDetailResponse(BaseModel):
    success: bool = True
    report: Report


class ReportMutationResponse(BaseModel):
    success: bool = True
    message: str
    report: Report
    stats: Stats


class DeleteResponse(BaseModel):
    success: bool = True
    message: str
    stats: Stats


class CommentResponse(BaseModel):
    success: bool = True
    message: str
    comment: Comment
    report: Report


class StatsResponse(BaseModel):
    success: bool = True
    stats: Stats


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
