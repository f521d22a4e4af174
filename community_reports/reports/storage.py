"""
JSON file storage for the report document.

The whole document (reports plus derived stats) is read on every access and
written back in full after every mutation. Load/modify/save sequences are
serialized by a store-wide lock; the file itself is replaced atomically.
"""

import json
import logging
import os
import shutil
import tempfile
import threading
from functools import lru_cache
from typing import Callable, Tuple

from community_reports.config import get_settings
from community_reports.reports import schemas
from community_reports.reports.utils import recompute_stats

logger = logging.getLogger(__name__)

FILE_MODE = 0o644


class StorageError(Exception):
    """Raised when the report document cannot be written."""


class ReportNotFound(Exception):
    def __init__(self, report_id: str):
        super().__init__(f"Report {report_id} not found")
        self.report_id = report_id


class JsonReportStore:
    def __init__(self, path: str):
        self.path = path
        self._lock = threading.RLock()

    # ────────────────────────────────
    # JSON helpers
    # ────────────────────────────────
    def initialize(self) -> None:
        """Create the data directory and an empty document if none exists."""
        os.makedirs(os.path.dirname(os.path.abspath(self.path)), exist_ok=True)
        with self._lock:
            if not os.path.exists(self.path):
                self.save(schemas.StoreDocument())
                logger.info("Initialized empty report store at %s", self.path)

    def load(self) -> schemas.StoreDocument:
        """Read the document; any read or decode failure yields an empty one."""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = schemas.StoreDocument.model_validate(json.load(f))
        except (OSError, ValueError):
            logger.exception("Error reading reports from %s", self.path)
            return schemas.StoreDocument()
        document.stats = recompute_stats(document.reports)
        return document

    def save(self, document: schemas.StoreDocument) -> None:
        """Recompute stats and atomically replace the file with the document."""
        document.stats = recompute_stats(document.reports)
        payload = document.model_dump(mode="json", by_alias=True)
        with self._lock:
            try:
                directory = os.path.dirname(os.path.abspath(self.path))
                tmp_fd, tmp_path = tempfile.mkstemp(dir=directory)
                os.close(tmp_fd)
                try:
                    with open(tmp_path, "w", encoding="utf-8") as f:
                        json.dump(payload, f, indent=2)
                    # mkstemp creates owner-only files
                    os.chmod(tmp_path, FILE_MODE)
                    shutil.move(tmp_path, self.path)
                finally:
                    if os.path.exists(tmp_path):
                        os.remove(tmp_path)
            except OSError as e:
                logger.exception("Error writing reports to %s", self.path)
                raise StorageError(str(e)) from e

    # ────────────────────────────────
    # Core operations
    # ────────────────────────────────
    def get_report(self, report_id: str) -> schemas.Report:
        for report in self.load().reports:
            if report.id == report_id:
                return report
        raise ReportNotFound(report_id)

    def append_report(self, report: schemas.Report) -> schemas.StoreDocument:
        with self._lock:
            document = self.load()
            document.reports.append(report)
            self.save(document)
        return document

    def update_report(
        self,
        report_id: str,
        change: Callable[[schemas.Report], None],
    ) -> Tuple[schemas.Report, schemas.StoreDocument]:
        """Apply `change` to the matching report in memory, then persist."""
        with self._lock:
            document = self.load()
            report = next((r for r in document.reports if r.id == report_id), None)
            if report is None:
                raise ReportNotFound(report_id)
            change(report)
            self.save(document)
        return report, document

    def delete_report(self, report_id: str) -> schemas.StoreDocument:
        with self._lock:
            document = self.load()
            index = next((i for i, r in enumerate(document.reports) if r.id == report_id), None)
            if index is None:
                raise ReportNotFound(report_id)
            del document.reports[index]
            self.save(document)
        return document


@lru_cache
def get_store() -> JsonReportStore:
    """Store bound to the configured reports file (overridable in tests)."""
    return JsonReportStore(get_settings().reports_file)
