"""Mail-merge service: resolves each data row into the template and compiles the result."""
import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from merge_designer.config import config
from merge_designer.domain.exceptions import ExportError
from merge_designer.domain.models import DatasetRow, DocumentData, MergeField
from merge_designer.services.document_compiler import DocumentCompiler
from merge_designer.services.document_editor import clone_document
from merge_designer.utils.placeholders import resolve

logger = logging.getLogger(__name__)

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


@dataclass
class ExportResult:
    """A compiled document ready for download."""
    content: bytes
    filename: str
    record_count: int

    media_type: str = DOCX_MEDIA_TYPE


def map_fields_to_row(fields: Sequence[MergeField], row: Optional[DatasetRow]) -> List[MergeField]:
    """Copies of the fields with their placeholders resolved against one row."""
    return [replace(f, text=resolve(f.text, row)) for f in fields]


def build_export_filename(document_type: str, now: Optional[datetime] = None, prefix: Optional[str] = None) -> str:
    now = now or datetime.now(timezone.utc)
    now = now.astimezone(timezone.utc) if now.tzinfo else now
    stamp = now.strftime("%Y-%m-%dT%H:%M:%S") + f".{now.microsecond // 1000:03d}Z"
    stamp = stamp.replace(":", "-").replace(".", "-")
    return f"{prefix or config.export.filename_prefix}-{document_type}-{stamp}.docx"


class MailMergeService:
    """Service for merging dataset rows into a document template."""

    def __init__(self, compiler: Optional[DocumentCompiler] = None):
        self.compiler = compiler or DocumentCompiler()

    def build_record_field_sets(self, document: DocumentData, rows: Sequence[DatasetRow]) -> List[List[MergeField]]:
        return [map_fields_to_row(document.fields, row) for row in rows]

    def export_documents(
        self,
        document: DocumentData,
        rows: Sequence[DatasetRow],
        now: Optional[datetime] = None,
    ) -> ExportResult:
        """Merge every row and compile; all-or-nothing."""
        if not rows:
            raise ExportError("Upload a CSV or Excel file before exporting.")

        snapshot = clone_document(document)
        record_field_sets = self.build_record_field_sets(snapshot, rows)
        if not record_field_sets:
            raise ExportError("No rows were detected in the imported file.")

        try:
            content = self.compiler.build(snapshot, record_field_sets)
        except ExportError:
            raise
        except Exception as e:
            logger.exception("Export failed for %s", snapshot.document_type)
            raise ExportError(f"Export failed: {e}") from e

        return ExportResult(
            content=content,
            filename=build_export_filename(snapshot.document_type, now),
            record_count=len(record_field_sets),
        )

    def preview_fields(self, document: DocumentData, row: Optional[DatasetRow] = None) -> List[MergeField]:
        """Visible fields with placeholders resolved; unresolved tokens stay verbatim."""
        return map_fields_to_row(document.visible_fields, row)
