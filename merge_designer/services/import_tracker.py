"""Tracks the currently imported dataset and its summary against the field count."""
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, List, Optional

from merge_designer.domain.exceptions import ParseError
from merge_designer.domain.models import DatasetRow, ImportSummary
from merge_designer.services.dataset_importer import read_dataset

logger = logging.getLogger(__name__)

# Receives the imported headers, returns the field count after syncing (or None if unchanged).
HeadersCallback = Callable[[List[str]], Optional[int]]


class ImportTracker:
    """Holds imported rows and a derived ImportSummary for one editing session."""

    def __init__(self, field_count: int = 0, reader=read_dataset):
        self.field_count = field_count
        self.rows: List[DatasetRow] = []
        self.summary: Optional[ImportSummary] = None
        self.import_error: Optional[str] = None
        self._reader = reader

    @property
    def can_export(self) -> bool:
        return len(self.rows) > 0

    def handle_import(
        self,
        content: bytes,
        filename: str,
        on_headers_imported: Optional[HeadersCallback] = None,
    ) -> Optional[ImportSummary]:
        """Replace the current dataset with a new upload.

        On a parse failure the rows and summary are cleared, the message is
        kept in ``import_error`` and None is returned.
        """
        self.import_error = None
        try:
            dataset = self._reader(content, filename)
        except ParseError as e:
            logger.warning("Dataset import failed for %s: %s", filename, e)
            self.rows = []
            self.summary = None
            self.import_error = str(e)
            return None

        self.rows = dataset.rows
        header_count = len(dataset.headers)

        resulting_field_count = self.field_count
        if header_count > 0 and on_headers_imported is not None:
            synced = on_headers_imported(list(dataset.headers))
            if synced is not None:
                resulting_field_count = synced
        self.field_count = resulting_field_count

        self.summary = ImportSummary(
            file_name=filename,
            headers=list(dataset.headers),
            layer_count=resulting_field_count,
            row_count=len(dataset.rows),
            imported_at=datetime.now(timezone.utc).isoformat(),
        )
        return self.summary

    def update_field_count(self, field_count: int) -> Optional[ImportSummary]:
        """Recompute the summary status for a new field count without re-reading the file."""
        self.field_count = field_count
        if self.summary is not None and self.summary.layer_count != field_count:
            self.summary = replace(self.summary, layer_count=field_count)
        return self.summary

    def clear(self) -> None:
        self.rows = []
        self.summary = None
        self.import_error = None
