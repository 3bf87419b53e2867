"""Editing session tying the document editor, dataset import and export together."""
from typing import List, Optional

from merge_designer.domain.models import DocumentData, ImportSummary
from merge_designer.services.document_editor import DocumentEditor
from merge_designer.services.import_tracker import ImportTracker
from merge_designer.services.mail_merge import ExportResult, MailMergeService


class MergeSession:
    """One user's template plus imported dataset.

    With ``sync_headers`` enabled, importing a dataset renames fields to
    the imported headers and points their text at the matching column.
    """

    def __init__(
        self,
        document: Optional[DocumentData] = None,
        document_type: str = "label",
        sync_headers: bool = True,
        mail_merge: Optional[MailMergeService] = None,
    ):
        self.editor = DocumentEditor(document, document_type)
        self.tracker = ImportTracker(field_count=self.editor.field_count)
        self.sync_headers = sync_headers
        self.mail_merge = mail_merge or MailMergeService()

    @property
    def document(self) -> DocumentData:
        return self.editor.document

    @property
    def summary(self) -> Optional[ImportSummary]:
        return self.tracker.summary

    def _on_headers_imported(self, headers: List[str]) -> int:
        self.editor.sync_fields_to_headers(headers)
        return self.editor.field_count

    def import_dataset(self, content: bytes, filename: str) -> Optional[ImportSummary]:
        callback = self._on_headers_imported if self.sync_headers else None
        return self.tracker.handle_import(content, filename, on_headers_imported=callback)

    def add_field(self):
        new_field = self.editor.add_field()
        self.tracker.update_field_count(self.editor.field_count)
        return new_field

    def remove_field(self, field_id: str) -> bool:
        removed = self.editor.remove_field(field_id)
        self.tracker.update_field_count(self.editor.field_count)
        return removed

    def change_document_type(self, document_type: str) -> DocumentData:
        document = self.editor.change_document_type(document_type)
        self.tracker.update_field_count(self.editor.field_count)
        return document

    def reset(self) -> DocumentData:
        document = self.editor.reset()
        self.tracker.update_field_count(self.editor.field_count)
        return document

    def export(self) -> ExportResult:
        return self.mail_merge.export_documents(self.editor.document, self.tracker.rows)
