"""Document editing operations: field updates, theme changes and header sync."""
import copy
from dataclasses import dataclass, replace
from typing import Any, List, Optional

from merge_designer.domain.document_types import create_field_id, create_fields_for_document_type
from merge_designer.domain.models import TEXT_ALIGNMENTS, DocumentData, MergeField
from merge_designer.domain.themes import ACCENT_PALETTE, DEFAULT_CUSTOM_BACKGROUND
from merge_designer.utils.normalize import clamp_font_size, clamp_percent
from merge_designer.utils.placeholders import placeholder_for

THEME_KEYS = ("accent", "background", "custom_background", "text_align")


@dataclass
class AlignmentResult:
    fields: List[MergeField]
    active_id: str


def create_default_document(document_type: str = "label") -> DocumentData:
    return DocumentData(
        document_type=document_type,
        fields=create_fields_for_document_type(document_type),
        accent=ACCENT_PALETTE[0],
        background="sky",
        custom_background=DEFAULT_CUSTOM_BACKGROUND,
        text_align="center",
    )


def create_blank_field(label: Optional[str] = None) -> MergeField:
    return MergeField(
        id=create_field_id(),
        name=label if label is not None else "New Field",
        text=placeholder_for(label if label is not None else "NewField"),
        font_size=28,
        color="#0f172a",
        x=50,
        y=50,
        visible=True,
    )


def clone_document(document: DocumentData) -> DocumentData:
    return copy.deepcopy(document)


def _normalize_header(header: Any, index: int) -> str:
    if not isinstance(header, str) or not header.strip():
        return f"Field {index + 1}"
    return header.strip()


def align_fields_with_headers(fields: List[MergeField], headers: List[Any]) -> AlignmentResult:
    """Map header i onto field i, creating fields for extra headers.

    Existing fields keep position, font and color; only name and text are
    replaced. Fields past the last header are kept as they are.
    """
    if not headers:
        return AlignmentResult(fields=list(fields), active_id=fields[0].id if fields else "")

    aligned = []
    for index, header in enumerate(headers):
        label = _normalize_header(header, index)
        if index < len(fields):
            aligned.append(replace(fields[index], name=label, text=placeholder_for(label)))
        else:
            aligned.append(create_blank_field(label))
    aligned.extend(fields[len(headers):])

    return AlignmentResult(fields=aligned, active_id=aligned[0].id if aligned else "")


class DocumentEditor:
    """Holds one document under edit and applies field and theme changes to it."""

    def __init__(self, document: Optional[DocumentData] = None, document_type: str = "label"):
        self.document = document if document is not None else create_default_document(document_type)
        self.active_field = self.document.fields[0].id if self.document.fields else ""

    @property
    def field_count(self) -> int:
        return len(self.document.fields)

    def get_field(self, field_id: str) -> Optional[MergeField]:
        return next((f for f in self.document.fields if f.id == field_id), None)

    def select_field(self, field_id: str) -> None:
        self.active_field = field_id

    def update_field(self, field_id: str, **patch) -> Optional[MergeField]:
        """Apply a partial update; x and y are clamped into [0, 100], font size into [8, 200]."""
        patch.pop("id", None)
        if "x" in patch:
            patch["x"] = clamp_percent(patch["x"])
        if "y" in patch:
            patch["y"] = clamp_percent(patch["y"])
        if "font_size" in patch:
            patch["font_size"] = clamp_font_size(patch["font_size"])

        updated = None
        fields = []
        for existing in self.document.fields:
            if existing.id == field_id:
                existing = replace(existing, **patch)
                updated = existing
            fields.append(existing)
        self.document = replace(self.document, fields=fields)
        return updated

    def handle_field_change(self, field_id: str, **patch) -> Optional[MergeField]:
        self.select_field(field_id)
        return self.update_field(field_id, **patch)

    def add_field(self) -> MergeField:
        new_field = create_blank_field(f"Field {self.field_count + 1}")
        self.document = replace(self.document, fields=self.document.fields + [new_field])
        self.active_field = new_field.id
        return new_field

    def remove_field(self, field_id: str) -> bool:
        """Remove a field; the last remaining field cannot be removed."""
        if self.field_count <= 1:
            return False
        remaining = [f for f in self.document.fields if f.id != field_id]
        if len(remaining) == self.field_count:
            return False
        if self.active_field == field_id:
            self.active_field = remaining[-1].id
        self.document = replace(self.document, fields=remaining)
        return True

    def change_theme(self, **update) -> DocumentData:
        unknown = set(update) - set(THEME_KEYS)
        if unknown:
            raise ValueError(f"Unknown theme option(s): {', '.join(sorted(unknown))}")
        if "text_align" in update and update["text_align"] not in TEXT_ALIGNMENTS:
            raise ValueError(f"text_align must be one of {TEXT_ALIGNMENTS}")
        self.document = replace(self.document, **update)
        return self.document

    def change_document_type(self, document_type: str) -> DocumentData:
        fields = create_fields_for_document_type(document_type)
        self.document = replace(self.document, document_type=document_type, fields=fields)
        self.active_field = fields[0].id if fields else ""
        return self.document

    def reset(self) -> DocumentData:
        self.document = create_default_document(self.document.document_type)
        self.active_field = self.document.fields[0].id if self.document.fields else ""
        return self.document

    def sync_fields_to_headers(self, headers: List[Any]) -> DocumentData:
        if not headers:
            return self.document
        aligned = align_fields_with_headers(self.document.fields, headers)
        self.document = replace(self.document, fields=aligned.fields)
        if aligned.active_id:
            self.active_field = aligned.active_id
        return self.document
