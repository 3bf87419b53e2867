"""Domain models for the mail-merge designer."""
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

DOCUMENT_TYPE_NAMES = ("letter", "certificate", "label", "envelope")
TEXT_ALIGNMENTS = ("left", "center", "right")

IMPORT_STATUS_MATCH = "match"
IMPORT_STATUS_NEEDS_LAYERS = "needs-layers"
IMPORT_STATUS_UNUSED_LAYERS = "unused-layers"

DatasetRow = Dict[str, str]


@dataclass
class MergeField:
    """A positioned text element; x/y are percentages of the canvas."""
    id: str
    name: str
    text: str
    font_size: float
    color: str
    x: float
    y: float
    visible: bool = True

    def copy(self, **changes) -> "MergeField":
        return replace(self, **changes)


@dataclass
class DocumentData:
    """A document template: its type, fields and theme."""
    document_type: str
    fields: List[MergeField]
    accent: str = "#0ea5e9"
    background: str = "sky"
    custom_background: str = "#f8fafc"
    text_align: str = "center"

    @property
    def visible_fields(self) -> List[MergeField]:
        return [f for f in self.fields if f.visible]


@dataclass
class DatasetImport:
    """Rectangular data extracted from the first sheet of an upload."""
    headers: List[str]
    rows: List[DatasetRow]

    @property
    def row_count(self) -> int:
        return len(self.rows)


@dataclass
class ImportSummary:
    """Projection of an import against the current field count."""
    file_name: str
    headers: List[str]
    layer_count: int
    row_count: int
    imported_at: str

    @property
    def header_count(self) -> int:
        return len(self.headers)

    @property
    def status(self) -> str:
        return resolve_import_status(self.header_count, self.layer_count)

    def to_dict(self) -> dict:
        return {
            "fileName": self.file_name,
            "headers": list(self.headers),
            "headerCount": self.header_count,
            "layerCount": self.layer_count,
            "rowCount": self.row_count,
            "status": self.status,
            "importedAt": self.imported_at,
        }


@dataclass
class FieldGroup:
    """Fields judged to share one visual line, ordered left to right."""
    fields: List[MergeField] = field(default_factory=list)
    y_position: float = 0.0

    @property
    def min_x(self) -> Optional[float]:
        return min((f.x for f in self.fields), default=None)

    @property
    def max_x(self) -> Optional[float]:
        return max((f.x for f in self.fields), default=None)


def resolve_import_status(header_count: int, field_count: int) -> str:
    """Classify imported headers against the number of fields."""
    if header_count == field_count:
        return IMPORT_STATUS_MATCH
    if header_count > field_count:
        return IMPORT_STATUS_NEEDS_LAYERS
    return IMPORT_STATUS_UNUSED_LAYERS
