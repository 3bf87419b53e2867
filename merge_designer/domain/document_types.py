"""Static registry of document types: page geometry and default fields."""
import uuid
from dataclasses import dataclass
from typing import Dict, List, Optional

from merge_designer.domain.models import MergeField


@dataclass(frozen=True)
class DocumentDimensions:
    """Physical page size in inches, plus label grid geometry when present."""
    width: float
    height: float
    orientation: str
    labels_per_page: Optional[int] = None
    labels_per_row: Optional[int] = None
    rows_per_page: Optional[int] = None


@dataclass(frozen=True)
class FieldPreset:
    name: str
    text: str
    font_size: float
    color: str
    x: float
    y: float
    visible: bool = True


@dataclass(frozen=True)
class DocumentTypeConfig:
    id: str
    label: str
    description: str
    dimensions: DocumentDimensions
    default_fields: tuple
    aspect_ratio: str

    @property
    def is_multi_label(self) -> bool:
        return self.dimensions.labels_per_page is not None


DOCUMENT_TYPES: Dict[str, DocumentTypeConfig] = {
    "letter": DocumentTypeConfig(
        id="letter",
        label="Letter",
        description="Full-page letters and documents",
        dimensions=DocumentDimensions(width=8.5, height=11, orientation="portrait"),
        default_fields=(
            FieldPreset("Date", "{{Date}}", 14, "#475569", 85, 5),
            FieldPreset("Recipient Name", "{{FirstName}} {{LastName}}", 16, "#0f172a", 15, 12),
            FieldPreset("Address", "{{Address}}", 14, "#475569", 15, 17),
            FieldPreset("Greeting", "Dear {{FirstName}},", 16, "#0f172a", 15, 25),
            FieldPreset("Body", "Thank you for your continued support...", 14, "#475569", 50, 50),
            FieldPreset("Closing", "Best regards,", 14, "#0f172a", 15, 85),
        ),
        aspect_ratio="8.5 / 11",
    ),
    "certificate": DocumentTypeConfig(
        id="certificate",
        label="Certificate",
        description="Awards and recognition certificates",
        dimensions=DocumentDimensions(width=11, height=8.5, orientation="landscape"),
        default_fields=(
            FieldPreset("Title", "Certificate of Achievement", 36, "#0f172a", 50, 15),
            FieldPreset("Subtitle", "This is to certify that", 16, "#475569", 50, 30),
            FieldPreset("Recipient", "{{FullName}}", 42, "#0ea5e9", 50, 45),
            FieldPreset("Description", "has successfully completed {{Course}}", 18, "#475569", 50, 60),
            FieldPreset("Date", "Awarded on {{Date}}", 14, "#64748b", 50, 75),
            FieldPreset("Signature", "{{Signature}}", 16, "#0f172a", 50, 90),
        ),
        aspect_ratio="11 / 8.5",
    ),
    "label": DocumentTypeConfig(
        id="label",
        label="Labels",
        description="Name tags and address labels",
        dimensions=DocumentDimensions(
            width=8.5,
            height=11,
            orientation="portrait",
            labels_per_page=6,
            labels_per_row=2,
            rows_per_page=3,
        ),
        default_fields=(
            FieldPreset("Greeting", "Hello, my name is", 18, "#475569", 50, 15),
            FieldPreset("Name", "{{Name}}", 48, "#0f172a", 50, 35),
            FieldPreset("Title", "{{Title}}", 20, "#475569", 50, 55),
            FieldPreset("Company", "{{Company}}", 20, "#475569", 50, 70),
        ),
        aspect_ratio="3.25 / 3",
    ),
    "envelope": DocumentTypeConfig(
        id="envelope",
        label="Envelope",
        description="#10 business envelopes",
        dimensions=DocumentDimensions(width=9.5, height=4.125, orientation="landscape"),
        default_fields=(
            FieldPreset("Return Name", "Your Company Name", 12, "#475569", 10, 15),
            FieldPreset("Return Address", "123 Main Street, City, ST 12345", 10, "#64748b", 10, 25),
            FieldPreset("Recipient Name", "{{FirstName}} {{LastName}}", 16, "#0f172a", 55, 50),
            FieldPreset("Recipient Address", "{{Address}}", 14, "#475569", 55, 65),
            FieldPreset("City State Zip", "{{City}}, {{State}} {{Zip}}", 14, "#475569", 55, 78),
        ),
        aspect_ratio="9.5 / 4.125",
    ),
}


def create_field_id() -> str:
    return str(uuid.uuid4())


def get_document_type_config(document_type: str) -> DocumentTypeConfig:
    try:
        return DOCUMENT_TYPES[document_type]
    except KeyError:
        raise ValueError(f"Unknown document type: {document_type!r}") from None


def list_document_types() -> List[DocumentTypeConfig]:
    return list(DOCUMENT_TYPES.values())


def create_fields_for_document_type(document_type: str) -> List[MergeField]:
    """Instantiate the type's preset fields with fresh ids."""
    cfg = get_document_type_config(document_type)
    return [
        MergeField(
            id=create_field_id(),
            name=preset.name,
            text=preset.text,
            font_size=preset.font_size,
            color=preset.color,
            x=preset.x,
            y=preset.y,
            visible=preset.visible,
        )
        for preset in cfg.default_fields
    ]


def get_aspect_ratio(document_type: str) -> str:
    return get_document_type_config(document_type).aspect_ratio


def is_multi_label_document(document_type: str) -> bool:
    return get_document_type_config(document_type).is_multi_label
