"""Validation of untyped document payloads at the persistence boundary."""
import json
from dataclasses import dataclass, field
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr
from pydantic import ValidationError as PydanticValidationError

from merge_designer.domain.exceptions import DocumentValidationError
from merge_designer.domain.models import DocumentData, MergeField

Number = Union[StrictInt, StrictFloat]


class MergeFieldSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: StrictStr
    name: StrictStr
    text: StrictStr
    font_size: Number = Field(alias="fontSize")
    color: StrictStr
    x: Number
    y: Number
    visible: StrictBool


class DocumentSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Older saved designs predate document types and were always labels.
    document_type: Literal["letter", "certificate", "label", "envelope"] = Field(
        default="label", alias="documentType"
    )
    fields: List[MergeFieldSchema]
    accent: StrictStr
    background: StrictStr
    custom_background: StrictStr = Field(alias="customBackground")
    text_align: Literal["left", "center", "right"] = Field(alias="textAlign")


@dataclass
class ValidationResult:
    """Either a typed document or the reasons the payload was rejected."""
    document: Optional[DocumentData] = None
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.document is not None and not self.errors

    def unwrap(self) -> DocumentData:
        if not self.ok:
            raise DocumentValidationError(self.errors)
        return self.document


def _format_errors(exc: PydanticValidationError) -> List[str]:
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        messages.append(f"{location}: {err.get('msg')}" if location else err.get("msg", ""))
    return messages


def validate_document(payload: Any) -> ValidationResult:
    """Validate a decoded JSON payload; invalid payloads are rejected wholesale."""
    if not isinstance(payload, dict):
        return ValidationResult(errors=["Document payload must be a JSON object"])
    try:
        parsed = DocumentSchema.model_validate(payload)
    except PydanticValidationError as e:
        return ValidationResult(errors=_format_errors(e))

    document = DocumentData(
        document_type=parsed.document_type,
        fields=[
            MergeField(
                id=f.id,
                name=f.name,
                text=f.text,
                font_size=f.font_size,
                color=f.color,
                x=f.x,
                y=f.y,
                visible=f.visible,
            )
            for f in parsed.fields
        ],
        accent=parsed.accent,
        background=parsed.background,
        custom_background=parsed.custom_background,
        text_align=parsed.text_align,
    )
    return ValidationResult(document=document)


def parse_document_json(raw: Union[str, bytes]) -> ValidationResult:
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return ValidationResult(errors=[f"Invalid JSON: {e}"])
    return validate_document(payload)


def dump_field(merge_field: MergeField) -> dict:
    return {
        "id": merge_field.id,
        "name": merge_field.name,
        "text": merge_field.text,
        "fontSize": merge_field.font_size,
        "color": merge_field.color,
        "x": merge_field.x,
        "y": merge_field.y,
        "visible": merge_field.visible,
    }


def dump_document(document: DocumentData) -> dict:
    """Serialize a document to the camelCase JSON shape accepted by validate_document."""
    return {
        "documentType": document.document_type,
        "fields": [dump_field(f) for f in document.fields],
        "accent": document.accent,
        "background": document.background,
        "customBackground": document.custom_background,
        "textAlign": document.text_align,
    }
