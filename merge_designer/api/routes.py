"""API route handlers."""
from io import BytesIO
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import StreamingResponse

from merge_designer.api.dependencies import (
    get_document_from_form,
    get_mail_merge_service,
    read_dataset_upload,
)
from merge_designer.domain.document_types import list_document_types
from merge_designer.domain.exceptions import ExportError, ParseError
from merge_designer.domain.models import DocumentData
from merge_designer.domain.schema import dump_document, dump_field, validate_document
from merge_designer.services.dataset_importer import read_dataset
from merge_designer.services.document_editor import align_fields_with_headers, create_default_document
from merge_designer.services.import_tracker import ImportTracker
from merge_designer.services.mail_merge import MailMergeService

router = APIRouter()


def _require_document(payload: Any) -> DocumentData:
    result = validate_document(payload)
    if not result.ok:
        raise HTTPException(status_code=422, detail={"errors": result.errors})
    return result.document


@router.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": "Mail Merge Designer API",
        "description": "Upload a CSV or Excel file and merge each row into a document template",
        "main_endpoint": {
            "url": "/export",
            "method": "POST",
            "description": "Upload dataset + document JSON → Merge rows → Return DOCX"
        },
        "other_endpoints": {
            "/document-types": "GET - Page geometry and default fields per document type",
            "/dataset": "POST - Parse a dataset and summarize it against a field count",
            "/documents/validate": "POST - Validate a saved document payload",
            "/documents/sync-headers": "POST - Align document fields with dataset headers",
            "/preview": "POST - Resolve placeholders for one row",
        }
    }


@router.get("/document-types")
async def document_types():
    """List document types with their geometry and defaults."""
    result = []
    for cfg in list_document_types():
        dims = cfg.dimensions
        defaults = create_default_document(cfg.id)
        result.append({
            "id": cfg.id,
            "label": cfg.label,
            "description": cfg.description,
            "aspectRatio": cfg.aspect_ratio,
            "multiLabel": cfg.is_multi_label,
            "dimensions": {
                "width": dims.width,
                "height": dims.height,
                "orientation": dims.orientation,
                "labelsPerPage": dims.labels_per_page,
                "labelsPerRow": dims.labels_per_row,
                "rowsPerPage": dims.rows_per_page,
            },
            "defaultDocument": dump_document(defaults),
        })
    return result


@router.post("/dataset")
async def import_dataset(
    file: UploadFile = File(...),
    field_count: int = Form(0),
):
    """Parse an uploaded dataset and classify its headers against the field count."""
    contents, filename = await read_dataset_upload(file)
    tracker = ImportTracker(field_count=field_count)
    summary = tracker.handle_import(contents, filename)
    if summary is None:
        raise HTTPException(status_code=400, detail=tracker.import_error)
    return {
        "summary": summary.to_dict(),
        "headers": summary.headers,
        "rows": tracker.rows,
    }


@router.post("/documents/validate")
async def validate_document_payload(payload: Any = Body(...)):
    """Validate a document payload; invalid payloads are rejected as a whole."""
    result = validate_document(payload)
    if not result.ok:
        return {"valid": False, "errors": result.errors}
    return {"valid": True, "document": dump_document(result.document)}


@router.post("/documents/sync-headers")
async def sync_headers(
    document: Dict[str, Any] = Body(...),
    headers: List[Any] = Body(...),
):
    """Rename fields after dataset headers, creating fields for extra headers."""
    parsed = _require_document(document)
    aligned = align_fields_with_headers(parsed.fields, headers)
    parsed.fields = aligned.fields
    return {"document": dump_document(parsed), "activeId": aligned.active_id}


@router.post("/preview")
async def preview(
    document: Dict[str, Any] = Body(...),
    row: Optional[Dict[str, str]] = Body(None),
    mail_merge: MailMergeService = Depends(get_mail_merge_service),
):
    """Resolve placeholders for a single row; without a row tokens are returned as typed."""
    parsed = _require_document(document)
    return {"fields": [dump_field(f) for f in mail_merge.preview_fields(parsed, row)]}


@router.post("/export")
async def export_documents(
    file: UploadFile = File(...),
    document: DocumentData = Depends(get_document_from_form),
    mail_merge: MailMergeService = Depends(get_mail_merge_service),
):
    """
    Main endpoint - Complete workflow: Upload dataset → Merge rows into template → Return DOCX.
    """
    contents, filename = await read_dataset_upload(file)
    try:
        dataset = read_dataset(contents, filename)
        result = mail_merge.export_documents(document, dataset.rows)
    except (ParseError, ExportError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error exporting documents: {str(e)}")

    return StreamingResponse(
        BytesIO(result.content),
        media_type=result.media_type,
        headers={
            "Content-Disposition": f"attachment; filename={result.filename}",
            "X-Records-Exported": str(result.record_count),
        }
    )
