"""API dependencies for dependency injection."""
from pathlib import Path
from typing import Tuple

from fastapi import Form, HTTPException, UploadFile

from merge_designer.config import config
from merge_designer.domain.models import DocumentData
from merge_designer.domain.schema import parse_document_json
from merge_designer.services.mail_merge import MailMergeService


def validate_dataset_file(filename: str) -> None:
    """Validate that the uploaded file is a supported spreadsheet."""
    supported = config.dataset_import.supported_extensions
    if Path(filename or "").suffix.lower() not in supported:
        raise HTTPException(
            status_code=400,
            detail=f"File must be a CSV or Excel file ({', '.join(supported)})"
        )


async def read_dataset_upload(file: UploadFile) -> Tuple[bytes, str]:
    """Read the uploaded dataset bytes, enforcing the size limit."""
    validate_dataset_file(file.filename)
    max_bytes = config.dataset_import.max_upload_bytes
    contents = await file.read(max_bytes + 1)
    if len(contents) > max_bytes:
        raise HTTPException(status_code=413, detail="Uploaded file is too large")
    return contents, file.filename


def get_document_from_form(document: str = Form(...)) -> DocumentData:
    """Parse the JSON document template sent alongside an upload."""
    result = parse_document_json(document)
    if not result.ok:
        raise HTTPException(status_code=422, detail={"errors": result.errors})
    return result.document


def get_mail_merge_service() -> MailMergeService:
    """Create mail-merge service instance."""
    return MailMergeService()
