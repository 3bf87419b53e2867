"""CLI entry point for the mail-merge designer."""
import logging
import sys
from pathlib import Path

from merge_designer.domain.document_types import DOCUMENT_TYPES
from merge_designer.domain.exceptions import DocumentValidationError, ExportError, ParseError
from merge_designer.domain.schema import parse_document_json
from merge_designer.services.session import MergeSession


def load_session(design: str = None) -> MergeSession:
    """Start from a saved design JSON file, or from a document type's defaults."""
    if design is None or design in DOCUMENT_TYPES:
        return MergeSession(document_type=design or "label", sync_headers=True)

    design_path = Path(design)
    if not design_path.exists():
        print(f"Error: Design file '{design}' not found.")
        sys.exit(1)
    document = parse_document_json(design_path.read_text(encoding="utf-8")).unwrap()
    # A saved design already has its placeholders authored; keep them.
    return MergeSession(document=document, sync_headers=False)


def main(data_file: str, design: str = None, output_file: str = None):
    """Main CLI function."""
    data_path = Path(data_file)
    if not data_path.exists():
        print(f"Error: Data file '{data_file}' not found.")
        sys.exit(1)

    try:
        session = load_session(design)
        print(f"Document type: {session.document.document_type}")

        print("\n=== Importing dataset ===")
        summary = session.import_dataset(data_path.read_bytes(), data_path.name)
        if summary is None:
            print(f"Error: {session.tracker.import_error}")
            sys.exit(1)

        print(f"Headers ({summary.header_count}): {', '.join(summary.headers)}")
        print(f"Rows: {summary.row_count}")
        print(f"Fields: {summary.layer_count} ({summary.status})")

        print("\nFields:")
        for merge_field in session.document.fields:
            marker = "" if merge_field.visible else " (hidden)"
            print(f"  '{merge_field.name}' -> {merge_field.text!r} at ({merge_field.x:g}%, {merge_field.y:g}%){marker}")

        print("\n=== Exporting documents ===")
        result = session.export()

        output_path = Path(output_file) if output_file else Path(result.filename)
        output_path.write_bytes(result.content)
        print(f"Records merged: {result.record_count}")
        print(f"✓ Document saved as: {output_path}")

    except (ParseError, ExportError, DocumentValidationError) as e:
        print(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"Unexpected error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python -m merge_designer.cli.main <data_file> [design.json|document_type] [output_file]")
        sys.exit(1)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    data_file = sys.argv[1]
    design = sys.argv[2] if len(sys.argv) > 2 else None
    output_file = sys.argv[3] if len(sys.argv) > 3 else None
    main(data_file, design, output_file)
