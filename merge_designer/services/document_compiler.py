"""Compiles merged field sets into a paginated DOCX document."""
import logging
import math
import re
from dataclasses import dataclass
from io import BytesIO
from typing import Callable, List, Optional, Sequence

from docx import Document
from docx.enum.section import WD_ORIENT, WD_SECTION
from docx.enum.table import WD_CELL_VERTICAL_ALIGNMENT, WD_ROW_HEIGHT_RULE
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_LINE_SPACING
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, RGBColor, Twips

from merge_designer.config import ExportConfig, config
from merge_designer.domain.document_types import DocumentDimensions, get_document_type_config
from merge_designer.domain.exceptions import ExportError
from merge_designer.domain.models import DocumentData, FieldGroup, MergeField
from merge_designer.domain.themes import resolve_background_color
from merge_designer.services.layout_grouping import LinePlacement, gap_spaces, layout_lines
from merge_designer.utils.normalize import clamp_font_size, hex_to_docx_color

logger = logging.getLogger(__name__)

TWIPS_PER_INCH = 1440

LINE_BREAK_PATTERN = re.compile(r"\r?\n")

PARAGRAPH_ALIGNMENTS = {
    "left": WD_ALIGN_PARAGRAPH.LEFT,
    "center": WD_ALIGN_PARAGRAPH.CENTER,
    "right": WD_ALIGN_PARAGRAPH.RIGHT,
}


@dataclass(frozen=True)
class LabelGeometry:
    """Fixed grid geometry of a label sheet, in twips."""
    page_margin: int
    cell_width: int
    row_height: int
    cell_margin: int
    labels_per_row: int
    rows_per_page: int

    @property
    def labels_per_page(self) -> int:
        return self.labels_per_row * self.rows_per_page

    @property
    def cell_usable_height(self) -> int:
        return self.row_height - self.cell_margin * 2

    @classmethod
    def from_dimensions(cls, dims: DocumentDimensions, export_config: ExportConfig) -> "LabelGeometry":
        page_width = dims.width * TWIPS_PER_INCH
        page_height = dims.height * TWIPS_PER_INCH
        page_margin = round(export_config.label_page_margin_inches * TWIPS_PER_INCH)
        printable_width = page_width - page_margin * 2
        printable_height = page_height - page_margin * 2
        # Some word processors force wider vertical margins than requested;
        # rows are sized to fit inside the larger of the two.
        vertical_margin = max(page_margin, export_config.label_safe_margin_inches * TWIPS_PER_INCH)
        safe_height = min(printable_height, page_height - vertical_margin * 2)
        return cls(
            page_margin=page_margin,
            cell_width=math.floor(printable_width / dims.labels_per_row),
            row_height=math.floor(safe_height / dims.rows_per_page),
            cell_margin=export_config.label_cell_margin_twips,
            labels_per_row=dims.labels_per_row,
            rows_per_page=dims.rows_per_page,
        )


def join_lines(text: str) -> str:
    """Normalize CRLF/LF to a single "\\n" per break, dropping empty lines."""
    return "\n".join(line for line in LINE_BREAK_PATTERN.split(text) if line)


def chunk(items: Sequence, size: int) -> List[list]:
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


class DocumentCompiler:
    """Builds a DOCX from one template and the resolved field set of each record.

    Letters, certificates and envelopes get one page per record; labels are
    packed into a fixed table grid, several records per page. The compiler
    keeps no state between calls and never mutates its inputs.
    """

    def __init__(self, export_config: Optional[ExportConfig] = None):
        self.config = export_config or config.export

    def build(self, document: DocumentData, record_field_sets: Sequence[Sequence[MergeField]]) -> bytes:
        if not record_field_sets:
            raise ExportError("No documents available to export")

        type_config = get_document_type_config(document.document_type)
        background = hex_to_docx_color(resolve_background_color(document))
        output = Document()

        if type_config.is_multi_label:
            pages = self._build_label_pages(output, document, type_config.dimensions, record_field_sets, background)
        else:
            pages = self._build_record_pages(output, document, type_config.dimensions, record_field_sets, background)

        buffer = BytesIO()
        output.save(buffer)
        logger.info(
            "Compiled %d record(s) into %d page(s) for %s",
            len(record_field_sets), pages, document.document_type,
        )
        return buffer.getvalue()

    def _build_record_pages(self, output, document, dims, record_field_sets, background) -> int:
        margin = round(self.config.page_margin_inches * TWIPS_PER_INCH)
        usable_height = round(dims.height * TWIPS_PER_INCH) - margin * 2
        _apply_page_background(output, background)

        for index, fields in enumerate(record_field_sets):
            section = output.sections[0] if index == 0 else output.add_section(WD_SECTION.NEW_PAGE)
            _configure_section(section, dims, margin)
            self._write_lines(output.add_paragraph, fields, usable_height, document.text_align)
        return len(record_field_sets)

    def _build_label_pages(self, output, document, dims, record_field_sets, background) -> int:
        geometry = LabelGeometry.from_dimensions(dims, self.config)
        pages = chunk(record_field_sets, geometry.labels_per_page)

        for index, page_records in enumerate(pages):
            section = output.sections[0] if index == 0 else output.add_section(WD_SECTION.NEW_PAGE)
            _configure_section(section, dims, geometry.page_margin)
            self._add_label_table(output, document, geometry, page_records, background)
        return len(pages)

    def _add_label_table(self, output, document, geometry, page_records, background) -> None:
        table = output.add_table(rows=geometry.rows_per_page, cols=geometry.labels_per_row)
        table.autofit = False
        for column in table.columns:
            column.width = Twips(geometry.cell_width)

        for row_index, row in enumerate(table.rows):
            row.height = Twips(geometry.row_height)
            row.height_rule = WD_ROW_HEIGHT_RULE.EXACTLY
            for col_index, cell in enumerate(row.cells):
                slot = row_index * geometry.labels_per_row + col_index
                fields = page_records[slot] if slot < len(page_records) else None
                cell.width = Twips(geometry.cell_width)
                # Unused slots stay in the grid so sheets keep their print alignment.
                if not fields:
                    _style_cell(cell, geometry.cell_margin)
                    continue
                _style_cell(cell, geometry.cell_margin, fill=background)
                cell.vertical_alignment = WD_CELL_VERTICAL_ALIGNMENT.TOP
                self._write_lines(
                    _cell_paragraph_factory(cell),
                    fields,
                    geometry.cell_usable_height,
                    document.text_align,
                )

    def _write_lines(
        self,
        new_paragraph: Callable,
        fields: Sequence[MergeField],
        usable_height: int,
        default_alignment: str,
    ) -> None:
        placements = layout_lines(fields, usable_height, default_alignment)
        if not placements:
            new_paragraph()
            return
        for placement in placements:
            paragraph = new_paragraph()
            self._format_paragraph(paragraph, placement)
            self._add_runs(paragraph, placement.group)

    def _format_paragraph(self, paragraph, placement: LinePlacement) -> None:
        paragraph.alignment = PARAGRAPH_ALIGNMENTS.get(placement.alignment, WD_ALIGN_PARAGRAPH.CENTER)
        fmt = paragraph.paragraph_format
        fmt.space_before = Twips(placement.spacing_before)
        fmt.space_after = Twips(0)
        fmt.line_spacing = Twips(placement.line_height)
        fmt.line_spacing_rule = WD_LINE_SPACING.AT_LEAST

    def _add_runs(self, paragraph, group: FieldGroup) -> None:
        previous = None
        for merge_field in group.fields:
            if previous is not None:
                spacer = paragraph.add_run(" " * gap_spaces(previous.x, merge_field.x))
                self._style_run(spacer, merge_field)
            self._style_run(paragraph.add_run(join_lines(merge_field.text)), merge_field)
            previous = merge_field

    def _style_run(self, run, merge_field: MergeField) -> None:
        run.font.name = self.config.font_name
        run.font.size = Pt(clamp_font_size(merge_field.font_size))
        run.font.bold = self.config.bold
        run.font.color.rgb = RGBColor.from_string(hex_to_docx_color(merge_field.color))


def _configure_section(section, dims: DocumentDimensions, margin: int) -> None:
    landscape = dims.orientation == "landscape"
    section.orientation = WD_ORIENT.LANDSCAPE if landscape else WD_ORIENT.PORTRAIT
    section.page_width = Twips(round(dims.width * TWIPS_PER_INCH))
    section.page_height = Twips(round(dims.height * TWIPS_PER_INCH))
    section.top_margin = Twips(margin)
    section.bottom_margin = Twips(margin)
    section.left_margin = Twips(margin)
    section.right_margin = Twips(margin)


def _cell_paragraph_factory(cell) -> Callable:
    """First call reuses the cell's initial empty paragraph."""
    unused = [cell.paragraphs[0]] if cell.paragraphs else []

    def new_paragraph():
        return unused.pop() if unused else cell.add_paragraph()

    return new_paragraph


def _style_cell(cell, margin: int, fill: Optional[str] = None) -> None:
    tc_pr = cell._tc.get_or_add_tcPr()
    if fill:
        shd = OxmlElement("w:shd")
        shd.set(qn("w:val"), "clear")
        shd.set(qn("w:color"), "auto")
        shd.set(qn("w:fill"), fill)
        tc_pr.append(shd)
    tc_mar = OxmlElement("w:tcMar")
    for side in ("top", "left", "bottom", "right"):
        node = OxmlElement(f"w:{side}")
        node.set(qn("w:w"), str(margin))
        node.set(qn("w:type"), "dxa")
        tc_mar.append(node)
    tc_pr.append(tc_mar)


def _apply_page_background(output, fill: str) -> None:
    background = OxmlElement("w:background")
    background.set(qn("w:color"), fill)
    output.element.insert(0, background)

    settings = output.settings.element
    display = OxmlElement("w:displayBackgroundShape")
    zoom = settings.find(qn("w:zoom"))
    if zoom is not None:
        zoom.addnext(display)
    else:
        settings.insert(0, display)
