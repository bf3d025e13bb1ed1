"""DOCX renderer using python-docx.

Lowers Rirekisho and Shokumu Keirekisho layouts into Word documents and
serializes them to bytes.
"""

from __future__ import annotations

import logging
from io import BytesIO

from docx import Document
from docx.document import Document as DocxDocument
from docx.enum.table import WD_ROW_HEIGHT_RULE, WD_TABLE_ALIGNMENT
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.image.exceptions import UnrecognizedImageError
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Cm, Emu, Mm, Pt
from docx.table import Table, _Cell

from rirekisho.documents.exceptions import DocumentRenderError
from rirekisho.documents.rirekisho import (
    CERTIFICATION_COLUMN,
    HISTORY_COLUMN,
    MONTH_COLUMN,
    MOTIVATION_HEADING,
    PHOTO_PLACEHOLDER,
    PHOTO_SPAN_ROWS,
    REQUESTS_HEADING,
    YEAR_COLUMN,
    RirekishoLayout,
)
from rirekisho.documents.rows import Row, RowKind
from rirekisho.documents.shokumu import (
    ACHIEVEMENTS_HEADING,
    DUTIES_HEADING,
    LANGUAGES_HEADING,
    SELF_PROMOTION_HEADING,
    SKILLS_HEADING,
    SUMMARY_HEADING,
    TITLE_PREFIX,
    WORK_HEADING,
    ShokumuLayout,
)
from rirekisho.documents.styles import DEFAULT_STYLE, DocumentStyle

logger = logging.getLogger(__name__)

BULLET_STYLE = "List Bullet"
ROW_HEIGHT_CM = 0.75
FREE_TEXT_LINE_CM = 0.6
PAGE_MARGIN_MM = 15

BORDER_EDGES = ("top", "left", "bottom", "right", "insideH", "insideV")


class DocxRenderer:
    """Word document renderer for both application documents.

    The renderer holds no per-document state, so one instance can render
    several layouts, including concurrently.
    """

    def __init__(self, style: DocumentStyle = DEFAULT_STYLE):
        """Initialize the renderer.

        Args:
            style: Immutable style configuration for fonts and borders.
        """
        self.style = style

    # ------------------------------------------------------------------
    # Public API

    def render_rirekisho(self, layout: RirekishoLayout) -> bytes:
        """Render the Rirekisho layout to DOCX bytes.

        Raises:
            DocumentRenderError: If the document cannot be built or serialized.
        """
        try:
            doc = self.build_rirekisho(layout)
            return self._to_bytes(doc)
        except Exception as e:
            logger.error(f"Failed to render rirekisho: {e}")
            raise DocumentRenderError(f"Failed to render rirekisho: {e}", e) from e

    def render_shokumu(self, layout: ShokumuLayout) -> bytes:
        """Render the Shokumu Keirekisho layout to DOCX bytes.

        Raises:
            DocumentRenderError: If the document cannot be built or serialized.
        """
        try:
            doc = self.build_shokumu(layout)
            return self._to_bytes(doc)
        except Exception as e:
            logger.error(f"Failed to render shokumu keirekisho: {e}")
            raise DocumentRenderError(
                f"Failed to render shokumu keirekisho: {e}", e
            ) from e

    def build_rirekisho(self, layout: RirekishoLayout) -> DocxDocument:
        """Build the two-page Rirekisho document."""
        doc = self._new_document(layout.title)

        # Page 1
        self._add_title(doc, layout.title)
        self._add_paragraph(doc, layout.date_line, align=WD_ALIGN_PARAGRAPH.RIGHT)
        self._add_identity_grid(doc, layout)
        self._add_spacer(doc)
        self._add_row_table(doc, HISTORY_COLUMN, layout.history_rows)

        doc.add_page_break()

        # Page 2
        self._add_row_table(doc, CERTIFICATION_COLUMN, layout.certification_rows)
        self._add_spacer(doc)
        self._add_free_text_block(doc, MOTIVATION_HEADING, layout.motivation)
        self._add_spacer(doc)
        self._add_free_text_block(doc, REQUESTS_HEADING, layout.personal_requests)

        return doc

    def build_shokumu(self, layout: ShokumuLayout) -> DocxDocument:
        """Build the free-form Shokumu Keirekisho document."""
        doc = self._new_document(layout.title)

        self._add_title(doc, layout.title)
        self._add_paragraph(doc, layout.date_line, align=WD_ALIGN_PARAGRAPH.RIGHT)
        self._add_paragraph(doc, layout.name_line, align=WD_ALIGN_PARAGRAPH.RIGHT)

        for heading in layout.section_order:
            self._add_section_heading(doc, heading)
            if heading == SUMMARY_HEADING:
                self._add_body(doc, layout.summary)
            elif heading == WORK_HEADING:
                self._add_work_blocks(doc, layout)
            elif heading == SKILLS_HEADING:
                for skill in layout.skills:
                    self._add_bullet(doc, skill)
                if layout.languages:
                    self._add_subheading(doc, LANGUAGES_HEADING)
                    for line in layout.languages:
                        self._add_body(doc, line)
            elif heading == SELF_PROMOTION_HEADING:
                self._add_body(doc, layout.self_promotion)

        self._add_paragraph(doc, layout.closing, align=WD_ALIGN_PARAGRAPH.RIGHT)
        return doc

    # ------------------------------------------------------------------
    # Document scaffolding

    def _new_document(self, title: str) -> DocxDocument:
        doc = Document()
        doc.core_properties.title = title

        section = doc.sections[0]
        section.page_width = Mm(210)
        section.page_height = Mm(297)
        for side in ("left_margin", "right_margin", "top_margin", "bottom_margin"):
            setattr(section, side, Mm(PAGE_MARGIN_MM))

        normal = doc.styles["Normal"]
        normal.font.name = self.style.font_name
        normal.font.size = Pt(self.style.font_size)
        normal.element.rPr.rFonts.set(qn("w:eastAsia"), self.style.font_name)
        return doc

    def _to_bytes(self, doc: DocxDocument) -> bytes:
        buffer = BytesIO()
        doc.save(buffer)
        return buffer.getvalue()

    def _style_run(self, run, size: float | None = None, bold: bool = False) -> None:
        """Apply the style font, including the East Asian slot."""
        run.font.name = self.style.font_name
        run.font.size = Pt(size or self.style.font_size)
        run.bold = bold
        run._element.rPr.rFonts.set(qn("w:eastAsia"), self.style.font_name)

    # ------------------------------------------------------------------
    # Paragraph helpers

    def _add_paragraph(
        self,
        container,
        text: str,
        *,
        size: float | None = None,
        bold: bool = False,
        align=None,
        style: str | None = None,
    ):
        p = container.add_paragraph(style=style) if style else container.add_paragraph()
        if align is not None:
            p.alignment = align
        p.paragraph_format.space_after = Pt(2)
        p.paragraph_format.space_before = Pt(0)
        if text:
            self._style_run(p.add_run(text), size=size, bold=bold)
        return p

    def _add_title(self, doc: DocxDocument, title: str) -> None:
        p = self._add_paragraph(
            doc,
            title,
            size=self.style.title_font_size,
            bold=True,
            align=WD_ALIGN_PARAGRAPH.CENTER,
        )
        p.paragraph_format.space_after = Pt(6)

    def _add_section_heading(self, doc: DocxDocument, heading: str) -> None:
        p = self._add_paragraph(
            doc, heading, size=self.style.heading_font_size, bold=True
        )
        p.paragraph_format.space_before = Pt(10)
        p.paragraph_format.space_after = Pt(4)

    def _add_subheading(self, doc: DocxDocument, heading: str) -> None:
        p = self._add_paragraph(doc, heading, bold=True)
        p.paragraph_format.space_before = Pt(4)

    def _add_body(self, container, text: str) -> None:
        """Add one paragraph per line; empty text leaves one blank paragraph."""
        lines = [line.strip() for line in text.splitlines() if line.strip()]
        if not lines:
            self._add_paragraph(container, "")
            return
        for line in lines:
            self._add_paragraph(container, line)

    def _add_bullet(self, doc: DocxDocument, text: str) -> None:
        self._add_paragraph(doc, text, style=BULLET_STYLE)

    def _add_spacer(self, doc: DocxDocument) -> None:
        doc.add_paragraph()

    def _add_work_blocks(self, doc: DocxDocument, layout: ShokumuLayout) -> None:
        for block in layout.work_blocks:
            p = self._add_paragraph(doc, "")
            p.paragraph_format.space_before = Pt(6)
            self._style_run(p.add_run(block.organization), bold=True)
            if block.period:
                self._style_run(p.add_run(f"　（{block.period}）"))

            if block.title:
                self._add_paragraph(doc, f"{TITLE_PREFIX}{block.title}")

            self._add_subheading(doc, DUTIES_HEADING)
            self._add_body(doc, block.duties)

            if block.has_achievements:
                self._add_subheading(doc, ACHIEVEMENTS_HEADING)
                for achievement in block.achievements:
                    self._add_bullet(doc, achievement)

    # ------------------------------------------------------------------
    # Table helpers

    def _set_table_borders(self, table: Table) -> None:
        """Draw every edge of the table with the style's border."""
        tbl_pr = table._tbl.tblPr
        borders = OxmlElement("w:tblBorders")
        for edge in BORDER_EDGES:
            element = OxmlElement(f"w:{edge}")
            element.set(qn("w:val"), self.style.border_style)
            element.set(qn("w:sz"), str(self.style.border_size))
            element.set(qn("w:space"), "0")
            element.set(qn("w:color"), self.style.border_color)
            borders.append(element)

        # tblBorders must precede tblLayout/tblLook in tblPr
        successor = tbl_pr.find(qn("w:tblLayout"))
        if successor is None:
            successor = tbl_pr.find(qn("w:tblLook"))
        if successor is not None:
            successor.addprevious(borders)
        else:
            tbl_pr.append(borders)

    def _new_table(self, doc: DocxDocument, rows: int, widths_cm: list[float]) -> Table:
        table = doc.add_table(rows=rows, cols=len(widths_cm))
        table.alignment = WD_TABLE_ALIGNMENT.CENTER
        table.autofit = False
        self._set_table_borders(table)
        for column_index, width in enumerate(widths_cm):
            for cell in table.columns[column_index].cells:
                cell.width = Cm(width)
        return table

    def _write_cell(
        self,
        cell: _Cell,
        text: str,
        *,
        bold: bool = False,
        align=None,
    ) -> None:
        p = cell.paragraphs[0]
        if align is not None:
            p.alignment = align
        if text:
            self._style_run(p.add_run(text), bold=bold)

    def _add_row_table(self, doc: DocxDocument, column_title: str, rows: list[Row]) -> Table:
        """Render a year | month | text table from row descriptors.

        The first table row is the column header; every descriptor becomes
        exactly one ruled row after it.
        """
        style = self.style
        table = self._new_table(
            doc,
            rows=len(rows) + 1,
            widths_cm=[style.year_column_cm, style.month_column_cm, style.entry_column_cm],
        )

        header = table.rows[0].cells
        center = WD_ALIGN_PARAGRAPH.CENTER
        self._write_cell(header[0], YEAR_COLUMN, align=center)
        self._write_cell(header[1], MONTH_COLUMN, align=center)
        self._write_cell(header[2], column_title, align=center)

        for index, row in enumerate(rows, start=1):
            table_row = table.rows[index]
            table_row.height = Cm(ROW_HEIGHT_CM)
            table_row.height_rule = WD_ROW_HEIGHT_RULE.AT_LEAST
            cells = table_row.cells

            if row.kind is RowKind.PADDING:
                continue

            self._write_cell(cells[0], row.year, align=center)
            self._write_cell(cells[1], row.month, align=center)

            if row.kind is RowKind.HEADING:
                self._write_cell(cells[2], row.text, align=center)
            elif row.align_right:
                self._write_cell(cells[2], row.text, align=WD_ALIGN_PARAGRAPH.RIGHT)
            else:
                self._write_cell(cells[2], row.text)

        return table

    def _add_identity_grid(self, doc: DocxDocument, layout: RirekishoLayout) -> None:
        """Label/value grid with the photo cell spanning the top rows."""
        style = self.style
        fields = layout.identity
        table = self._new_table(
            doc,
            rows=len(fields),
            widths_cm=[style.label_column_cm, style.value_column_cm, style.photo_column_cm],
        )

        span = min(PHOTO_SPAN_ROWS, len(fields))
        photo_cell = table.cell(0, 2).merge(table.cell(span - 1, 2))
        for row_index in range(span, len(fields)):
            table.cell(row_index, 1).merge(table.cell(row_index, 2))

        for row_index, identity_field in enumerate(fields):
            table.rows[row_index].height = Cm(ROW_HEIGHT_CM)
            table.rows[row_index].height_rule = WD_ROW_HEIGHT_RULE.AT_LEAST
            self._write_cell(table.cell(row_index, 0), identity_field.label, bold=True)
            self._write_cell(table.cell(row_index, 1), identity_field.value)

        self._fill_photo_cell(photo_cell, layout)

    def _fill_photo_cell(self, cell: _Cell, layout: RirekishoLayout) -> None:
        p = cell.paragraphs[0]
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER
        if layout.photo is None:
            self._style_run(p.add_run(layout.photo_placeholder or ""))
            return

        width, height = layout.photo.size.to_emu()
        run = p.add_run()
        try:
            run.add_picture(BytesIO(layout.photo.data), width=Emu(width), height=Emu(height))
        except UnrecognizedImageError as e:
            logger.warning(f"Photo is not an embeddable image, drawing placeholder: {e}")
            run.text = PHOTO_PLACEHOLDER
            self._style_run(run)

    def _add_free_text_block(self, doc: DocxDocument, heading: str, text: str) -> None:
        """Bordered heading cell above a content cell with a minimum height."""
        table = self._new_table(doc, rows=2, widths_cm=[
            self.style.year_column_cm + self.style.month_column_cm + self.style.entry_column_cm
        ])
        self._write_cell(table.cell(0, 0), heading, bold=True)

        content = table.cell(1, 0)
        lines = [line.strip() for line in text.splitlines() if line.strip()]
        if lines:
            self._write_cell(content, lines[0])
            for line in lines[1:]:
                self._add_paragraph(content, line)

        table.rows[1].height = Cm(FREE_TEXT_LINE_CM * self.style.free_text_min_lines)
        table.rows[1].height_rule = WD_ROW_HEIGHT_RULE.AT_LEAST
