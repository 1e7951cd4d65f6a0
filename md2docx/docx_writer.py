"""
Thin wrapper over python-docx that writes the output document model.

python-docx covers paragraphs, runs, pictures and core properties; styles,
numbering definitions and hyperlinks have no public API there and are built
as raw WordprocessingML elements with ``OxmlElement``.
"""

import io
import logging

import docx
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.image.exceptions import UnrecognizedImageError
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Mm
from PIL import Image

from .config import DEFAULT_CONFIG
from .elements import TABLE, Hyperlink, Table
from .exceptions import ResourceUnavailableError

logger = logging.getLogger('md2docx')

_PARAGRAPH_ALIGNMENT = {
    'left': WD_ALIGN_PARAGRAPH.LEFT,
    'center': WD_ALIGN_PARAGRAPH.CENTER,
    'right': WD_ALIGN_PARAGRAPH.RIGHT,
    'both': WD_ALIGN_PARAGRAPH.JUSTIFY,
}

_BORDER_EDGES = ('top', 'left', 'bottom', 'right', 'insideH', 'insideV')


def _sub(parent, tag, **attrs):
    """Append a new ``w:`` child element with ``w:``-qualified attributes."""
    elem = OxmlElement(tag)
    for name, value in attrs.items():
        elem.set(qn(f'w:{name}'), str(value))
    parent.append(elem)
    return elem


class DocxDocument:
    """Document under construction, serialized once at the end."""

    def __init__(self, document, config=None):
        self.document = document
        self.config = config if config is not None else DEFAULT_CONFIG

    @classmethod
    def new(cls, config=None):
        """Blank document whose numbering section holds no definitions."""
        document = docx.Document()

        numbering = document.part.numbering_part.element
        for child in list(numbering):
            numbering.remove(child)

        return cls(document, config)

    # --- Body ---

    def add_paragraph(self, paragraph):
        self._write_paragraph(self.document.add_paragraph(), paragraph)

    def add_table(self, table):
        rows, cols = self._table_shape(table)
        self._write_table(self.document.add_table(rows=rows, cols=cols), table)

    def _write_paragraph(self, target, paragraph):
        if paragraph.style_id:
            target._p.style = paragraph.style_id
        if paragraph.numbering is not None:
            num_pr = target._p.get_or_add_pPr().get_or_add_numPr()
            num_pr.get_or_add_ilvl().val = paragraph.numbering.level
            num_pr.get_or_add_numId().val = paragraph.numbering.num_id
        if paragraph.alignment:
            target.alignment = _PARAGRAPH_ALIGNMENT[paragraph.alignment]

        for item in paragraph.runs:
            if isinstance(item, Hyperlink):
                self._write_hyperlink(target, item)
            else:
                self._write_run(target, item)

    def _write_run(self, target, run):
        r = target.add_run(run.text)
        if run.style_id:
            r._r.style = run.style_id
        if run.bold:
            r.bold = True
        if run.italic:
            r.italic = True
        if run.strike:
            r.font.strike = True
        if run.image is not None:
            self._write_picture(r, run.image)
        return r

    def _write_hyperlink(self, target, hyperlink):
        r_id = target.part.relate_to(hyperlink.url, RT.HYPERLINK, is_external=True)
        link = OxmlElement('w:hyperlink')
        link.set(qn('r:id'), r_id)
        for run in hyperlink.runs:
            # add_run appends to the paragraph; move the run under the link
            link.append(self._write_run(target, run)._r)
        target._p.append(link)

    def _write_picture(self, r, data):
        try:
            with Image.open(io.BytesIO(data)) as im:
                px_width = im.size[0]
                dpi = im.info.get('dpi', (self.config.IMAGE_DEFAULT_DPI,))[0]
        except OSError as e:
            raise ResourceUnavailableError('<image>', f"Unreadable image data: {e}") from e

        if not dpi:
            dpi = self.config.IMAGE_DEFAULT_DPI
        width_mm = min(px_width / float(dpi) * 25.4, self.config.IMAGE_MAX_WIDTH_MM)

        try:
            r.add_picture(io.BytesIO(data), width=Mm(width_mm))
        except UnrecognizedImageError as e:
            raise ResourceUnavailableError('<image>', f"Unsupported image format: {e}") from e

    @staticmethod
    def _table_shape(table):
        return len(table.rows), max((len(row.cells) for row in table.rows), default=1)

    def _write_table(self, target, table):
        if table.style_id:
            target._tbl.tblPr.style = table.style_id

        for row, out_row in zip(table.rows, target.rows):
            for cell, out_cell in zip(row.cells, out_row.cells):
                self._write_cell(out_cell, cell.elements)

    def _write_cell(self, target, elements):
        tc = target._tc
        placeholder = target.paragraphs[0]._p

        for element in elements:
            if isinstance(element, Table):
                rows, cols = self._table_shape(element)
                nested = target.add_table(rows, cols)
                # _Cell.add_table appends an empty paragraph after the table
                tc.remove(tc[-1])
                self._write_table(nested, element)
            else:
                self._write_paragraph(target.add_paragraph(), element)

        if elements:
            tc.remove(placeholder)
        # a cell must end with a paragraph
        if tc[-1].tag != qn('w:p'):
            target.add_paragraph()

    # --- Styles ---

    def add_style(self, style):
        """Add a style definition, replacing a built-in style with the same id."""
        styles = self.document.styles.element
        for existing in styles.findall(qn('w:style')):
            if existing.get(qn('w:styleId')) == style.style_id:
                styles.remove(existing)

        elem = OxmlElement('w:style')
        elem.set(qn('w:type'), style.kind)
        elem.set(qn('w:styleId'), style.style_id)
        _sub(elem, 'w:name', val=style.name)
        if style.based_on:
            _sub(elem, 'w:basedOn', val=style.based_on)
        _sub(elem, 'w:qFormat')

        if style.kind != TABLE and style.alignment:
            _sub(_sub(elem, 'w:pPr'), 'w:jc', val=style.alignment)

        if style.font_ascii or style.font_east_asia or style.font_size:
            rpr = _sub(elem, 'w:rPr')
            if style.font_ascii or style.font_east_asia:
                fonts = _sub(rpr, 'w:rFonts')
                if style.font_ascii:
                    fonts.set(qn('w:ascii'), style.font_ascii)
                    fonts.set(qn('w:hAnsi'), style.font_ascii)
                if style.font_east_asia:
                    fonts.set(qn('w:eastAsia'), style.font_east_asia)
            if style.font_size:
                _sub(rpr, 'w:sz', val=style.font_size)
                _sub(rpr, 'w:szCs', val=style.font_size)

        if style.kind == TABLE:
            tbl_pr = _sub(elem, 'w:tblPr')
            if style.alignment:
                _sub(tbl_pr, 'w:jc', val=style.alignment)
            if style.bordered:
                borders = _sub(tbl_pr, 'w:tblBorders')
                for edge in _BORDER_EDGES:
                    _sub(borders, f'w:{edge}', val='single', sz=4, space=0, color='auto')

        styles.append(elem)

    # --- Numbering ---

    def add_abstract_numbering(self, abstract):
        numbering = self.document.part.numbering_part.element

        elem = OxmlElement('w:abstractNum')
        elem.set(qn('w:abstractNumId'), str(abstract.abstract_id))
        _sub(elem, 'w:multiLevelType', val='multilevel' if len(abstract.levels) > 1 else 'singleLevel')
        for level in abstract.levels:
            lvl = _sub(elem, 'w:lvl', ilvl=level.level)
            _sub(lvl, 'w:start', val=level.start)
            _sub(lvl, 'w:numFmt', val=level.fmt)
            _sub(lvl, 'w:suff', val=level.suffix)
            _sub(lvl, 'w:lvlText', val=level.text)
            _sub(lvl, 'w:lvlJc', val=level.justify)
            if level.indent_left is not None:
                ind = _sub(_sub(lvl, 'w:pPr'), 'w:ind', left=level.indent_left)
                if level.hanging is not None:
                    ind.set(qn('w:hanging'), str(level.hanging))

        # every w:abstractNum must precede the w:num elements
        first_num = numbering.find(qn('w:num'))
        if first_num is not None:
            first_num.addprevious(elem)
        else:
            numbering.append(elem)

    def add_numbering(self, instance):
        numbering = self.document.part.numbering_part.element
        num = _sub(numbering, 'w:num', numId=instance.num_id)
        _sub(num, 'w:abstractNumId', val=instance.abstract_id)

    # --- Metadata / output ---

    def set_core_properties(self, properties):
        """Set core properties from a {name: string} dict (title, author, ...)."""
        core = self.document.core_properties
        for key, value in properties.items():
            setattr(core, key, value)

    def serialize(self, stream):
        self.document.save(stream)
