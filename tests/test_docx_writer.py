import io

import docx
import pytest
from docx.oxml.ns import qn

from conftest import make_png
from md2docx.docx_writer import DocxDocument
from md2docx.elements import (
    CHARACTER,
    PARAGRAPH,
    TABLE,
    AbstractNumbering,
    Hyperlink,
    NumberingInstance,
    NumberingLevel,
    NumberingRef,
    Paragraph,
    Run,
    StyleDefinition,
    Table,
)
from md2docx.exceptions import ResourceUnavailableError


def _reopen(document):
    buffer = io.BytesIO()
    document.serialize(buffer)
    buffer.seek(0)
    return docx.Document(buffer)


def _style(doc, style_id):
    for elem in doc.styles.element.findall(qn('w:style')):
        if elem.get(qn('w:styleId')) == style_id:
            return elem
    return None


def test_new_document_has_empty_numbering():
    document = DocxDocument.new()
    numbering = document.document.part.numbering_part.element
    assert len(numbering) == 0


def test_paragraph_style_numbering_and_runs():
    document = DocxDocument.new()
    document.add_paragraph(Paragraph(
        runs=[Run(text='plain '), Run(text='bold', bold=True), Run(text=' gone', strike=True)],
        style_id='Heading2',
        numbering=NumberingRef(1, 0),
        alignment='center',
    ))

    [para] = _reopen(document).paragraphs

    assert para.text == 'plain bold gone'
    assert para._p.pPr.pStyle.val == 'Heading2'
    assert para._p.pPr.numPr.numId.val == 1
    assert para._p.pPr.numPr.ilvl.val == 0
    assert para.runs[1].bold is True
    assert para.runs[2].font.strike is True


def test_character_style_on_run():
    document = DocxDocument.new()
    document.add_paragraph(Paragraph(runs=[Run(text='x', style_id='InlineCode')]))
    [para] = _reopen(document).paragraphs
    assert para.runs[0]._r.style == 'InlineCode'


def test_hyperlink_is_external_relationship():
    document = DocxDocument.new()
    document.add_paragraph(Paragraph(runs=[
        Run(text='see '),
        Hyperlink(url='https://example.com', runs=[Run(text='here', italic=True)]),
    ]))

    doc = _reopen(document)
    [para] = doc.paragraphs
    links = para._p.findall(qn('w:hyperlink'))
    assert len(links) == 1
    rel = doc.part.rels[links[0].get(qn('r:id'))]
    assert rel.is_external and rel.target_ref == 'https://example.com'
    assert para.text == 'see here'


def test_nested_table_cells():
    inner = Table.single_cell([Paragraph(runs=[Run(text='inner')])], style_id='Table')
    outer = Table.single_cell([Paragraph(runs=[Run(text='outer')]), inner], style_id='Table')
    document = DocxDocument.new()
    document.add_table(outer)

    doc = _reopen(document)
    [table] = doc.tables
    assert table._tbl.tblPr.style == 'Table'
    cell = table.cell(0, 0)
    assert [p.text for p in cell.paragraphs] == ['outer', '']
    assert cell.tables[0].cell(0, 0).paragraphs[0].text == 'inner'
    # the cell ends with the paragraph added after the nested table
    assert cell._tc[-1].tag == qn('w:p')


def test_empty_cell_keeps_one_paragraph():
    document = DocxDocument.new()
    document.add_table(Table.single_cell([], style_id='Table'))
    [table] = _reopen(document).tables
    assert len(table.cell(0, 0).paragraphs) == 1


def test_add_style_replaces_builtin_definition():
    document = DocxDocument.new()
    document.add_style(StyleDefinition(
        'Heading1', PARAGRAPH, 'Heading 1', based_on='BodyText',
        font_ascii='Arial', font_east_asia='SimHei', font_size=36, alignment='center',
    ))

    doc = _reopen(document)
    matches = [e for e in doc.styles.element.findall(qn('w:style'))
               if e.get(qn('w:styleId')) == 'Heading1']
    assert len(matches) == 1
    style = matches[0]
    assert style.find(qn('w:basedOn')).get(qn('w:val')) == 'BodyText'
    assert style.find(qn('w:pPr')).find(qn('w:jc')).get(qn('w:val')) == 'center'
    fonts = style.find(qn('w:rPr')).find(qn('w:rFonts'))
    assert fonts.get(qn('w:ascii')) == 'Arial'
    assert fonts.get(qn('w:eastAsia')) == 'SimHei'
    assert style.find(qn('w:rPr')).find(qn('w:sz')).get(qn('w:val')) == '36'


def test_character_and_table_styles():
    document = DocxDocument.new()
    document.add_style(StyleDefinition('InlineCode', CHARACTER, 'Inline Code', font_ascii='Consolas'))
    document.add_style(StyleDefinition('Table', TABLE, 'Table', alignment='center', bordered=True))

    doc = _reopen(document)
    assert _style(doc, 'InlineCode').get(qn('w:type')) == 'character'
    tbl_pr = _style(doc, 'Table').find(qn('w:tblPr'))
    assert tbl_pr.find(qn('w:jc')).get(qn('w:val')) == 'center'
    assert tbl_pr.find(qn('w:tblBorders')).find(qn('w:insideH')) is not None


def test_abstract_numbering_precedes_instances():
    document = DocxDocument.new()
    level = NumberingLevel(level=0, fmt='decimal', text='%1.', indent_left=720, hanging=360)
    document.add_abstract_numbering(AbstractNumbering(1, [level]))
    document.add_numbering(NumberingInstance(1, 1))
    document.add_abstract_numbering(AbstractNumbering(3, [level]))
    document.add_numbering(NumberingInstance(4, 3))

    numbering = _reopen(document).part.numbering_part.element
    tags = [child.tag for child in numbering]
    assert tags == [qn('w:abstractNum')] * 2 + [qn('w:num')] * 2
    nums = numbering.findall(qn('w:num'))
    assert nums[1].get(qn('w:numId')) == '4'
    assert nums[1].find(qn('w:abstractNumId')).get(qn('w:val')) == '3'


def test_picture_is_capped_to_max_width():
    document = DocxDocument.new()
    # 2000 px at 96 dpi is far wider than the page
    document.add_paragraph(Paragraph(runs=[Run(image=make_png(2000, 10))], style_id='Image'))

    doc = _reopen(document)
    [shape] = doc.inline_shapes
    assert abs(shape.width.mm - document.config.IMAGE_MAX_WIDTH_MM) < 0.5


def test_picture_width_follows_dpi():
    document = DocxDocument.new()
    document.add_paragraph(Paragraph(runs=[Run(image=make_png(300, 30, dpi=300))]))
    [shape] = _reopen(document).inline_shapes
    assert abs(shape.width.mm - 25.4) < 0.5


def test_invalid_image_bytes():
    document = DocxDocument.new()
    with pytest.raises(ResourceUnavailableError):
        document.add_paragraph(Paragraph(runs=[Run(image=b'not an image')]))


def test_core_properties():
    document = DocxDocument.new()
    document.set_core_properties({'title': 'Report', 'keywords': 'a, b'})
    props = _reopen(document).core_properties
    assert props.title == 'Report'
    assert props.keywords == 'a, b'
