import pytest

from md2docx import nodes
from md2docx.elements import NumberingRef, Paragraph, Run, Table
from md2docx.exceptions import MalformedInputError, ResourceUnavailableError, UnsupportedConstructError
from md2docx.state import CAPTION, IMAGE, TABLE


def _text(value):
    return nodes.Text(value=value)


def _item(text, *rest):
    return nodes.ListItem(children=[nodes.Paragraph(children=[_text(text)]), *rest])


def test_title_and_ordered_list(converter, state):
    root = nodes.Root(children=[
        nodes.Heading(depth=1, children=[_text('Title')]),
        nodes.List(ordered=True, start=1, children=[_item('a'), _item('b')]),
    ])

    elements = converter.convert(root)

    assert elements == [
        Paragraph(runs=[Run(text='Title')], style_id='Heading1'),
        Paragraph(runs=[Run(text='a')], style_id='BodyText', numbering=NumberingRef(3, 0)),
        Paragraph(runs=[Run(text='b')], style_id='BodyText', numbering=NumberingRef(3, 0)),
    ]
    assert state.max_heading_depth == 1
    assert state.list_numberings == [True]


def test_nested_list_allocates_outer_id_first(converter, state):
    inner = nodes.List(ordered=True, start=1, children=[_item('y')])
    root = nodes.Root(children=[
        nodes.List(ordered=False, children=[_item('x', inner)]),
    ])

    elements = converter.convert(root)

    assert [p.text for p in elements] == ['x', 'y']
    assert elements[0].numbering == NumberingRef(3, 0)
    assert elements[1].numbering == NumberingRef(4, 0)
    assert state.list_numberings == [False, True]


def test_list_item_continuation_is_unnumbered(converter):
    item = _item('first', nodes.Paragraph(children=[_text('more')]))
    elements = converter.convert(nodes.List(children=[item]))
    assert elements[0].numbering == NumberingRef(3, 0)
    assert elements[1].numbering is None


def test_heading_levels(converter, state):
    elements = converter.convert(nodes.Root(children=[
        nodes.Heading(depth=2, children=[_text('two')]),
        nodes.Heading(depth=4, children=[_text('four')]),
    ]))
    assert [p.style_id for p in elements] == ['Heading2', 'Heading4']
    assert [p.numbering for p in elements] == [NumberingRef(1, 0), NumberingRef(1, 2)]
    assert state.max_heading_depth == 4


@pytest.mark.parametrize('lst', [
    nodes.List(ordered=True, start=3, children=[]),
    nodes.List(ordered=False, start=1, children=[]),
])
def test_list_start_violations(converter, lst):
    with pytest.raises(MalformedInputError):
        converter.convert(lst)


def test_list_item_must_start_with_paragraph(converter):
    item = nodes.ListItem(children=[nodes.Code(value='x')])
    with pytest.raises(MalformedInputError):
        converter.convert(nodes.List(children=[item]))


def test_list_child_must_be_item(converter):
    with pytest.raises(MalformedInputError):
        converter.convert(nodes.List(children=[nodes.Paragraph(children=[_text('x')])]))


def test_code_block_lines(converter, state):
    code = nodes.Code(value='fn main() {}\nlet x = 1;\n', lang='Rust', meta='main.rs')

    table, caption = converter.convert(code)

    assert isinstance(table, Table)
    assert table.style_id == 'Table'
    assert len(table.rows) == 1 and len(table.rows[0].cells) == 1
    lines = table.rows[0].cells[0].elements
    assert [p.text for p in lines] == ['fn main() {}', 'let x = 1;']
    assert {p.style_id for p in lines} == {'Code-rust'}
    assert caption == Paragraph(runs=[Run(text='main.rs')], style_id='Caption')
    assert state.languages == ['rust']
    assert state.is_style_used(TABLE) and state.is_style_used(CAPTION)


def test_empty_code_block_has_no_line_paragraphs(converter, state):
    table, caption = converter.convert(nodes.Code(value=''))
    assert table.rows[0].cells[0].elements == []
    assert caption.text == ''
    assert state.languages == ['']


def test_block_quote_wraps_children_and_adds_spacer(converter):
    inner = nodes.BlockQuote(children=[nodes.Paragraph(children=[_text('deep')])])
    quote = nodes.BlockQuote(children=[nodes.Paragraph(children=[_text('outer')]), inner])

    table, spacer = converter.convert(quote)

    assert spacer == Paragraph()
    cell = table.rows[0].cells[0].elements
    assert cell[0].text == 'outer'
    assert isinstance(cell[1], Table)
    assert cell[2] == Paragraph()


def test_table_cells_and_alignment(converter, state):
    def row(*texts):
        return nodes.TableRow(children=[nodes.TableCell(children=[_text(t)]) for t in texts])

    table = nodes.Table(align=[None, 'left', 'right', 'center'],
                        children=[row('a', 'b', 'c', 'd'), row('1', '2', '3', '4')])

    [result] = converter.convert(table)

    assert result.style_id == 'Table'
    assert len(result.rows) == 2
    cells = [cell.elements[0] for cell in result.rows[1].cells]
    assert [p.text for p in cells] == ['1', '2', '3', '4']
    assert [p.alignment for p in cells] == ['both', 'left', 'right', 'center']
    assert {p.style_id for p in cells} == {'BodyText'}
    assert state.is_style_used(TABLE)


def test_table_width_mismatch_emits_nothing(converter, state):
    good = nodes.TableRow(children=[nodes.TableCell(), nodes.TableCell()])
    bad = nodes.TableRow(children=[nodes.TableCell()])
    table = nodes.Table(align=[None, None], children=[good, bad])

    with pytest.raises(MalformedInputError):
        converter.convert(table)
    assert not state.is_style_used(TABLE)


def test_image_paragraph_relative_to_input_dir(converter, state, png_file):
    para = nodes.Paragraph(children=[nodes.Image(url='pic.png', alt='A picture')])

    picture, caption = converter.convert(para)

    assert picture.style_id == 'Image'
    assert picture.runs[0].image == png_file.read_bytes()
    assert caption == Paragraph(runs=[Run(text='A picture')], style_id='Caption')
    assert state.is_style_used(IMAGE) and state.is_style_used(CAPTION)


def test_image_absolute_path_wins(converter, png_file):
    para = nodes.Paragraph(children=[nodes.Image(url=str(png_file), alt='')])
    picture, _ = converter.convert(para)
    assert picture.runs[0].image == png_file.read_bytes()


def test_missing_image(converter):
    para = nodes.Paragraph(children=[nodes.Image(url='nope.png', alt='')])
    with pytest.raises(ResourceUnavailableError) as excinfo:
        converter.convert(para)
    assert excinfo.value.path == 'nope.png'


@pytest.mark.parametrize('node', [
    nodes.ThematicBreak(),
    nodes.Html(value='<div></div>'),
    nodes.FootnoteDefinition(label='1'),
])
def test_unsupported_blocks(converter, node):
    with pytest.raises(UnsupportedConstructError) as excinfo:
        converter.convert(nodes.Root(children=[node]))
    assert excinfo.value.kind == node.kind
