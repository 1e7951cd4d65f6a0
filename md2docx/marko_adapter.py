from __future__ import annotations

from typing import Union

from marko import Markdown

from . import nodes
from .exceptions import UnsupportedConstructError


class MarkoToMdastAdapter:
    """Converts a Marko AST into the typed node tree of ``md2docx.nodes``.

    Constructs the converter does not support (thematic breaks, raw HTML,
    footnotes, hard line breaks) are still mapped to their own node classes,
    so the converter can reject them by name instead of losing them here.
    """

    _ALIGNMENTS = ('left', 'center', 'right')

    def __init__(self):
        # GFM adds tables, strikethrough, task lists and alerts
        self.md = Markdown(extensions=['gfm', 'footnote'])

    def parse(self, markdown_text: str) -> nodes.Root:
        """Parse markdown and return the root of the node tree."""
        doc = self.md.parse(markdown_text)
        return nodes.Root(children=self._convert_blocks(doc.children))

    def _convert_blocks(self, children) -> list:
        blocks = []
        for child in children:
            block = self._convert_block(child)
            if block is not None:
                blocks.append(block)
        return blocks

    def _convert_block(self, element) -> Union[nodes.Node, None]:
        """Convert a Marko block element, None for elements without content."""
        elem_type = type(element).__name__

        if elem_type in ('Heading', 'SetextHeading'):
            return nodes.Heading(
                depth=element.level,
                children=self._convert_inlines(element.children),
            )
        elif elem_type == 'Paragraph':
            return nodes.Paragraph(children=self._convert_inlines(element.children))
        elif elem_type == 'List':
            return self._convert_list(element)
        elif elem_type == 'ListItem':
            return nodes.ListItem(children=self._convert_blocks(element.children))
        elif elem_type in ('FencedCode', 'CodeBlock'):
            return self._convert_code(element)
        elif elem_type == 'Table':
            return self._convert_table(element)
        elif elem_type in ('Quote', 'Alert'):
            return nodes.BlockQuote(children=self._convert_blocks(element.children))
        elif elem_type == 'ThematicBreak':
            return nodes.ThematicBreak()
        elif elem_type == 'HTMLBlock':
            return nodes.Html(value=element.body)
        elif elem_type == 'FootnoteDef':
            return nodes.FootnoteDefinition(
                label=element.label,
                children=self._convert_blocks(element.children),
            )
        elif elem_type in ('BlankLine', 'LinkRefDef'):
            return None

        raise UnsupportedConstructError(elem_type)

    def _convert_list(self, elem) -> nodes.List:
        items = self._convert_blocks(elem.children)
        ordered = bool(elem.ordered)
        return nodes.List(
            children=items,
            ordered=ordered,
            # Marko reports start=1 for bullet lists too
            start=elem.start if ordered else None,
        )

    def _convert_code(self, elem) -> nodes.Code:
        """FencedCode / indented CodeBlock -> Code, with the info string split into lang and meta."""
        code = ''.join(child.children for child in elem.children)
        return nodes.Code(
            value=code,
            lang=getattr(elem, 'lang', '') or None,
            meta=getattr(elem, 'extra', '') or None,
        )

    def _convert_table(self, elem) -> nodes.Table:
        rows = []
        for row in elem.children:
            cells = [
                nodes.TableCell(children=self._convert_inlines(cell.children))
                for cell in row.children
            ]
            rows.append(nodes.TableRow(children=cells))

        # GFM stores the column alignment on each cell; the head row defines it
        head = elem.children[0] if elem.children else None
        align = []
        if head is not None:
            for cell in head.children:
                cell_align = getattr(cell, 'align', None)
                align.append(cell_align if cell_align in self._ALIGNMENTS else None)

        return nodes.Table(children=rows, align=align)

    def _convert_inlines(self, children) -> list:
        if children is None:
            return []
        if isinstance(children, str):
            return [nodes.Text(value=children)]

        result = []
        for child in children:
            inline = self._convert_inline(child)
            # Merge adjacent text so soft breaks do not split runs
            if (isinstance(inline, nodes.Text) and result
                    and isinstance(result[-1], nodes.Text)):
                result[-1] = nodes.Text(value=result[-1].value + inline.value)
            else:
                result.append(inline)
        return result

    def _convert_inline(self, elem) -> nodes.Node:
        elem_type = type(elem).__name__

        if elem_type in ('RawText', 'Literal'):
            return nodes.Text(value=elem.children)
        elif elem_type == 'CodeSpan':
            return nodes.InlineCode(value=elem.children)
        elif elem_type == 'Emphasis':
            return nodes.Emphasis(children=self._convert_inlines(elem.children))
        elif elem_type == 'StrongEmphasis':
            return nodes.Strong(children=self._convert_inlines(elem.children))
        elif elem_type == 'Strikethrough':
            return nodes.Delete(children=self._convert_inlines(elem.children))
        elif elem_type == 'Link':
            return nodes.Link(
                url=elem.dest,
                children=self._convert_inlines(elem.children),
                title=elem.title or None,
            )
        elif elem_type in ('AutoLink', 'Url'):
            return nodes.Link(
                url=elem.dest,
                children=self._convert_inlines(elem.children),
            )
        elif elem_type == 'Image':
            return nodes.Image(
                url=elem.dest,
                alt=self._plain_text(elem.children),
                title=elem.title or None,
            )
        elif elem_type == 'LineBreak':
            if elem.soft:
                return nodes.Text(value=' ')
            return nodes.Break()
        elif elem_type == 'InlineHTML':
            return nodes.Html(value=elem.children)
        elif elem_type == 'FootnoteRef':
            return nodes.FootnoteReference(label=elem.label)

        raise UnsupportedConstructError(elem_type, 'inline content')

    def _plain_text(self, children) -> str:
        """Flatten inline children to text, used for image alt text."""
        if isinstance(children, str):
            return children
        parts = []
        for child in children:
            if type(child).__name__ == 'LineBreak':
                parts.append(' ')
            else:
                parts.append(self._plain_text(getattr(child, 'children', '')))
        return ''.join(parts)
