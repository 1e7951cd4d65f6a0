import logging
import os

from . import nodes
from . import state as used
from .config import DEFAULT_CONFIG
from .docx_writer import DocxDocument
from .elements import Cell, NumberingRef, Paragraph, Row, Run, Table
from .exceptions import MalformedInputError, ResourceUnavailableError, UnsupportedConstructError
from .frontmatter_parser import metadata_to_core_properties
from .numbering import HEADING_NUMBERING_ID, heading_numbering_level, synthesize_numbering
from .state import RunState
from .styles import (
    BODY_TEXT_STYLE_ID,
    CAPTION_STYLE_ID,
    IMAGE_STYLE_ID,
    TABLE_STYLE_ID,
    code_style_id,
    heading_style_id,
    synthesize_styles,
)
from .text import InlineConverter

logger = logging.getLogger('md2docx')

# Markdown column alignment -> paragraph alignment of the cell content
_CELL_ALIGN_MAP = {
    None: 'both',
    'left': 'left',
    'right': 'right',
    'center': 'center',
}


class MarkdownToDocx:
    """Recursive block converter from the Markdown node tree to document elements.

    Every construct outside the supported set raises UnsupportedConstructError
    instead of being skipped. Facts needed for the style and numbering
    sections are recorded in ``self.state`` while converting.
    """

    def __init__(self, input_dir=None, state=None, config=None):
        # Directory of the source file, for resolving relative image paths
        self.input_dir = input_dir
        self.state = state if state is not None else RunState()
        self.config = config if config is not None else DEFAULT_CONFIG
        self.inline = InlineConverter(self.state)

        self._handlers = {
            nodes.Root: self._handle_root,
            nodes.Heading: self._handle_heading,
            nodes.Paragraph: self._handle_paragraph,
            nodes.List: self._handle_list,
            nodes.Code: self._handle_code,
            nodes.BlockQuote: self._handle_block_quote,
            nodes.Table: self._handle_table,
        }

    @staticmethod
    def build_document(root, input_dir=None, overrides=None, metadata=None, config=None):
        """Convert a node tree into a complete DocxDocument.

        Args:
            root: nodes.Root of the document
            input_dir: Directory used to resolve relative image paths
            overrides: Optional {style_id: {key: value}} style override table
            metadata: Optional front matter dict (title, author, ...)
            config: Optional ConversionConfig instance

        Returns:
            DocxDocument ready to be serialized

        Raises:
            ConversionError: If the tree contains unsupported or malformed input
            InvalidOverrideError: If a style override is invalid
        """
        if config is None:
            config = DEFAULT_CONFIG

        state = RunState()
        converter = MarkdownToDocx(input_dir=input_dir, state=state, config=config)
        elements = converter.convert(root)

        numbering = synthesize_numbering(state, config)
        styles = synthesize_styles(state, overrides, config)

        document = DocxDocument.new(config)
        for element in elements:
            if isinstance(element, Table):
                document.add_table(element)
            else:
                document.add_paragraph(element)
        for style in styles:
            document.add_style(style)
        for abstract in numbering.abstracts:
            document.add_abstract_numbering(abstract)
        for instance in numbering.instances:
            document.add_numbering(instance)
        if metadata:
            document.set_core_properties(metadata_to_core_properties(metadata))

        logger.debug("Built document: %d top-level elements, %d styles",
                     len(elements), len(styles))
        return document

    @staticmethod
    def convert_to_docx(root, output_path, input_dir=None, overrides=None, metadata=None, config=None):
        """Convert a node tree and write it to ``output_path``.

        Nothing is written unless the whole conversion succeeds.
        """
        document = MarkdownToDocx.build_document(
            root, input_dir=input_dir, overrides=overrides, metadata=metadata, config=config
        )
        with open(output_path, 'wb') as f:
            document.serialize(f)
        logger.info("Successfully created %s", output_path)

    def convert(self, node):
        """Convert one block node into a list of Paragraph/Table elements."""
        handler = self._handlers.get(type(node))
        if handler is None:
            raise UnsupportedConstructError(node.kind)
        return handler(node)

    def _convert_children(self, children):
        elements = []
        for child in children:
            elements.extend(self.convert(child))
        return elements

    # --- Block Handlers ---

    def _handle_root(self, root):
        return self._convert_children(root.children)

    def _handle_heading(self, heading):
        self.state.record_heading_depth(heading.depth)

        para = Paragraph(
            runs=self.inline.convert(heading.children),
            style_id=heading_style_id(heading.depth),
        )
        level = heading_numbering_level(heading.depth)
        if level is not None:
            para.numbering = NumberingRef(HEADING_NUMBERING_ID, level)
        return [para]

    def _handle_paragraph(self, paragraph):
        children = paragraph.children
        if len(children) == 1 and isinstance(children[0], nodes.Image):
            return self._handle_image(children[0])

        return [Paragraph(runs=self.inline.convert(children), style_id=BODY_TEXT_STYLE_ID)]

    def _handle_image(self, image):
        """Picture paragraph plus a caption paragraph holding the alt text."""
        data = self._read_image(image.url)

        self.state.mark_style_used(used.IMAGE)
        self.state.mark_style_used(used.CAPTION)
        return [
            Paragraph(runs=[Run(image=data)], style_id=IMAGE_STYLE_ID),
            Paragraph(runs=[Run(text=image.alt)], style_id=CAPTION_STYLE_ID),
        ]

    def _read_image(self, url):
        candidates = [url]
        if self.input_dir:
            candidates.append(os.path.join(self.input_dir, url))

        for path in candidates:
            try:
                with open(path, 'rb') as f:
                    return f.read()
            except OSError:
                continue

        raise ResourceUnavailableError(url, f"Image not found: {url}. Searched: {candidates}")

    def _handle_list(self, lst):
        if lst.ordered:
            if lst.start != 1:
                raise MalformedInputError(
                    f"Ordered lists must start at 1, found start {lst.start}"
                )
        elif lst.start is not None:
            raise MalformedInputError(f"Bullet list with a start number: {lst.start}")

        # Allocate before descending so nested lists get larger ids
        num_id = self.state.allocate_list_numbering(lst.ordered)

        elements = []
        for item in lst.children:
            if not isinstance(item, nodes.ListItem):
                raise MalformedInputError(f"List child must be a ListItem, found {item.kind}")
            if not item.children or not isinstance(item.children[0], nodes.Paragraph):
                found = item.children[0].kind if item.children else 'nothing'
                raise MalformedInputError(
                    f"List item must start with a paragraph, found {found}"
                )

            first = self._handle_paragraph(item.children[0])
            first[0].numbering = NumberingRef(num_id, 0)
            elements.extend(first)

            # Continuation content of the item stays unnumbered
            elements.extend(self._convert_children(item.children[1:]))

        return elements

    def _handle_code(self, code):
        lang = code.lang or ''
        self.state.record_language_used(lang)
        style_id = code_style_id(lang)

        lines = [
            Paragraph(runs=[Run(text=line)], style_id=style_id)
            for line in code.value.splitlines()
        ]

        self.state.mark_style_used(used.TABLE)
        self.state.mark_style_used(used.CAPTION)
        return [
            Table.single_cell(lines, style_id=TABLE_STYLE_ID),
            Paragraph(runs=[Run(text=code.meta or '')], style_id=CAPTION_STYLE_ID),
        ]

    def _handle_block_quote(self, quote):
        content = self._convert_children(quote.children)

        self.state.mark_style_used(used.TABLE)
        return [
            Table.single_cell(content, style_id=TABLE_STYLE_ID),
            Paragraph(),
        ]

    def _handle_table(self, table):
        column_count = len(table.align)

        # Validate the whole table first so a bad row never leaves partial output
        for index, row in enumerate(table.children):
            if not isinstance(row, nodes.TableRow):
                raise MalformedInputError(f"Table child must be a TableRow, found {row.kind}")
            if len(row.children) != column_count:
                raise MalformedInputError(
                    f"Table row {index} has {len(row.children)} cells, "
                    f"expected {column_count} (one per column alignment)"
                )
            for cell in row.children:
                if not isinstance(cell, nodes.TableCell):
                    raise MalformedInputError(
                        f"Table row child must be a TableCell, found {cell.kind}"
                    )

        result = Table(style_id=TABLE_STYLE_ID)
        for row in table.children:
            out_row = Row()
            for cell, align in zip(row.children, table.align):
                para = Paragraph(
                    runs=self.inline.convert(cell.children),
                    style_id=BODY_TEXT_STYLE_ID,
                    alignment=_CELL_ALIGN_MAP[align],
                )
                out_row.cells.append(Cell(elements=[para]))
            result.rows.append(out_row)

        self.state.mark_style_used(used.TABLE)
        return [result]
