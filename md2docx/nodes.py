"""
Typed Markdown syntax tree consumed by the block converter.

The tree mirrors the mdast vocabulary: block containers (Root, Heading,
Paragraph, List, ListItem, BlockQuote, Code, Table, TableRow, TableCell) and
inline nodes (Text, InlineCode, Strong, Emphasis, Delete, Link, Image).
ThematicBreak, Break, Html and the footnote nodes are produced by the parser
adapter only so the converter can reject them by name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Node:
    """Base class for all tree nodes."""

    @property
    def kind(self) -> str:
        """Variant name used in error messages and by the tree printer."""
        return type(self).__name__


@dataclass
class Root(Node):
    children: list[Node] = field(default_factory=list)


@dataclass
class Heading(Node):
    depth: int = 1
    children: list[Node] = field(default_factory=list)


@dataclass
class Paragraph(Node):
    children: list[Node] = field(default_factory=list)


@dataclass
class List(Node):
    """Ordered or bullet list.

    ``start`` is the first number of an ordered list and None for bullet lists.
    """

    children: list[Node] = field(default_factory=list)
    ordered: bool = False
    start: Optional[int] = None


@dataclass
class ListItem(Node):
    children: list[Node] = field(default_factory=list)


@dataclass
class BlockQuote(Node):
    children: list[Node] = field(default_factory=list)


@dataclass
class Code(Node):
    """Fenced or indented code block.

    ``lang`` is the first word of the fence info string, ``meta`` the rest.
    """

    value: str = ''
    lang: Optional[str] = None
    meta: Optional[str] = None


@dataclass
class Table(Node):
    """GFM table; ``align`` holds one entry per column: 'left', 'right', 'center' or None."""

    children: list[Node] = field(default_factory=list)
    align: list[Optional[str]] = field(default_factory=list)


@dataclass
class TableRow(Node):
    children: list[Node] = field(default_factory=list)


@dataclass
class TableCell(Node):
    children: list[Node] = field(default_factory=list)


@dataclass
class Text(Node):
    value: str = ''


@dataclass
class InlineCode(Node):
    value: str = ''


@dataclass
class Strong(Node):
    children: list[Node] = field(default_factory=list)


@dataclass
class Emphasis(Node):
    children: list[Node] = field(default_factory=list)


@dataclass
class Delete(Node):
    children: list[Node] = field(default_factory=list)


@dataclass
class Link(Node):
    url: str = ''
    children: list[Node] = field(default_factory=list)
    title: Optional[str] = None


@dataclass
class Image(Node):
    url: str = ''
    alt: str = ''
    title: Optional[str] = None


# --- Constructs recognized by the parser but rejected by the converter ---

@dataclass
class ThematicBreak(Node):
    pass


@dataclass
class Break(Node):
    pass


@dataclass
class Html(Node):
    value: str = ''


@dataclass
class FootnoteReference(Node):
    label: str = ''


@dataclass
class FootnoteDefinition(Node):
    label: str = ''
    children: list[Node] = field(default_factory=list)
