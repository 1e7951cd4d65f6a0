"""
Output document model handed to the DOCX writer.

Block elements are Paragraph and Table; a Table holds Rows of Cells and each
Cell holds further block elements, so block quotes and code blocks nest as
tables inside table cells. Style and numbering definitions live here too,
since both synthesizers and the writer share them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

PARAGRAPH = 'paragraph'
CHARACTER = 'character'
TABLE = 'table'


@dataclass
class Run:
    """Smallest styled unit of text; ``image`` carries picture bytes instead of text."""

    text: str = ''
    bold: bool = False
    italic: bool = False
    strike: bool = False
    style_id: Optional[str] = None
    image: Optional[bytes] = None


@dataclass
class Hyperlink:
    url: str
    runs: list[Run] = field(default_factory=list)


@dataclass
class NumberingRef:
    """Reference from a paragraph to a numbering instance and one of its levels."""

    num_id: int
    level: int = 0


@dataclass
class Paragraph:
    runs: list[Union[Run, Hyperlink]] = field(default_factory=list)
    style_id: Optional[str] = None
    numbering: Optional[NumberingRef] = None
    alignment: Optional[str] = None  # 'left', 'right', 'center' or 'both'

    @property
    def text(self) -> str:
        parts = []
        for run in self.runs:
            if isinstance(run, Hyperlink):
                parts.extend(r.text for r in run.runs)
            else:
                parts.append(run.text)
        return ''.join(parts)


@dataclass
class Cell:
    elements: list[Union[Paragraph, 'Table']] = field(default_factory=list)


@dataclass
class Row:
    cells: list[Cell] = field(default_factory=list)


@dataclass
class Table:
    rows: list[Row] = field(default_factory=list)
    style_id: Optional[str] = None

    @classmethod
    def single_cell(cls, elements, style_id=None):
        """Build a one-row, one-cell table around ``elements``."""
        return cls(rows=[Row(cells=[Cell(elements=list(elements))])], style_id=style_id)


Element = Union[Paragraph, Table]


@dataclass
class StyleDefinition:
    """Named formatting bundle referenced by id from paragraphs, runs or tables.

    ``font_size`` is in half points, the unit of ``w:sz``.
    """

    style_id: str
    kind: str
    name: str
    based_on: Optional[str] = None
    font_ascii: Optional[str] = None
    font_east_asia: Optional[str] = None
    font_size: Optional[int] = None
    alignment: Optional[str] = None
    bordered: bool = False


@dataclass
class NumberingLevel:
    level: int
    fmt: str  # 'decimal' or 'bullet'
    text: str  # label template such as '%1.%2.'
    start: int = 1
    justify: str = 'left'
    suffix: str = 'tab'
    indent_left: Optional[int] = None  # twips
    hanging: Optional[int] = None  # twips


@dataclass
class AbstractNumbering:
    abstract_id: int
    levels: list[NumberingLevel] = field(default_factory=list)


@dataclass
class NumberingInstance:
    """Concrete numbering id used by paragraphs, mapped to its abstract definition."""

    num_id: int
    abstract_id: int


@dataclass
class NumberingDefinitions:
    abstracts: list[AbstractNumbering] = field(default_factory=list)
    instances: list[NumberingInstance] = field(default_factory=list)
