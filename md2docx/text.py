"""
Inline conversion: Markdown spans to styled runs and hyperlinks.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from . import nodes
from . import state as used
from .elements import Hyperlink, Run
from .exceptions import UnsupportedConstructError
from .styles import INLINE_CODE_STYLE_ID


@dataclass(frozen=True)
class TextFlags:
    """Formatting inherited from enclosing Strong/Emphasis/Delete nodes.

    Once ``code`` is set the record is terminal: modifiers leave it unchanged.
    """

    bold: bool = False
    italic: bool = False
    strike: bool = False
    code: bool = False

    def strong(self) -> TextFlags:
        return self if self.code else replace(self, bold=True)

    def emphasis(self) -> TextFlags:
        return self if self.code else replace(self, italic=True)

    def delete(self) -> TextFlags:
        return self if self.code else replace(self, strike=True)

    def inline_code(self) -> TextFlags:
        return TextFlags(code=True)

    def to_run(self, text) -> Run:
        if self.code:
            return Run(text=text, style_id=INLINE_CODE_STYLE_ID)
        return Run(text=text, bold=self.bold, italic=self.italic, strike=self.strike)


NORMAL = TextFlags()


class InlineConverter:
    """Converts inline children into a flat list of Run and Hyperlink objects."""

    def __init__(self, state):
        self.state = state

    def convert(self, children, flags=NORMAL):
        result = []
        for node in children:
            result.extend(self._convert_node(node, flags))
        return result

    def _convert_node(self, node, flags):
        if isinstance(node, nodes.Text):
            return [flags.to_run(node.value)]
        if isinstance(node, nodes.InlineCode):
            self.state.mark_style_used(used.INLINE_CODE)
            return [flags.inline_code().to_run(node.value)]
        if isinstance(node, nodes.Strong):
            return self.convert(node.children, flags.strong())
        if isinstance(node, nodes.Emphasis):
            return self.convert(node.children, flags.emphasis())
        if isinstance(node, nodes.Delete):
            return self.convert(node.children, flags.delete())
        if isinstance(node, nodes.Link):
            runs = []
            for child in self.convert(node.children, flags):
                # a nested link keeps its text under the outer target
                runs.extend(child.runs if isinstance(child, Hyperlink) else [child])
            return [Hyperlink(url=node.url, runs=runs)]
        raise UnsupportedConstructError(node.kind, 'inline content')
