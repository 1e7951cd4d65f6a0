"""
md2docx - Convert Markdown to DOCX (Office Open XML word processing)

Headings, lists, code blocks, block quotes, tables and images are mapped to
generated paragraph, character and table styles plus numbering definitions,
which can be restyled with a small TOML style file.
"""

__version__ = "0.1.0"

from .MarkdownToDocx import MarkdownToDocx
from .marko_adapter import MarkoToMdastAdapter
from .frontmatter_parser import (
    parse_markdown_with_frontmatter,
    parse_markdown_string_with_frontmatter,
    metadata_to_core_properties,
)
from .config import ConversionConfig, DEFAULT_CONFIG, load_style_overrides
from .exceptions import (
    Md2DocxError,
    ConversionError,
    UnsupportedConstructError,
    MalformedInputError,
    ResourceUnavailableError,
    InvalidOverrideError,
    StyleFileError,
)
from .converter_api import build_document, convert_file, convert_string

__all__ = [
    "MarkdownToDocx",
    "MarkoToMdastAdapter",
    "parse_markdown_with_frontmatter",
    "parse_markdown_string_with_frontmatter",
    "metadata_to_core_properties",
    "ConversionConfig",
    "DEFAULT_CONFIG",
    "load_style_overrides",
    "Md2DocxError",
    "ConversionError",
    "UnsupportedConstructError",
    "MalformedInputError",
    "ResourceUnavailableError",
    "InvalidOverrideError",
    "StyleFileError",
    "build_document",
    "convert_file",
    "convert_string",
]
