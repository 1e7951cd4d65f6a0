"""
High-level convenience API for md2docx.

Provides simple functions to convert Markdown strings or files to DOCX
without needing to understand the internal pipeline.
"""

import itertools
import logging
import os

from .config import DEFAULT_CONFIG, load_style_overrides
from .exceptions import ConversionError
from .frontmatter_parser import parse_markdown_string_with_frontmatter
from .marko_adapter import MarkoToMdastAdapter
from .MarkdownToDocx import MarkdownToDocx

logger = logging.getLogger('md2docx')


def find_available_name(stem, directory='.'):
    """Return ``<stem>.docx``, or ``<stem> (N).docx`` with the first free N.

    Args:
        stem: File name without extension
        directory: Directory the file will be created in

    Returns:
        Path of a file that does not exist yet
    """
    path = os.path.join(directory, f"{stem}.docx")
    if not os.path.exists(path):
        return path
    for i in itertools.count(1):
        path = os.path.join(directory, f"{stem} ({i}).docx")
        if not os.path.exists(path):
            return path


def build_document(root, input_dir=None, overrides=None, metadata=None, config=None):
    """Convert a parsed node tree into a DocxDocument without writing it.

    See MarkdownToDocx.build_document.
    """
    return MarkdownToDocx.build_document(
        root, input_dir=input_dir, overrides=overrides, metadata=metadata, config=config
    )


def convert_string(markdown_string, output_path, style_path=None, overrides=None,
                   base_dir=None, config=None):
    """Convert a Markdown string to a DOCX file.

    Args:
        markdown_string: Markdown-formatted text (may include YAML frontmatter)
        output_path: Output .docx file path
        style_path: Optional TOML style file with per-style overrides
        overrides: Optional {style_id: {key: value}} table, applied on top of
                   the style file
        base_dir: Directory used to resolve relative image paths.
                  If None, the current working directory.
        config: Optional ConversionConfig instance. Uses DEFAULT_CONFIG if None.

    Raises:
        StyleFileError: If the style file cannot be read or parsed.
        InvalidOverrideError: If a style override is invalid.
        ConversionError: If conversion fails.
    """
    if config is None:
        config = DEFAULT_CONFIG

    table = {}
    if style_path is not None:
        table.update(load_style_overrides(style_path, config))
    for style_id, entry in (overrides or {}).items():
        if isinstance(entry, dict) and isinstance(table.get(style_id), dict):
            table[style_id] = {**table[style_id], **entry}
        else:
            table[style_id] = entry

    # Parse frontmatter and markdown content
    metadata, md_content = parse_markdown_string_with_frontmatter(markdown_string)

    root = MarkoToMdastAdapter().parse(md_content)

    MarkdownToDocx.convert_to_docx(
        root,
        output_path,
        input_dir=base_dir,
        overrides=table,
        metadata=metadata,
        config=config,
    )


def convert_file(input_path, output_path=None, style_path=None, config=None):
    """Convert a Markdown file to a DOCX file.

    Relative image paths are resolved against the directory of ``input_path``.

    Args:
        input_path: Markdown file to convert
        output_path: Output .docx path. If None, ``<stem>.docx`` in the current
                     directory, numbered when that name is taken.
        style_path: Optional TOML style file
        config: Optional ConversionConfig instance. Uses DEFAULT_CONFIG if None.

    Returns:
        Path of the written file

    Raises:
        ConversionError: If the input cannot be read or converted.
    """
    if config is None:
        config = DEFAULT_CONFIG

    try:
        size = os.path.getsize(input_path)
    except OSError as e:
        raise ConversionError(f"Input file not found: {input_path}") from e
    if size > config.MAX_INPUT_FILE_SIZE:
        raise ConversionError(
            f"Input file too large: {size} bytes (max {config.MAX_INPUT_FILE_SIZE} bytes)"
        )

    try:
        with open(input_path, 'r', encoding='utf-8') as f:
            markdown_string = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ConversionError(f"Failed to read {input_path}: {e}") from e

    if output_path is None:
        stem = os.path.splitext(os.path.basename(input_path))[0]
        output_path = find_available_name(stem)

    logger.debug("Converting %s -> %s", input_path, output_path)
    convert_string(
        markdown_string,
        output_path,
        style_path=style_path,
        base_dir=os.path.dirname(os.path.abspath(input_path)),
        config=config,
    )
    return output_path
