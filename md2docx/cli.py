"""
md2docx - Markdown to DOCX Converter

Command line entry point with two subcommands: ``convert`` writes a .docx
next to the current directory, ``show`` prints the parsed node tree.
"""

import argparse
import logging
import os
import sys

from . import __version__
from .config import DEFAULT_CONFIG
from .converter_api import convert_file
from .exceptions import Md2DocxError
from .frontmatter_parser import parse_markdown_with_frontmatter
from .marko_adapter import MarkoToMdastAdapter
from .show import format_tree

logger = logging.getLogger('md2docx')


def setup_logging(verbose=False, quiet=False):
    """Configure logging based on CLI flags.

    Args:
        verbose: If True, show DEBUG level messages
        quiet: If True, suppress all non-error output
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    root_logger = logging.getLogger('md2docx')
    root_logger.setLevel(level)
    root_logger.addHandler(handler)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="md2docx",
        description="Convert Markdown to DOCX with generated styles and numbering.",
        epilog="Examples:\n"
               "  md2docx convert notes.md\n"
               "  md2docx convert notes.md -s style.toml -o out.docx\n"
               "  md2docx show notes.md",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    convert = subparsers.add_parser("convert", help="Convert a Markdown file to DOCX")
    convert.add_argument("file", help="Input Markdown file (.md, .markdown)")
    convert.add_argument("-s", "--style", default=None,
                         help="TOML style file with per-style overrides")
    convert.add_argument("-o", "--output", default=None,
                         help="Output .docx file (default: <name>.docx in the current directory)")
    convert.add_argument("--verbose", action="store_true", default=False,
                         help="Show detailed debug output")
    convert.add_argument("-q", "--quiet", action="store_true", default=False,
                         help="Suppress all non-error output")

    show = subparsers.add_parser("show", help="Print the parsed Markdown tree")
    show.add_argument("file", help="Input Markdown file")

    return parser


def _validate_input(input_file):
    """Exit with an error unless ``input_file`` is an existing, small enough Markdown file."""
    input_ext = os.path.splitext(input_file)[1].lower()
    if input_ext not in ['.md', '.markdown']:
        logger.error("Only Markdown files are supported. Got: %s", input_ext)
        sys.exit(1)

    if not os.path.exists(input_file):
        logger.error("Input file not found: %s", input_file)
        sys.exit(1)

    input_size = os.path.getsize(input_file)
    if input_size > DEFAULT_CONFIG.MAX_INPUT_FILE_SIZE:
        logger.error(
            "Input file too large: %d bytes (max %d bytes)",
            input_size, DEFAULT_CONFIG.MAX_INPUT_FILE_SIZE
        )
        sys.exit(1)


def _run_convert(args):
    _validate_input(args.file)

    output = args.output
    if output is not None and os.path.splitext(output)[1].lower() != '.docx':
        logger.error("Output file must have a .docx extension: %s", output)
        sys.exit(1)

    written = convert_file(args.file, output_path=output, style_path=args.style)
    logger.info("Successfully converted to %s", written)


def _run_show(args):
    if not os.path.exists(args.file):
        logger.error("Input file not found: %s", args.file)
        sys.exit(1)

    _, md_content = parse_markdown_with_frontmatter(args.file)
    root = MarkoToMdastAdapter().parse(md_content)
    input_dir = os.path.dirname(os.path.abspath(args.file))
    print(format_tree(root, input_dir))


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # Set up logging
    setup_logging(verbose=getattr(args, 'verbose', False), quiet=getattr(args, 'quiet', False))

    try:
        if args.command == "convert":
            _run_convert(args)
        else:
            _run_show(args)
    except Md2DocxError as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
