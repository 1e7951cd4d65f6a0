"""
Configuration constants for md2docx converter.

This module centralizes all magic numbers and default values used throughout
the conversion process. Per-style values can be overridden by:
1. A TOML style file (see load_style_overrides)
2. The overrides argument of the Python API
"""

import tomllib

from .exceptions import StyleFileError


class ConversionConfig:
    """Default configuration values for DOCX conversion."""

    # === Image Settings ===
    IMAGE_MAX_WIDTH_MM = 150  # Maximum picture width on the page
    IMAGE_DEFAULT_DPI = 96  # Used when the file carries no DPI information

    # === Code ===
    CODE_FONT = 'Consolas'  # Default monospace font for Code and InlineCode styles

    # === Numbering (twips) ===
    LIST_INDENT_LEFT = 720  # Left indent of list paragraphs
    LIST_HANGING_INDENT = 360  # Hanging indent for the list label
    LIST_BULLET_CHAR = '•'
    LIST_LABEL_SUFFIX = 'tab'
    HEADING_LABEL_SUFFIX = 'space'

    # === Font sizes ===
    # Traditional Chinese type sizes in points, accepted by the font-size override
    NAMED_FONT_SIZES = {
        '初号': 42,
        '小初': 36,
        '一号': 26,
        '小一': 24,
        '二号': 22,
        '小二': 18,
        '三号': 16,
        '小三': 15,
        '四号': 14,
        '小四': 12,
        '五号': 10.5,
        '小五': 9,
        '六号': 7.5,
        '小六': 6.5,
        '七号': 5.5,
        '八号': 5,
    }

    # === Security Limits ===
    MAX_INPUT_FILE_SIZE = 50 * 1024 * 1024  # 50 MB max input file
    MAX_STYLE_FILE_SIZE = 1024 * 1024  # 1 MB max style file


# Global default config instance
DEFAULT_CONFIG = ConversionConfig()


def load_style_overrides(path, config=None):
    """Load a TOML style file into a flat {style_id: {key: value}} table.

    Args:
        path: Path to the TOML style file
        config: Optional ConversionConfig instance. Uses DEFAULT_CONFIG if None.

    Returns:
        Dict mapping style ids to override tables

    Raises:
        StyleFileError: If the file is missing, too large or not valid TOML
    """
    if config is None:
        config = DEFAULT_CONFIG

    try:
        with open(path, 'rb') as f:
            data = f.read(config.MAX_STYLE_FILE_SIZE + 1)
    except OSError as e:
        raise StyleFileError(f"Failed to read style file {path}: {e}") from e

    if len(data) > config.MAX_STYLE_FILE_SIZE:
        raise StyleFileError(
            f"Style file too large: {path} (max {config.MAX_STYLE_FILE_SIZE} bytes)"
        )

    try:
        return tomllib.loads(data.decode('utf-8'))
    except UnicodeDecodeError as e:
        raise StyleFileError(f"Style file is not valid UTF-8: {path}") from e
    except tomllib.TOMLDecodeError as e:
        raise StyleFileError(f"Failed to parse style file, must be in TOML format: {e}") from e
