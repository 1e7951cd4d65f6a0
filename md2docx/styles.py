"""
Style synthesis and user override merging.

Styles are generated after the tree walk from the facts recorded in a
RunState, so only the styles the document actually references are emitted.
Each generated style is then passed through the user's override table
(usually loaded from a TOML style file):

    [Heading1]
    font = ["SimHei", "Arial"]   # [east_asian, ascii], or a single name
    font-size = "小二"            # points, or a named traditional size
    align = "c"                  # center/left/right, or c/l/r
"""

import dataclasses
import logging
import math
from numbers import Real

from . import state as used
from .config import DEFAULT_CONFIG
from .elements import CHARACTER, PARAGRAPH, TABLE, StyleDefinition
from .exceptions import InvalidOverrideError

logger = logging.getLogger('md2docx')

BODY_TEXT_STYLE_ID = 'BodyText'
INLINE_CODE_STYLE_ID = 'InlineCode'
IMAGE_STYLE_ID = 'Image'
TABLE_STYLE_ID = 'Table'
CAPTION_STYLE_ID = 'Caption'
CODE_STYLE_ID = 'Code'

FONT_KEY = 'font'
FONT_SIZE_KEY = 'font-size'
ALIGN_KEY = 'align'

_ALIGN_ALIASES = {
    'center': 'center',
    'c': 'center',
    'left': 'left',
    'l': 'left',
    'right': 'right',
    'r': 'right',
}


def heading_style_id(depth):
    return f"Heading{depth}"


def code_style_id(lang):
    return f"{CODE_STYLE_ID}-{lang.lower()}"


def synthesize_styles(state, overrides=None, config=None):
    """Build the style definitions required by a finished conversion run.

    Args:
        state: RunState after the tree walk
        overrides: Optional {style_id: {key: value}} table
        config: Optional ConversionConfig instance. Uses DEFAULT_CONFIG if None.

    Returns:
        List of StyleDefinition, base styles before the styles based on them

    Raises:
        InvalidOverrideError: If an override value is invalid
    """
    if config is None:
        config = DEFAULT_CONFIG
    overrides = overrides or {}

    styles = [StyleDefinition(BODY_TEXT_STYLE_ID, PARAGRAPH, 'Body Text')]

    for depth in range(1, state.max_heading_depth + 1):
        styles.append(StyleDefinition(
            heading_style_id(depth), PARAGRAPH, f"Heading {depth}",
            based_on=BODY_TEXT_STYLE_ID,
        ))

    if state.is_style_used(used.INLINE_CODE):
        styles.append(StyleDefinition(
            INLINE_CODE_STYLE_ID, CHARACTER, 'Inline Code',
            font_ascii=config.CODE_FONT,
        ))
    if state.is_style_used(used.IMAGE):
        styles.append(StyleDefinition(
            IMAGE_STYLE_ID, PARAGRAPH, 'Image', alignment='center',
        ))
    if state.is_style_used(used.TABLE):
        styles.append(StyleDefinition(
            TABLE_STYLE_ID, TABLE, 'Table', based_on=BODY_TEXT_STYLE_ID,
            alignment='center', bordered=True,
        ))
    if state.is_style_used(used.CAPTION):
        styles.append(StyleDefinition(
            CAPTION_STYLE_ID, PARAGRAPH, 'Caption', alignment='center',
        ))

    languages = state.languages
    if languages:
        styles.append(StyleDefinition(
            CODE_STYLE_ID, PARAGRAPH, 'Code', alignment='left',
            font_ascii=config.CODE_FONT,
        ))
        for lang in languages:
            styles.append(StyleDefinition(
                code_style_id(lang), PARAGRAPH, f"Code {lang or 'plain'}",
                based_on=CODE_STYLE_ID, alignment='left',
            ))

    emitted = {style.style_id for style in styles}
    for style_id in overrides:
        if style_id not in emitted:
            logger.warning("Override for unused style '%s' ignored", style_id)

    logger.debug("Synthesized %d styles", len(styles))
    return [apply_overrides(style, overrides, config) for style in styles]


def apply_overrides(style, overrides, config=None):
    """Return ``style`` with the user's overrides for its id applied.

    Recognized keys are ``font``, ``font-size`` and ``align``; any other key
    is reported as a warning and ignored.

    Args:
        style: Generated StyleDefinition
        overrides: {style_id: {key: value}} table
        config: Optional ConversionConfig instance. Uses DEFAULT_CONFIG if None.

    Returns:
        The same StyleDefinition when no override exists, a modified copy otherwise

    Raises:
        InvalidOverrideError: If a value has the wrong type or is unrecognized
    """
    entry = (overrides or {}).get(style.style_id)
    if entry is None:
        return style
    if not isinstance(entry, dict):
        raise InvalidOverrideError(style.style_id, '*', "override must be a table of keys")

    if config is None:
        config = DEFAULT_CONFIG

    changes = {}
    for key, value in entry.items():
        if key == FONT_KEY:
            changes['font_east_asia'], changes['font_ascii'] = _parse_font(style.style_id, value)
        elif key == FONT_SIZE_KEY:
            changes['font_size'] = _parse_font_size(style.style_id, value, config)
        elif key == ALIGN_KEY:
            if style.kind == CHARACTER:
                raise InvalidOverrideError(
                    style.style_id, key, "character styles have no alignment"
                )
            changes['alignment'] = _parse_align(style.style_id, value)
        else:
            logger.warning("Unknown key '%s' in style '%s' ignored", key, style.style_id)

    return dataclasses.replace(style, **changes)


def _parse_font(style_id, value):
    """Return (east_asian, ascii) font names."""
    if isinstance(value, str):
        return value, value
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        if len(value) == 1:
            return value[0], value[0]
        if len(value) == 2:
            return value[0], value[1]
    raise InvalidOverrideError(
        style_id, FONT_KEY,
        f"expected a font name, [font] or [east_asian, ascii], got {value!r}",
    )


def _parse_font_size(style_id, value, config):
    """Return the size in half points."""
    if isinstance(value, Real) and not isinstance(value, bool):
        points = value
    elif isinstance(value, str):
        if value not in config.NAMED_FONT_SIZES:
            raise InvalidOverrideError(style_id, FONT_SIZE_KEY, f"unknown named size {value!r}")
        points = config.NAMED_FONT_SIZES[value]
    else:
        raise InvalidOverrideError(
            style_id, FONT_SIZE_KEY, f"expected a number or a named size, got {value!r}"
        )

    if not math.isfinite(points):
        raise InvalidOverrideError(style_id, FONT_SIZE_KEY, f"size must be a finite number, got {value!r}")
    if points <= 0:
        raise InvalidOverrideError(style_id, FONT_SIZE_KEY, f"size must be positive, got {value!r}")
    return round(points * 2)


def _parse_align(style_id, value):
    if not isinstance(value, str):
        raise InvalidOverrideError(style_id, ALIGN_KEY, f"expected a string, got {value!r}")
    try:
        return _ALIGN_ALIASES[value.strip().lower()]
    except KeyError:
        raise InvalidOverrideError(
            style_id, ALIGN_KEY, f"expected center, left or right, got {value!r}"
        ) from None
