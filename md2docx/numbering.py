"""
Numbering synthesis.

Abstract definition 1 numbers headings from depth 2 downwards ("1.", "1.1.",
...); definition 2 is the bullet shared by every unordered list. Each ordered
list gets its own single-level decimal definition so its numbering restarts
at 1. Paragraphs reference the numbering instance id handed out by
RunState.allocate_list_numbering; the instances map those ids to the
abstract definitions minted here.
"""

import logging

from .config import DEFAULT_CONFIG
from .elements import AbstractNumbering, NumberingDefinitions, NumberingInstance, NumberingLevel

logger = logging.getLogger('md2docx')

HEADING_NUMBERING_ID = 1
BULLET_NUMBERING_ID = 2
FIRST_ORDERED_ABSTRACT_ID = 3


def heading_numbering_level(depth):
    """Level of heading numbering used by a heading of ``depth``, None for depth 1."""
    if depth < 2:
        return None
    return depth - 2


def heading_label_template(level):
    """Accumulating label for a heading numbering level: '%1.', '%1.%2.', ..."""
    return ''.join(f"%{i}." for i in range(1, level + 2))


def synthesize_numbering(state, config=None):
    """Build the numbering definitions required by a finished conversion run.

    Args:
        state: RunState after the tree walk
        config: Optional ConversionConfig instance. Uses DEFAULT_CONFIG if None.

    Returns:
        NumberingDefinitions with abstract definitions and the instance table
    """
    if config is None:
        config = DEFAULT_CONFIG

    definitions = NumberingDefinitions()

    heading = AbstractNumbering(HEADING_NUMBERING_ID)
    for depth in range(2, state.max_heading_depth + 1):
        level = heading_numbering_level(depth)
        heading.levels.append(NumberingLevel(
            level=level,
            fmt='decimal',
            text=heading_label_template(level),
            suffix=config.HEADING_LABEL_SUFFIX,
        ))
    definitions.abstracts.append(heading)
    definitions.instances.append(NumberingInstance(HEADING_NUMBERING_ID, HEADING_NUMBERING_ID))

    definitions.abstracts.append(AbstractNumbering(BULLET_NUMBERING_ID, [NumberingLevel(
        level=0,
        fmt='bullet',
        text=config.LIST_BULLET_CHAR,
        suffix=config.LIST_LABEL_SUFFIX,
        indent_left=config.LIST_INDENT_LEFT,
        hanging=config.LIST_HANGING_INDENT,
    )]))
    definitions.instances.append(NumberingInstance(BULLET_NUMBERING_ID, BULLET_NUMBERING_ID))

    next_abstract_id = FIRST_ORDERED_ABSTRACT_ID
    for num_id, ordered in state.iter_list_numberings():
        if not ordered:
            definitions.instances.append(NumberingInstance(num_id, BULLET_NUMBERING_ID))
            continue

        definitions.abstracts.append(AbstractNumbering(next_abstract_id, [NumberingLevel(
            level=0,
            fmt='decimal',
            text='%1.',
            suffix=config.LIST_LABEL_SUFFIX,
            indent_left=config.LIST_INDENT_LEFT,
            hanging=config.LIST_HANGING_INDENT,
        )]))
        definitions.instances.append(NumberingInstance(num_id, next_abstract_id))
        next_abstract_id += 1

    logger.debug("Synthesized %d numbering definitions, %d instances",
                 len(definitions.abstracts), len(definitions.instances))
    return definitions
