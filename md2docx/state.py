"""
Per-conversion registry of facts discovered during the tree walk.

The block and inline converters record what they emit (heading depths, code
languages, styles in use, list numbering allocations); the style and
numbering synthesizers read the final state once the walk is over. A new
RunState is created for every conversion so repeated runs never share ids.
"""

import logging

logger = logging.getLogger('md2docx')

INLINE_CODE = 'inline-code'
IMAGE = 'image'
TABLE = 'table'
CAPTION = 'caption'

# First id handed to a list; 1 and 2 belong to headings and the shared bullet.
FIRST_LIST_NUMBERING_ID = 3


class RunState:
    """Mutable facts of a single conversion run."""

    def __init__(self):
        self.max_heading_depth = 0
        # dict keeps insertion order, used as an ordered set
        self._languages = {}
        self._used_styles = set()
        # ordered flag of every allocated list, in allocation order
        self.list_numberings = []

    @property
    def languages(self):
        """Distinct lower-cased code languages in first-use order."""
        return list(self._languages)

    def record_heading_depth(self, depth):
        if depth > self.max_heading_depth:
            self.max_heading_depth = depth

    def record_language_used(self, lang):
        self._languages.setdefault(lang.lower(), None)

    def mark_style_used(self, kind):
        self._used_styles.add(kind)

    def is_style_used(self, kind):
        return kind in self._used_styles

    def allocate_list_numbering(self, ordered):
        """Register a list and return the numbering id its paragraphs reference."""
        num_id = FIRST_LIST_NUMBERING_ID + len(self.list_numberings)
        self.list_numberings.append(bool(ordered))
        logger.debug("Allocated %s list numbering id %d",
                     "ordered" if ordered else "bullet", num_id)
        return num_id

    def iter_list_numberings(self):
        """Yield (num_id, ordered) for every allocated list, in allocation order."""
        for index, ordered in enumerate(self.list_numberings):
            yield FIRST_LIST_NUMBERING_ID + index, ordered
