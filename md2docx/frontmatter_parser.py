"""
YAML front matter parser using python-frontmatter.
"""

import frontmatter
import yaml

from .exceptions import MalformedInputError

# Front matter keys copied into the document's core properties
CORE_PROPERTY_KEYS = ('title', 'author', 'subject', 'keywords')


def parse_markdown_with_frontmatter(file_path: str) -> tuple[dict, str]:
    """
    Parse a Markdown file with YAML front matter.

    Args:
        file_path: Path to the Markdown file

    Returns:
        (metadata_dict, markdown_content_without_frontmatter)
    """
    with open(file_path, 'r', encoding='utf-8') as f:
        return parse_markdown_string_with_frontmatter(f.read())


def parse_markdown_string_with_frontmatter(markdown_text: str) -> tuple[dict, str]:
    """
    Parse a Markdown string with YAML front matter.

    Args:
        markdown_text: Markdown content as string

    Returns:
        (metadata_dict, markdown_content_without_frontmatter)

    Raises:
        MalformedInputError: If the front matter is invalid YAML or not a mapping
    """
    try:
        post = frontmatter.loads(markdown_text)
        if post.handler is not None and not post.metadata:
            # frontmatter drops a block that is not a mapping; load it again to tell
            fm, _ = post.handler.split(markdown_text.strip())
            raw = post.handler.load(fm)
            if raw is not None and not isinstance(raw, dict):
                raise MalformedInputError("YAML front matter must be a mapping of keys to values")
    except yaml.YAMLError as e:
        raise MalformedInputError(f"Invalid YAML front matter: {e}") from e

    return dict(post.metadata), post.content


def metadata_to_core_properties(metadata: dict) -> dict:
    """
    Convert front matter metadata to core property strings.

    Input:  {"title": "Doc", "keywords": ["a", "b"], "date": "2025-01-01"}
    Output: {"title": "Doc", "keywords": "a, b"}

    Args:
        metadata: Dictionary of metadata from front matter

    Returns:
        Dict of core property names to string values; other keys are dropped
    """
    properties = {}
    for key in CORE_PROPERTY_KEYS:
        value = metadata.get(key)
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            value = ', '.join(str(v) for v in value)
        properties[key] = str(value)
    return properties
