"""
Tree printer behind ``md2docx show``.

Prints the parsed node tree one node per line. A ``:`` column marks an
ancestor that still has siblings below, so the branches can be followed by eye:

    Root
      Heading 1
      : Text: 'Title'
      List 1..
        Item
          Paragraph
            Text: 'first'
"""

import os

from PIL import Image as PILImage

from . import nodes


def format_tree(root, input_dir=None):
    """Render ``root`` as an indented multi-line string.

    Args:
        root: Node to print, usually nodes.Root
        input_dir: Directory used to open images for their pixel size

    Returns:
        The rendered tree, without a trailing newline
    """
    out = []
    _format_node(root, input_dir, [False], out)
    return '\n'.join(out)


def _format_node(node, input_dir, guides, out):
    indent = ''.join((':' if more else ' ') + ' ' for more in guides[:-1])
    out.append(indent + _label(node, input_dir))

    children = getattr(node, 'children', None) or []
    last = len(children) - 1
    for i, child in enumerate(children):
        guides.append(i < last)
        _format_node(child, input_dir, guides, out)
        guides.pop()


def _label(node, input_dir):
    if isinstance(node, nodes.Heading):
        return f"Heading {node.depth}"
    if isinstance(node, nodes.Link):
        return f"Link: {node.url}"
    if isinstance(node, nodes.List):
        return f"List {node.start}.." if node.ordered else "List"
    if isinstance(node, nodes.ListItem):
        return "Item"
    if isinstance(node, (nodes.Text, nodes.InlineCode)):
        return f"{node.kind}: {node.value!r}"
    if isinstance(node, nodes.Code):
        return f"Code(lang={node.lang!r} meta={node.meta!r}): {node.value!r}"
    if isinstance(node, nodes.Table):
        return f"Table align={node.align!r}"
    if isinstance(node, nodes.Image):
        label = f"Image: url={node.url} alt={node.alt}"
        size = _image_size(node.url, input_dir)
        if size is not None:
            label += " size={}x{}".format(*size)
        return label
    if isinstance(node, nodes.Html):
        return f"Html: {node.value!r}"
    return node.kind


def _image_size(url, input_dir):
    """Pixel size of the image, looked up the way the converter finds it."""
    candidates = [url]
    if input_dir:
        candidates.append(os.path.join(input_dir, url))

    for path in candidates:
        try:
            with PILImage.open(path) as im:
                return im.size
        except OSError:
            continue
    return None
