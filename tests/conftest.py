"""Pytest configuration and shared fixtures for the md2docx test suite."""

import io

import pytest
from PIL import Image

from md2docx.marko_adapter import MarkoToMdastAdapter
from md2docx.MarkdownToDocx import MarkdownToDocx
from md2docx.state import RunState


def make_png(width=4, height=2, dpi=None):
    """Return the bytes of a small solid PNG image."""
    buffer = io.BytesIO()
    params = {'dpi': (dpi, dpi)} if dpi else {}
    Image.new('RGB', (width, height), (200, 30, 30)).save(buffer, format='PNG', **params)
    return buffer.getvalue()


@pytest.fixture
def parse():
    """Parse a Markdown string into the node tree."""
    adapter = MarkoToMdastAdapter()
    return adapter.parse


@pytest.fixture
def state():
    return RunState()


@pytest.fixture
def converter(state, tmp_path):
    """Block converter resolving images against ``tmp_path``."""
    return MarkdownToDocx(input_dir=str(tmp_path), state=state)


@pytest.fixture
def png_file(tmp_path):
    """A 4x2 PNG written as ``tmp_path/pic.png``."""
    path = tmp_path / 'pic.png'
    path.write_bytes(make_png())
    return path
