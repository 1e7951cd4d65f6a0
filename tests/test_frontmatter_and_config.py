import pytest

from md2docx.config import ConversionConfig, load_style_overrides
from md2docx.exceptions import MalformedInputError, StyleFileError
from md2docx.frontmatter_parser import (
    metadata_to_core_properties,
    parse_markdown_string_with_frontmatter,
    parse_markdown_with_frontmatter,
)


def test_frontmatter_is_split_off():
    metadata, content = parse_markdown_string_with_frontmatter(
        "---\ntitle: Doc\ndate: 2025-01-01\n---\n# Body\n"
    )
    assert metadata['title'] == 'Doc'
    assert content.strip() == "# Body"


def test_text_without_frontmatter_keeps_its_content():
    metadata, content = parse_markdown_string_with_frontmatter("# Body\n\n---\n\nafter\n")
    assert metadata == {}
    assert content.strip() == "# Body\n\n---\n\nafter"


def test_empty_frontmatter():
    metadata, content = parse_markdown_string_with_frontmatter("---\n---\nx\n")
    assert metadata == {}
    assert content.strip() == "x"


@pytest.mark.parametrize('text', ["---\n- a\n- b\n---\nx\n", "---\ntitle: [unclosed\n---\nx\n"])
def test_invalid_frontmatter(text):
    with pytest.raises(MalformedInputError):
        parse_markdown_string_with_frontmatter(text)


def test_parse_file(tmp_path):
    path = tmp_path / 'a.md'
    path.write_text("---\nauthor: Kim\n---\nhello\n", encoding='utf-8')
    metadata, content = parse_markdown_with_frontmatter(str(path))
    assert metadata == {'author': 'Kim'}
    assert content.strip() == "hello"


def test_scalar_frontmatter_is_rejected():
    with pytest.raises(MalformedInputError, match='mapping'):
        parse_markdown_string_with_frontmatter("---\njust a line\n---\nx\n")


def test_core_properties_keep_known_keys_only():
    props = metadata_to_core_properties({
        'title': 'T', 'keywords': ['a', 'b'], 'subject': 3, 'date': '2025', 'author': None,
    })
    assert props == {'title': 'T', 'keywords': 'a, b', 'subject': '3'}


def test_load_style_overrides(tmp_path):
    path = tmp_path / 'style.toml'
    path.write_text('[Heading1]\nfont = ["SimHei", "Arial"]\nfont-size = "小二"\n', encoding='utf-8')
    assert load_style_overrides(str(path)) == {
        'Heading1': {'font': ['SimHei', 'Arial'], 'font-size': '小二'},
    }


def test_load_style_overrides_errors(tmp_path):
    with pytest.raises(StyleFileError):
        load_style_overrides(str(tmp_path / 'missing.toml'))

    bad = tmp_path / 'bad.toml'
    bad.write_text('not = [toml', encoding='utf-8')
    with pytest.raises(StyleFileError):
        load_style_overrides(str(bad))


def test_style_file_size_limit(tmp_path):
    class SmallConfig(ConversionConfig):
        MAX_STYLE_FILE_SIZE = 10

    path = tmp_path / 'style.toml'
    path.write_text('[BodyText]\nalign = "left"\n', encoding='utf-8')
    with pytest.raises(StyleFileError, match='too large'):
        load_style_overrides(str(path), SmallConfig())
