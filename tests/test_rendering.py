"""Tests for markdown rendering."""

from pithos.rendering import markdown_to_html
from pithos.templates import builtin_templates


def test_baseline_markdown() -> None:
    """Test headings, emphasis and links."""
    html = markdown_to_html("# Title\n\nSome *emphasis* and a [link](https://example.com).")

    assert "<h1>Title</h1>" in html
    assert "<em>emphasis</em>" in html
    assert '<a href="https://example.com">link</a>' in html


def test_output_is_a_fragment() -> None:
    html = markdown_to_html("plain")

    assert html.strip() == "<p>plain</p>"
    assert "<html" not in html
    assert "<body" not in html


def test_tables() -> None:
    html = markdown_to_html("| A | B |\n| --- | --- |\n| 1 | 2 |\n")

    assert "<table>" in html
    assert "<th>A</th>" in html
    assert "<td>2</td>" in html


def test_strikethrough() -> None:
    assert "<s>gone</s>" in markdown_to_html("~~gone~~")


def test_task_lists() -> None:
    """Test that checkbox list items render as checkboxes."""
    html = markdown_to_html("- [ ] todo\n- [x] done\n")

    assert html.count('type="checkbox"') == 2
    assert 'checked="checked"' in html


def test_code_block() -> None:
    html = markdown_to_html("```python\nprint('hi')\n```\n")

    assert '<code class="language-python">' in html


def test_rendering_is_deterministic() -> None:
    text = builtin_templates()[0].body

    assert markdown_to_html(text) == markdown_to_html(text)


def test_malformed_markdown_degrades_gracefully() -> None:
    """Test that broken markdown still renders instead of raising."""
    html = markdown_to_html("**unclosed *emphasis\n\n| a | b\n|---\n```\nno close")

    assert "unclosed" in html
    assert markdown_to_html("") == ""
