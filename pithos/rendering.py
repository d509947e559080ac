"""Markdown to HTML conversion for the preview pane and exports."""

from markdown_it import MarkdownIt
from mdit_py_plugins.tasklists import tasklists_plugin

_md = MarkdownIt("commonmark").enable(["table", "strikethrough"]).use(tasklists_plugin)


def markdown_to_html(markdown_text: str) -> str:
    """Convert markdown to an HTML body fragment (no wrapper document or styles).

    Supports CommonMark plus tables, ~~strikethrough~~ and ``- [ ]`` task lists.
    Malformed markdown renders best-effort, as any CommonMark parser would.
    """
    return _md.render(markdown_text)
