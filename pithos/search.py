"""Note filtering and ordering for the note list."""

from pithos.domain.note import NoteItem
from pithos.domain.state import DocState, SortOrder


def note_matches_query(note: NoteItem, query: str) -> bool:
    """Case-insensitive substring match against the note's name or content.

    An empty query matches every note.
    """
    if not query:
        return True
    query_lower = query.lower()
    return query_lower in note.name.lower() or query_lower in note.content.lower()


def note_matches_tags(note: NoteItem, tags: list[str], match_all: bool = False) -> bool:
    if not tags:
        return True
    if match_all:
        return all(tag in note.tags for tag in tags)
    return any(tag in note.tags for tag in tags)


def sort_notes(notes: list[NoteItem], order: SortOrder) -> list[NoteItem]:
    """Return the notes in display order. Pinned notes always come first."""
    if order is SortOrder.MANUAL:
        ordered = list(notes)
    elif order is SortOrder.MODIFIED_DESC:
        ordered = sorted(notes, key=lambda n: n.updated_at, reverse=True)
    elif order is SortOrder.MODIFIED_ASC:
        ordered = sorted(notes, key=lambda n: n.updated_at)
    elif order is SortOrder.NAME_ASC:
        ordered = sorted(notes, key=lambda n: n.name.lower())
    elif order is SortOrder.NAME_DESC:
        ordered = sorted(notes, key=lambda n: n.name.lower(), reverse=True)
    elif order is SortOrder.CREATED_DESC:
        ordered = sorted(notes, key=lambda n: n.created_at, reverse=True)
    elif order is SortOrder.CREATED_ASC:
        ordered = sorted(notes, key=lambda n: n.created_at)
    else:
        raise ValueError(f"Unknown sort order: {order}")

    # stable: keeps the chosen order within each group
    return sorted(ordered, key=lambda n: not n.pinned)


def filter_notes(state: DocState) -> list[NoteItem]:
    """Notes matching the state's search query and tag filter, in display order."""
    visible = [
        note
        for note in state.notes
        if note_matches_query(note, state.search_query)
        and note_matches_tags(note, state.filter_tags, state.tag_filter_and)
    ]
    return sort_notes(visible, state.sort_order)


def toggle_tag_filter(state: DocState, tag: str) -> bool:
    """Add ``tag`` to the note list's tag filter, or remove it if present.

    Returns:
        True if the tag is now part of the filter
    """
    if tag in state.filter_tags:
        state.filter_tags = [t for t in state.filter_tags if t != tag]
        return False
    state.filter_tags.append(tag)
    return True


SNIPPET_BEFORE = 64
SNIPPET_AFTER = 96


def make_search_snippet(content: str, query: str) -> str | None:
    """Excerpt of ``content`` around the first match of ``query``.

    Whitespace in the excerpt is collapsed to single spaces, and an
    ellipsis marks each side where the content was cut.
    """
    query = query.strip()
    if not query:
        return None
    position = content.lower().find(query.lower())
    if position < 0:
        return None

    start = max(position - SNIPPET_BEFORE, 0)
    end = min(position + len(query) + SNIPPET_AFTER, len(content))
    snippet = " ".join(content[start:end].split())
    if not snippet:
        return None
    if start > 0:
        snippet = "…" + snippet
    if end < len(content):
        snippet += "…"
    return snippet
