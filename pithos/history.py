"""Snapshot-based version history for notes."""

from pithos.clock.system import unix_now
from pithos.domain.note import NoteItem, NoteVersion

MAX_VERSIONS = 10


def push_snapshot(note: NoteItem, content: str, now: int | None = None) -> None:
    """Append ``content`` to the note's history.

    Blank content and content identical to the newest snapshot are ignored.
    Only the ``MAX_VERSIONS`` most recent snapshots are kept.
    """
    if not content.strip():
        return
    if note.versions and note.versions[-1].content == content:
        return

    note.versions.append(
        NoteVersion(timestamp=unix_now() if now is None else now, content=content)
    )
    if len(note.versions) > MAX_VERSIONS:
        del note.versions[: len(note.versions) - MAX_VERSIONS]


def latest_version(note: NoteItem) -> NoteVersion | None:
    return note.versions[-1] if note.versions else None


def restore_version(note: NoteItem, index: int, now: int | None = None) -> NoteVersion | None:
    """Copy a snapshot back into the note's live content.

    Args:
        note: Note whose history is used
        index: Position in ``note.versions`` (oldest is 0, negative indices allowed)
        now: Timestamp recorded as the note's modification time

    Returns:
        The restored version, or None if the index does not exist
    """
    try:
        version = note.versions[index]
    except IndexError:
        return None

    note.content = version.content
    note.updated_at = unix_now() if now is None else now
    return version
