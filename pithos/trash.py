"""Trash handling: moving notes in and out, and age-based retention."""

from pithos.clock.system import unix_now
from pithos.domain.note import NoteItem, TrashItem
from pithos.domain.state import DocState

TRASH_PURGE_DAYS = 30
TRASH_PURGE_SECONDS = TRASH_PURGE_DAYS * 24 * 60 * 60


def purge_old_trash(state: DocState, now: int | None = None) -> int:
    """Remove trash items deleted more than 30 days ago.

    Items deleted exactly at the cutoff are kept. Returns the number of items purged.
    """
    cutoff = (unix_now() if now is None else now) - TRASH_PURGE_SECONDS
    before = len(state.trash)
    state.trash[:] = [item for item in state.trash if item.deleted_at >= cutoff]
    return before - len(state.trash)


def move_note_to_trash(state: DocState, note_id: str, now: int | None = None) -> str | None:
    """Move a note to the trash and close its tab.

    The last remaining note is never trashed.

    Returns:
        The ID of the note to switch to when the trashed note was active, otherwise None
    """
    if len(state.notes) <= 1:
        return None
    index = state.find_note_index(note_id)
    if index is None:
        return None

    note = state.notes.pop(index)
    state.trash.append(TrashItem(deleted_at=unix_now() if now is None else now, note=note))
    state.open_tabs = [tab for tab in state.open_tabs if tab != note_id]
    state.mark_dirty()

    if state.active_note_id != note_id:
        return None

    if state.open_tabs:
        switch_to = state.open_tabs[0]
    else:
        switch_to = state.notes[0].id
        state.open_tabs.append(switch_to)
    state.active_note_id = switch_to
    return switch_to


def restore_from_trash(state: DocState, note_id: str, now: int | None = None) -> NoteItem | None:
    """Move a trashed note back into the vault and make it active.

    A note whose folder was deleted meanwhile is restored to the top level.
    """
    index = state.find_trash_index(note_id)
    if index is None:
        return None

    note = state.trash.pop(index).note
    note.updated_at = unix_now() if now is None else now
    if note.parent_id is not None and state.find_folder(note.parent_id) is None:
        note.parent_id = None
    if state.note_name_exists(note.name, note.parent_id):
        note.name = state.deduplicate_note_name(note.name, note.parent_id)
    state.notes.append(note)
    state.open_note(note.id)
    state.mark_dirty()
    return note


def delete_permanently(state: DocState, note_id: str) -> bool:
    index = state.find_trash_index(note_id)
    if index is None:
        return False
    del state.trash[index]
    state.mark_dirty()
    return True


def empty_trash(state: DocState) -> int:
    count = len(state.trash)
    if count:
        state.trash.clear()
        state.mark_dirty()
    return count
