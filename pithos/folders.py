"""Folder tree operations: create, rename, delete and filing notes."""

from pithos.clock.system import unix_now
from pithos.domain.folder import FolderItem
from pithos.domain.state import DocState


def create_folder(
    state: DocState, name: str, parent_id: str | None = None, now: int | None = None
) -> FolderItem | None:
    """Create a folder under ``parent_id`` (top level when None).

    Returns:
        The new folder, or None if the name is blank, already used by a
        sibling, or the parent does not exist
    """
    name = name.strip()
    if not name:
        return None
    if parent_id is not None and state.find_folder(parent_id) is None:
        return None
    if state.folder_name_exists(name, parent_id):
        return None

    now = unix_now() if now is None else now
    folder = FolderItem(
        id=state.allocate_folder_id(),
        name=name,
        created_at=now,
        updated_at=now,
        parent_id=parent_id,
    )
    state.folders.append(folder)
    state.mark_dirty()
    return folder


def rename_folder(state: DocState, folder_id: str, name: str, now: int | None = None) -> bool:
    folder = state.find_folder(folder_id)
    name = name.strip()
    if folder is None or not name:
        return False
    if state.folder_name_exists(name, folder.parent_id, exclude_id=folder_id):
        return False
    folder.name = name
    folder.updated_at = unix_now() if now is None else now
    state.mark_dirty()
    return True


def delete_folder(state: DocState, folder_id: str) -> bool:
    """Delete a folder without deleting anything inside it.

    Its notes move to the top level; its child folders move up to the
    deleted folder's parent.
    """
    folder = state.find_folder(folder_id)
    if folder is None:
        return False

    for note in state.notes:
        if note.parent_id == folder_id:
            note.parent_id = None
    for child in state.folders:
        if child.parent_id == folder_id:
            child.parent_id = folder.parent_id
    state.folders = [f for f in state.folders if f.id != folder_id]
    state.mark_dirty()
    return True


def move_note_to_folder(
    state: DocState, note_id: str, folder_id: str | None, now: int | None = None
) -> bool:
    """File a note under ``folder_id``, or at the top level when None.

    Refused when the destination already holds a note with the same name.
    """
    note = state.find_note(note_id)
    if note is None:
        return False
    if folder_id is not None and state.find_folder(folder_id) is None:
        return False
    if state.note_name_exists(note.name, folder_id, exclude_id=note_id):
        return False
    note.parent_id = folder_id
    note.updated_at = unix_now() if now is None else now
    state.mark_dirty()
    return True
