"""Note engine: the single entry point the presentation layer talks to."""

from contextlib import contextmanager
from datetime import date
from threading import RLock
from typing import Iterator

from loguru import logger

from pithos import folders, history, search, templates, trash
from pithos.clock.base import Clock
from pithos.clock.system import SystemClock
from pithos.domain.folder import FolderItem
from pithos.domain.note import NoteItem, NoteVersion
from pithos.domain.state import DocState
from pithos.domain.template import Template
from pithos.rendering import markdown_to_html


class NoteEngine:
    """Owns a DocState and serialises every operation on it.

    User actions and timer ticks (autosave, trash purge) may come from
    different threads; each call holds the engine lock for its whole duration.
    """

    def __init__(self, state: DocState | None = None, clock: Clock | None = None) -> None:
        """Initialize NoteEngine.

        Args:
            state: Loaded vault state. A fresh vault with guide notes is created if omitted.
            clock: Time source in unix seconds. Defaults to the system clock.
        """
        self._clock = clock or SystemClock()
        self._state = state if state is not None else DocState.fresh(now=self._clock.now())
        self._lock = RLock()

    @property
    def state(self) -> DocState:
        return self._state

    # --- Creation ---

    def create_note(
        self,
        name: str,
        content: str = "",
        tags: list[str] | None = None,
        folder_id: str | None = None,
    ) -> NoteItem:
        with self._lock:
            note = self._state.add_note(name, content, tags, folder_id, now=self._clock.now())
            logger.info(f"Created note {note.id} '{note.name}'")
            return note

    def new_document(self) -> NoteItem:
        return self.create_note("Untitled Note", "# Untitled Note\n\n")

    def create_from_template(self, template_name: str) -> NoteItem | None:
        with self._lock:
            template = templates.find_template(self._state, template_name)
            if template is None:
                logger.warning(f"Template not found: {template_name}")
                return None
            note = templates.instantiate_template(self._state, template, now=self._clock.now())
            logger.info(f"Created note {note.id} from template '{template_name}'")
            return note

    def open_daily_note(self, day: date | None = None) -> NoteItem:
        with self._lock:
            return templates.open_or_create_daily_note(self._state, day, now=self._clock.now())

    # --- Lookup and editing ---

    def get_note(self, note_id: str) -> NoteItem | None:
        with self._lock:
            return self._state.find_note(note_id)

    def switch_to_note(self, note_id: str, outgoing_content: str | None = None) -> bool:
        """Make a note active, opening a tab for it if needed.

        Args:
            note_id: Note to switch to
            outgoing_content: Editor text of the note being left. When it differs
                from the stored content, the stored content is snapshotted first
                and then replaced by the editor text.

        Returns:
            False if the note does not exist
        """
        with self._lock:
            if self._state.find_note(note_id) is None:
                return False
            current = self._state.active_note
            if (
                current is not None
                and current.id != note_id
                and outgoing_content is not None
                and current.content != outgoing_content
            ):
                now = self._clock.now()
                history.push_snapshot(current, current.content, now=now)
                current.content = outgoing_content
                current.updated_at = now
                self._state.mark_dirty()
            return self._state.open_note(note_id)

    def close_tab(self, note_id: str) -> bool:
        with self._lock:
            return self._state.close_tab(note_id)

    def update_content(self, note_id: str, content: str) -> bool:
        """Replace a note's live content. Does not take a snapshot."""
        with self._lock:
            note = self._state.find_note(note_id)
            if note is None:
                return False
            if note.content != content:
                note.content = content
                note.updated_at = self._clock.now()
                self._state.mark_dirty()
            return True

    def rename_note(self, note_id: str, name: str) -> str | None:
        """Rename a note, appending " (n)" if the name is taken in its folder.

        Returns:
            The name actually applied, or None if the note does not exist
        """
        with self._lock:
            note = self._state.find_note(note_id)
            if note is None:
                return None
            name = self._state.deduplicate_note_name(
                name.strip() or "Untitled", note.parent_id, exclude_id=note.id
            )
            note.name = name
            note.updated_at = self._clock.now()
            self._state.mark_dirty()
            return name

    def set_tags(self, note_id: str, tags: list[str]) -> bool:
        with self._lock:
            note = self._state.find_note(note_id)
            if note is None:
                return False
            cleaned: list[str] = []
            for tag in tags:
                tag = tag.strip()
                if tag and tag not in cleaned:
                    cleaned.append(tag)
            note.tags = cleaned
            note.updated_at = self._clock.now()
            self._state.mark_dirty()
            return True

    def toggle_pin(self, note_id: str) -> bool | None:
        """Pin or unpin a note.

        Returns:
            The new pinned flag, or None if the note does not exist
        """
        with self._lock:
            note = self._state.find_note(note_id)
            if note is None:
                return None
            note.pinned = not note.pinned
            note.updated_at = self._clock.now()
            self._state.mark_dirty()
            return note.pinned

    # --- Folders ---

    def create_folder(self, name: str, parent_id: str | None = None) -> FolderItem | None:
        with self._lock:
            folder = folders.create_folder(self._state, name, parent_id, now=self._clock.now())
            if folder is None:
                logger.warning(f"Cannot create folder '{name}' under {parent_id or 'top level'}")
            else:
                logger.info(f"Created folder {folder.id} '{folder.name}'")
            return folder

    def rename_folder(self, folder_id: str, name: str) -> bool:
        with self._lock:
            renamed = folders.rename_folder(self._state, folder_id, name, now=self._clock.now())
            if not renamed:
                logger.warning(f"Cannot rename folder {folder_id} to '{name}'")
            return renamed

    def delete_folder(self, folder_id: str) -> bool:
        with self._lock:
            deleted = folders.delete_folder(self._state, folder_id)
            if deleted:
                logger.info(f"Deleted folder {folder_id}, its contents moved up")
            return deleted

    def move_note_to_folder(self, note_id: str, folder_id: str | None) -> bool:
        with self._lock:
            moved = folders.move_note_to_folder(
                self._state, note_id, folder_id, now=self._clock.now()
            )
            if not moved:
                logger.warning(f"Cannot move note {note_id} to folder {folder_id}")
            return moved

    # --- Version history ---

    def save_snapshot(self, note_id: str | None = None) -> bool:
        """Snapshot a note's live content (the active note by default).

        Returns:
            True if a new version was recorded
        """
        with self._lock:
            note = self._state.find_note(note_id or self._state.active_note_id)
            if note is None:
                return False
            previous = history.latest_version(note)
            history.push_snapshot(note, note.content, now=self._clock.now())
            if history.latest_version(note) is previous:
                logger.debug(f"Snapshot of {note.id} skipped: blank or unchanged")
                return False
            self._state.mark_dirty()
            return True

    def autosave_tick(self, editor_content: str | None = None) -> bool:
        """Flush pending editor text into the active note and snapshot it."""
        with self._lock:
            note_id = self._state.active_note_id
            if editor_content is not None:
                self.update_content(note_id, editor_content)
            return self.save_snapshot(note_id)

    def restore_version(self, note_id: str, index: int) -> NoteVersion | None:
        with self._lock:
            note = self._state.find_note(note_id)
            if note is None:
                return None
            version = history.restore_version(note, index, now=self._clock.now())
            if version is not None:
                self._state.mark_dirty()
                logger.info(f"Restored {note.id} to version from {version.timestamp}")
            return version

    # --- Trash ---

    def trash_note(self, note_id: str) -> str | None:
        """Move a note to the trash. Returns the note to switch to, if the active one left."""
        with self._lock:
            if self._state.find_note(note_id) is None:
                return None
            if len(self._state.notes) <= 1:
                logger.warning("Refusing to trash the last remaining note")
                return None
            switch_to = trash.move_note_to_trash(self._state, note_id, now=self._clock.now())
            logger.info(f"Moved note {note_id} to trash")
            return switch_to

    def restore_note(self, note_id: str) -> NoteItem | None:
        with self._lock:
            note = trash.restore_from_trash(self._state, note_id, now=self._clock.now())
            if note is not None:
                logger.info(f"Restored note {note_id} from trash")
            return note

    def delete_permanently(self, note_id: str) -> bool:
        with self._lock:
            return trash.delete_permanently(self._state, note_id)

    def empty_trash(self) -> int:
        with self._lock:
            count = trash.empty_trash(self._state)
            if count:
                logger.info(f"Emptied trash ({count} items)")
            return count

    def purge_trash(self) -> int:
        with self._lock:
            purged = trash.purge_old_trash(self._state, now=self._clock.now())
            if purged:
                self._state.mark_dirty()
                logger.info(f"Purged {purged} trash items older than {trash.TRASH_PURGE_DAYS} days")
            return purged

    # --- Templates ---

    def available_templates(self) -> list[Template]:
        with self._lock:
            return templates.available_templates(self._state)

    def save_as_template(self, note_id: str) -> Template | None:
        with self._lock:
            return templates.save_note_as_template(self._state, note_id)

    def remove_custom_template(self, name: str) -> Template | None:
        with self._lock:
            removed = templates.remove_custom_template(self._state, name)
            if removed is not None:
                logger.info(f"Removed custom template '{name}'")
            return removed

    # --- Queries ---

    def search(self, query: str) -> list[NoteItem]:
        with self._lock:
            matches = [n for n in self._state.notes if search.note_matches_query(n, query)]
            return search.sort_notes(matches, self._state.sort_order)

    def visible_notes(self) -> list[NoteItem]:
        with self._lock:
            return search.filter_notes(self._state)

    def toggle_tag_filter(self, tag: str) -> bool:
        with self._lock:
            return search.toggle_tag_filter(self._state, tag)

    def render(self, note_id: str) -> str | None:
        with self._lock:
            note = self._state.find_note(note_id)
            content = None if note is None else note.content
        return None if content is None else markdown_to_html(content)

    @contextmanager
    def bulk_update(self) -> Iterator[DocState]:
        """Hold the lock across several edits, marking the state dirty once at the end."""
        with self._lock, self._state.bulk_update() as state:
            yield state
