"""Document state aggregate and its enumerations."""

from contextlib import contextmanager
from enum import Enum
from typing import Any, Iterator, Optional

from pydantic import BaseModel, PrivateAttr, field_validator

from pithos.clock.system import unix_now
from pithos.domain.folder import FolderItem
from pithos.domain.note import NoteItem, TrashItem
from pithos.domain.template import Template


class SortOrder(str, Enum):
    MANUAL = "manual"
    MODIFIED_DESC = "modified-desc"
    MODIFIED_ASC = "modified-asc"
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"
    CREATED_DESC = "created-desc"
    CREATED_ASC = "created-asc"

    @classmethod
    def parse(cls, value: Any) -> "SortOrder":
        """Parse a persisted value, falling back to most-recently-modified first."""
        try:
            return cls(value)
        except ValueError:
            return cls.MODIFIED_DESC


class Theme(str, Enum):
    SYSTEM = "system"
    LIGHT = "light"
    DARK = "dark"

    @classmethod
    def parse(cls, value: Any) -> "Theme":
        """Parse a persisted value, falling back to the system theme."""
        if isinstance(value, str):
            value = value.strip().lower()
        try:
            return cls(value)
        except ValueError:
            return cls.SYSTEM


PAGE_WELCOME = """# Welcome to Pithos Notebook

Pithos Notebook is a private, offline markdown notebook for professionals who
write sensitive technical documentation.

## Getting started

1. **Write** in the source editor with a live preview beside it
2. **Organize** notes into folders from the sidebar
3. **Tag** notes with the tag bar below the editor
4. **Search** across all notes with **Ctrl+Shift+F**
5. **Snapshot** your work and restore earlier versions from the menu

Deleted notes stay in the trash for 30 days before they are purged.
"""

PAGE_SHORTCUTS = """# Keyboard shortcuts

| Action | Shortcut |
| --- | --- |
| New note | Ctrl+N |
| Save | Ctrl+S |
| Search notes | Ctrl+Shift+F |
| Daily note | Ctrl+Shift+T |
| Command palette | Ctrl+Shift+P |
| Toggle dark/light | Ctrl+Shift+D |
"""

PAGE_FORMATTING = """# Formatting examples

**Bold**, *italic*, ~~strikethrough~~, and `inline code`.

- [ ] To-do item
- [x] Completed item

> Use block quotes to highlight important text.

```python
def greet(name):
    return f"Hello, {name}!"
```

| Feature | Status |
| --- | --- |
| Tables | Supported |
| Task lists | Supported |
"""


class DocState(BaseModel):
    """In-memory aggregate of everything in an open vault.

    The persistence layer loads and saves this model with ``model_validate``
    and ``model_dump``; the engine never touches the disk itself.
    """

    notes: list[NoteItem] = []
    folders: list[FolderItem] = []
    trash: list[TrashItem] = []
    active_note_id: str = ""
    open_tabs: list[str] = []
    next_note_seq: int = 1
    sort_order: SortOrder = SortOrder.MODIFIED_DESC
    theme: Theme = Theme.SYSTEM
    search_query: str = ""
    filter_tags: list[str] = []
    tag_filter_and: bool = False
    custom_templates: list[Template] = []
    disabled_templates: list[str] = []

    # Session fields owned by the presentation layer
    dirty: bool = False
    undo_stack: list[str] = []
    redo_stack: list[str] = []

    _bulk_depth: int = PrivateAttr(default=0)
    _pending_dirty: bool = PrivateAttr(default=False)

    @field_validator("sort_order", mode="before")
    @classmethod
    def _parse_sort_order(cls, value: Any) -> SortOrder:
        return SortOrder.parse(value)

    @field_validator("theme", mode="before")
    @classmethod
    def _parse_theme(cls, value: Any) -> Theme:
        return Theme.parse(value)

    @classmethod
    def fresh(cls, now: int | None = None, **overrides: Any) -> "DocState":
        """Create the state of a brand new vault, seeded with the guide notes."""
        now = unix_now() if now is None else now
        guides = [
            ("Welcome", PAGE_WELCOME, ["guide"]),
            ("Keyboard Shortcuts", PAGE_SHORTCUTS, ["guide"]),
            ("Formatting Examples", PAGE_FORMATTING, ["guide", "examples"]),
        ]
        state = cls(**overrides)
        for name, content, tags in guides:
            state.add_note(name, content, tags, now=now)
        state.active_note_id = state.notes[0].id
        state.open_tabs = [state.notes[0].id]
        state.dirty = False
        return state

    # --- Lookups ---

    @property
    def active_note(self) -> NoteItem | None:
        return self.find_note(self.active_note_id)

    @property
    def in_bulk_update(self) -> bool:
        return self._bulk_depth > 0

    def find_note(self, note_id: str) -> NoteItem | None:
        """Get a note by its ID."""
        index = self.find_note_index(note_id)
        return None if index is None else self.notes[index]

    def find_note_index(self, note_id: str) -> int | None:
        for index, note in enumerate(self.notes):
            if note.id == note_id:
                return index
        return None

    def find_trash_index(self, note_id: str) -> int | None:
        for index, item in enumerate(self.trash):
            if item.id == note_id:
                return index
        return None

    def find_folder(self, folder_id: str) -> FolderItem | None:
        for folder in self.folders:
            if folder.id == folder_id:
                return folder
        return None

    def note_name_exists(
        self, name: str, folder_id: Optional[str] = None, exclude_id: Optional[str] = None
    ) -> bool:
        lower = name.lower()
        return any(
            note.parent_id == folder_id and note.name.lower() == lower and note.id != exclude_id
            for note in self.notes
        )

    def folder_name_exists(
        self, name: str, parent_id: Optional[str] = None, exclude_id: Optional[str] = None
    ) -> bool:
        lower = name.lower()
        return any(
            folder.parent_id == parent_id
            and folder.name.lower() == lower
            and folder.id != exclude_id
            for folder in self.folders
        )

    def deduplicate_note_name(
        self, base: str, folder_id: Optional[str] = None, exclude_id: Optional[str] = None
    ) -> str:
        """Return ``base``, or ``base (n)`` with the first free n >= 2.

        ``exclude_id`` skips a note's own name, so renaming a note never
        collides with itself.
        """
        if not self.note_name_exists(base, folder_id, exclude_id):
            return base
        i = 2
        while self.note_name_exists(f"{base} ({i})", folder_id, exclude_id):
            i += 1
        return f"{base} ({i})"

    # --- Mutation ---

    def _id_in_use(self, item_id: str) -> bool:
        return (
            self.find_note(item_id) is not None
            or self.find_trash_index(item_id) is not None
            or self.find_folder(item_id) is not None
        )

    def _allocate_id(self, prefix: str) -> str:
        item_id = f"{prefix}-{self.next_note_seq}"
        self.next_note_seq += 1
        while self._id_in_use(item_id):
            item_id = f"{prefix}-{self.next_note_seq}"
            self.next_note_seq += 1
        return item_id

    def allocate_note_id(self) -> str:
        return self._allocate_id("note")

    def allocate_folder_id(self) -> str:
        return self._allocate_id("folder")

    def add_note(
        self,
        name: str,
        content: str,
        tags: list[str] | None = None,
        folder_id: Optional[str] = None,
        now: int | None = None,
    ) -> NoteItem:
        """Create a note with a unique name and make it the active tab."""
        now = unix_now() if now is None else now
        note = NoteItem(
            id=self.allocate_note_id(),
            name=self.deduplicate_note_name(name, folder_id),
            content=content,
            tags=list(tags or []),
            created_at=now,
            updated_at=now,
            parent_id=folder_id,
        )
        self.notes.append(note)
        self.open_note(note.id)
        self.mark_dirty()
        return note

    def open_note(self, note_id: str) -> bool:
        if self.find_note(note_id) is None:
            return False
        if note_id not in self.open_tabs:
            self.open_tabs.append(note_id)
        self.active_note_id = note_id
        return True

    def close_tab(self, note_id: str) -> bool:
        """Close a note's tab. The last open tab cannot be closed.

        Closing the active tab activates its right-hand neighbour, or the
        new last tab when it was the rightmost one.
        """
        if len(self.open_tabs) <= 1 or note_id not in self.open_tabs:
            return False
        index = self.open_tabs.index(note_id)
        del self.open_tabs[index]
        if self.active_note_id == note_id:
            self.active_note_id = self.open_tabs[min(index, len(self.open_tabs) - 1)]
        return True

    def mark_dirty(self) -> None:
        if self.in_bulk_update:
            self._pending_dirty = True
        else:
            self.dirty = True

    @contextmanager
    def bulk_update(self) -> Iterator["DocState"]:
        """Group several mutations so derived state is refreshed once at the end.

        Nested scopes are allowed; ``dirty`` is only raised when the outermost
        scope exits and something inside it changed.
        """
        self._bulk_depth += 1
        try:
            yield self
        finally:
            self._bulk_depth -= 1
            if self._bulk_depth == 0 and self._pending_dirty:
                self._pending_dirty = False
                self.dirty = True
