"""Note domain models."""

from typing import Optional

from pydantic import BaseModel, Field

from pithos.clock.system import unix_now


class NoteVersion(BaseModel):
    """A saved, timestamped copy of a note's content."""

    timestamp: int  # seconds since epoch
    content: str

    model_config = {"frozen": True}


class NoteItem(BaseModel):
    """Represents a note in the vault.

    Attributes:
        id: Unique identifier ("note-<seq>" for notes created by the engine)
        name: Display name, unique per folder (case-insensitive)
        content: Current live markdown content
        versions: Snapshot history, oldest first, at most ten entries
        tags: Tags used for categorisation and filtering
        created_at: Creation timestamp (seconds since epoch)
        updated_at: Last modification timestamp (seconds since epoch)
        parent_id: Folder the note lives in, if any
        pinned: Pinned notes sort before all others
    """

    id: str
    name: str
    content: str = ""
    versions: list[NoteVersion] = []
    tags: list[str] = []
    created_at: int = Field(default_factory=unix_now)
    updated_at: int = Field(default_factory=unix_now)
    parent_id: Optional[str] = None
    pinned: bool = False


class TrashItem(BaseModel):
    """A deleted note waiting in the trash until restored or purged."""

    deleted_at: int  # seconds since epoch
    note: NoteItem

    @property
    def id(self) -> str:
        return self.note.id
