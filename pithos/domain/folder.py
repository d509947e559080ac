"""Folder domain model."""

from typing import Optional

from pydantic import BaseModel, Field

from pithos.clock.system import unix_now


class FolderItem(BaseModel):
    """A folder in the vault's sidebar tree.

    Attributes:
        id: Unique identifier ("folder-<seq>", sharing the note sequence)
        name: Display name, unique among its siblings (case-insensitive)
        expanded: Whether the sidebar shows the folder's children
        created_at: Creation timestamp (seconds since epoch)
        updated_at: Last modification timestamp (seconds since epoch)
        parent_id: Enclosing folder, or None at the top level
    """

    id: str
    name: str
    expanded: bool = True
    created_at: int = Field(default_factory=unix_now)
    updated_at: int = Field(default_factory=unix_now)
    parent_id: Optional[str] = None
