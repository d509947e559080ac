"""Template domain model."""

from typing import NamedTuple


class Template(NamedTuple):
    """A pre-authored markdown document used to seed new notes.

    Attributes:
        name: Display name shown in the template picker
        body: Markdown body copied into every note created from the template
        tags: Comma-joined tag label, e.g. "security,threat-model"
    """

    name: str
    body: str
    tags: str

    @property
    def tag_list(self) -> list[str]:
        return [tag.strip() for tag in self.tags.split(",") if tag.strip()]
