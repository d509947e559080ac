import pytest

from pithos.domain.note import NoteItem, TrashItem
from pithos.domain.state import DocState
from pithos.engine import NoteEngine
from tests.fakes import FakeClock

NOW = 1_700_000_000
DAY = 24 * 60 * 60


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock(start=NOW)


@pytest.fixture
def test_notes() -> list[NoteItem]:
    return [
        NoteItem(
            id="note-1",
            name="Threat model for Payments",
            content="STRIDE analysis of the card vault",
            tags=["security", "payments"],
            created_at=NOW - 3 * DAY,
            updated_at=NOW - DAY,
        ),
        NoteItem(
            id="note-2",
            name="Weekly sync",
            content="Discussed the IAM rollout",
            tags=["meeting"],
            created_at=NOW - 2 * DAY,
            updated_at=NOW - 2 * DAY,
        ),
        NoteItem(
            id="note-3",
            name="Runbook: rotate keys",
            content="Rotate the KMS keys every quarter",
            tags=["runbook", "security"],
            created_at=NOW - DAY,
            updated_at=NOW,
        ),
    ]


@pytest.fixture
def doc_state(test_notes: list[NoteItem]) -> DocState:
    """A state with three notes, the first one active, and nothing in the trash."""
    return DocState(
        notes=test_notes,
        active_note_id="note-1",
        open_tabs=["note-1"],
        next_note_seq=4,
    )


@pytest.fixture
def trashed_state(doc_state: DocState) -> DocState:
    """A state with trash items deleted 40, 31, 30 and 1 days ago."""
    doc_state.trash = [
        TrashItem(deleted_at=NOW - 40 * DAY, note=NoteItem(id="old-1", name="Old 1")),
        TrashItem(deleted_at=NOW - 31 * DAY, note=NoteItem(id="old-2", name="Old 2")),
        TrashItem(deleted_at=NOW - 30 * DAY, note=NoteItem(id="edge", name="Edge")),
        TrashItem(deleted_at=NOW - DAY, note=NoteItem(id="recent", name="Recent")),
    ]
    return doc_state


@pytest.fixture
def engine(doc_state: DocState, fake_clock: FakeClock) -> NoteEngine:
    return NoteEngine(state=doc_state, clock=fake_clock)
