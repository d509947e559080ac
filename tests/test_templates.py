"""Tests for the template catalog and template-based note creation."""

from datetime import date

from pithos.domain.state import DocState
from pithos.domain.template import Template
from pithos.templates import (
    available_templates,
    builtin_templates,
    daily_note_name,
    find_template,
    instantiate_template,
    open_or_create_daily_note,
    remove_custom_template,
    save_note_as_template,
    set_template_enabled,
)

NOW = 1_700_000_000


def test_builtin_templates_order_and_tags() -> None:
    """Test the fixed catalog order and tag labels."""
    templates = builtin_templates()

    assert [t.name for t in templates] == [
        "Threat Model",
        "Architecture Decision Record",
        "IAM Blueprint",
        "Runbook",
        "Meeting Notes",
        "Security Review",
    ]
    assert templates[0].tags == "security,threat-model"
    assert templates[2].tag_list == ["iam", "identity", "security"]


def test_builtin_templates_are_markdown_documents() -> None:
    """Test that every body starts with a heading and has structure to fill in."""
    for template in builtin_templates():
        name, body, tags = template
        assert body.startswith("# ")
        assert "## " in body
        assert tags


def test_builtin_templates_returns_fresh_list() -> None:
    """Test that callers cannot alter the catalog through the returned list."""
    first = builtin_templates()
    first.clear()

    assert len(builtin_templates()) == 6


def test_instantiated_notes_evolve_independently(doc_state: DocState) -> None:
    """Test that two notes from the same template do not share content."""
    template = builtin_templates()[4]

    first = instantiate_template(doc_state, template, now=NOW)
    second = instantiate_template(doc_state, template, now=NOW)
    first.content += "\n- decided to ship"
    first.tags.append("release")

    assert second.content == template.body
    assert second.tags == ["meeting"]
    assert builtin_templates()[4].body == template.body
    assert first.name == "Meeting Notes"
    assert second.name == "Meeting Notes (2)"
    assert first.id != second.id


def test_available_templates_includes_custom_and_skips_disabled(doc_state: DocState) -> None:
    """Test merging custom templates and hiding disabled ones."""
    doc_state.custom_templates.append(Template("Incident", "# Incident\n", "ops"))
    set_template_enabled(doc_state, "Runbook", enabled=False)

    names = [t.name for t in available_templates(doc_state)]

    assert names[-1] == "Incident"
    assert "Runbook" not in names
    assert find_template(doc_state, "Runbook") is None

    set_template_enabled(doc_state, "Runbook", enabled=True)
    assert find_template(doc_state, "Runbook") is not None


def test_save_note_as_template(doc_state: DocState) -> None:
    """Test that a note's name, body and tags become a custom template."""
    template = save_note_as_template(doc_state, "note-1")

    assert template == Template(
        "Threat model for Payments", "STRIDE analysis of the card vault", "security,payments"
    )
    assert doc_state.custom_templates == [template]
    assert save_note_as_template(doc_state, "missing") is None


def test_daily_note_name() -> None:
    assert daily_note_name(date(2026, 3, 9)) == "2026-03-09 - Daily Note"


def test_open_or_create_daily_note(doc_state: DocState) -> None:
    """Test that the daily note is created once and reopened afterwards."""
    day = date(2026, 3, 9)

    created = open_or_create_daily_note(doc_state, day, now=NOW)
    doc_state.open_note("note-1")
    reopened = open_or_create_daily_note(doc_state, day, now=NOW)

    assert reopened is created
    assert created.tags == ["daily"]
    assert created.content.startswith("# 2026-03-09 - Daily Note\n\n## Tasks")
    assert doc_state.active_note_id == created.id
    assert len(doc_state.notes) == 4


def test_remove_custom_template(doc_state: DocState) -> None:
    """Test that removing a custom template also forgets that it was disabled."""
    incident = Template("Incident", "# Incident\n", "ops")
    doc_state.custom_templates.append(incident)
    set_template_enabled(doc_state, "Incident", enabled=False)
    set_template_enabled(doc_state, "Runbook", enabled=False)

    assert remove_custom_template(doc_state, "Incident") == incident

    assert doc_state.custom_templates == []
    assert doc_state.disabled_templates == ["Runbook"]
    assert remove_custom_template(doc_state, "Incident") is None
    assert remove_custom_template(doc_state, "Runbook") is None
