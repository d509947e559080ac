"""Template catalog and template-based note creation."""

from datetime import date

from pithos.domain.note import NoteItem
from pithos.domain.state import DocState
from pithos.domain.template import Template

THREAT_MODEL = """# Threat Model

## System Overview

**System name**:
**Owner**:
**Date**:

## Assets

| Asset | Classification | Location |
| --- | --- | --- |
|  |  |  |

## Threat Actors

-

## Attack Surface

| Entry Point | Protocol | Authentication |
| --- | --- | --- |
|  |  |  |

## Threats (STRIDE)

| ID | Category | Threat | Likelihood | Impact | Mitigation |
| --- | --- | --- | --- | --- | --- |
| T-001 |  |  |  |  |  |

## Mitigations

- [ ]

## Residual Risks

-

## Review History

| Date | Reviewer | Notes |
| --- | --- | --- |
|  |  |  |
"""

ARCHITECTURE_DECISION_RECORD = """# ADR-NNN: [Title]

## Status

Proposed | Accepted | Deprecated | Superseded by ADR-XXX

## Context

Describe the forces at play, including technical, political, social, and project constraints.

## Decision

State the decision that was made.

## Consequences

Describe the resulting context after applying the decision. List both positive and negative consequences.

## Alternatives Considered

| Option | Pros | Cons |
| --- | --- | --- |
|  |  |  |

## References

-
"""

IAM_BLUEPRINT = """# IAM Blueprint

## Scope

**Environment**:
**Identity Provider**:
**Date**:

## Identity Lifecycle

| Phase | Process | Owner | SLA |
| --- | --- | --- | --- |
| Joiner |  |  |  |
| Mover |  |  |  |
| Leaver |  |  |  |

## Role Hierarchy

```mermaid
graph TD
    A[Global Admin] --> B[Tenant Admin]
    B --> C[Security Admin]
    B --> D[Application Admin]
```

## Access Policies

| Policy | Scope | Conditions | Grant |
| --- | --- | --- | --- |
|  |  |  |  |

## Privileged Access

- [ ] Just-in-time elevation configured
- [ ] Break-glass accounts documented
- [ ] PAM solution integrated

## Audit & Compliance

-
"""

RUNBOOK = """# Runbook: [Procedure Name]

## Overview

**Purpose**:
**Owner**:
**Last tested**:
**Estimated duration**:

## Prerequisites

- [ ]

## Procedure

### Step 1 -

```bash

```

### Step 2 -

```bash

```

### Step 3 -

```bash

```

## Verification

- [ ]

## Rollback

1.

## Contacts

| Role | Name | Contact |
| --- | --- | --- |
| Primary |  |  |
| Escalation |  |  |
"""

MEETING_NOTES = (
    "# Meeting Notes\n\n**Date**: \n**Attendees**:\n\n## Agenda\n\n1. \n\n"
    "## Discussion\n\n- \n\n## Action Items\n\n- [ ] \n"
)

SECURITY_REVIEW = """# Security Review

## Application

**Name**:
**Version**:
**Review date**:
**Reviewer**:

## Scope

-

## Findings

| ID | Severity | Title | Status |
| --- | --- | --- | --- |
| F-001 | Critical / High / Medium / Low |  | Open |

## F-001: [Finding Title]

**Severity**:
**Component**:
**Description**:

**Recommendation**:

**Evidence**:

```

```

## Summary

| Severity | Count |
| --- | --- |
| Critical | 0 |
| High | 0 |
| Medium | 0 |
| Low | 0 |

## Sign-off

- [ ] Findings reviewed with development team
- [ ] Remediation timeline agreed
"""


def builtin_templates() -> list[Template]:
    """Built-in templates for identity architects, security SMEs and enterprise architects."""
    return [
        Template("Threat Model", THREAT_MODEL, "security,threat-model"),
        Template("Architecture Decision Record", ARCHITECTURE_DECISION_RECORD, "architecture,adr"),
        Template("IAM Blueprint", IAM_BLUEPRINT, "iam,identity,security"),
        Template("Runbook", RUNBOOK, "runbook,operations"),
        Template("Meeting Notes", MEETING_NOTES, "meeting"),
        Template("Security Review", SECURITY_REVIEW, "security,review"),
    ]


def available_templates(state: DocState) -> list[Template]:
    """Built-in then custom templates, without the ones the user disabled."""
    disabled = set(state.disabled_templates)
    return [
        template
        for template in builtin_templates() + list(state.custom_templates)
        if template.name not in disabled
    ]


def find_template(state: DocState, name: str) -> Template | None:
    for template in available_templates(state):
        if template.name == name:
            return template
    return None


def instantiate_template(
    state: DocState,
    template: Template,
    folder_id: str | None = None,
    now: int | None = None,
) -> NoteItem:
    """Create a new note seeded with a copy of the template's body and tags."""
    return state.add_note(
        template.name, template.body, template.tag_list, folder_id=folder_id, now=now
    )


def save_note_as_template(state: DocState, note_id: str) -> Template | None:
    note = state.find_note(note_id)
    if note is None:
        return None
    template = Template(note.name, note.content, ",".join(note.tags))
    state.custom_templates.append(template)
    state.mark_dirty()
    return template


def set_template_enabled(state: DocState, name: str, enabled: bool) -> None:
    if enabled:
        state.disabled_templates = [n for n in state.disabled_templates if n != name]
    elif name not in state.disabled_templates:
        state.disabled_templates.append(name)
    state.mark_dirty()


def daily_note_name(day: date) -> str:
    return f"{day.isoformat()} - Daily Note"


def open_or_create_daily_note(
    state: DocState, day: date | None = None, now: int | None = None
) -> NoteItem:
    """Open the daily note for ``day`` (today by default), creating it if needed."""
    name = daily_note_name(day or date.today())
    for note in state.notes:
        if note.name == name:
            state.open_note(note.id)
            return note

    content = f"# {name}\n\n## Tasks\n\n- [ ] \n\n## Notes\n\n"
    return state.add_note(name, content, ["daily"], now=now)


def remove_custom_template(state: DocState, name: str) -> Template | None:
    """Delete a custom template. Built-in templates can only be disabled."""
    for index, template in enumerate(state.custom_templates):
        if template.name == name:
            del state.custom_templates[index]
            state.disabled_templates = [n for n in state.disabled_templates if n != name]
            state.mark_dirty()
            return template
    return None
