"""
Built-in workout templates.

Each template has a fixed id so that a user deleting one can be remembered
across launches (see DeletedTemplatesStore).
"""

from datetime import datetime, timezone
from typing import Final

from .models import SessionRecord

HIIT_ID: Final[str] = "11111111-1111-1111-1111-111111111111"
TABATA_ID: Final[str] = "22222222-2222-2222-2222-222222222222"
HILT_ID: Final[str] = "33333333-3333-3333-3333-333333333333"
WORK_TO_REST_ID: Final[str] = "44444444-4444-4444-4444-444444444444"

# The date is never shown for templates.
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

BUILT_IN_TEMPLATES: Final[tuple[SessionRecord, ...]] = (
    SessionRecord(id=HIIT_ID, name="HIIT", date=_EPOCH, work_seconds=30, rest_seconds=15, sets=10),
    SessionRecord(id=TABATA_ID, name="Tabata", date=_EPOCH, work_seconds=20, rest_seconds=10, sets=8),
    SessionRecord(id=HILT_ID, name="HILT", date=_EPOCH, work_seconds=45, rest_seconds=15, sets=6),
    SessionRecord(
        id=WORK_TO_REST_ID, name="Work-to-Rest", date=_EPOCH, work_seconds=60, rest_seconds=30, sets=5
    ),
)

TEMPLATES_BY_ID: Final[dict[str, SessionRecord]] = {t.id: t for t in BUILT_IN_TEMPLATES}


def is_built_in(template_id: str) -> bool:
    return template_id in TEMPLATES_BY_ID


def visible_templates(deleted_ids: set[str]) -> list[SessionRecord]:
    """Built-in templates the user has not removed, in catalogue order."""
    return [t for t in BUILT_IN_TEMPLATES if t.id not in deleted_ids]


def find_template(id_or_name: str, deleted_ids: set[str] | None = None) -> SessionRecord | None:
    """Find a visible template by id or case-insensitive name."""
    candidates = visible_templates(deleted_ids or set())
    wanted = id_or_name.strip().lower()
    for template in candidates:
        if template.id == id_or_name or template.name.lower() == wanted:
            return template
    return None
