"""
JSON serialization for session records and intentions.

Handles conversion between dataclasses and JSON-compatible dicts, and the
encoding of whole lists into the string blobs stored under one key.
Field names match the keys written by earlier versions of the app
(``timerDuration``, ``restDuration``) so existing data keeps loading.
"""

import json
import math
from datetime import datetime, timezone
from typing import Any, Callable, TypeVar

from ..core.config import INTENTION_STATES
from ..core.models import IntentRecord, SessionRecord

T = TypeVar("T")


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_timestamp(value: Any) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    Naive timestamps are taken to be UTC.

    Raises:
        ValidationError: If the value is not a valid ISO-8601 string
    """
    if not isinstance(value, str):
        raise ValidationError(f"Invalid date: {value!r}. Expected ISO-8601 string")
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(f"Invalid date: {value}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def validate_non_negative_int(value: Any, name: str) -> int:
    """
    Validate that a value is a non-negative integer.

    Raises:
        ValidationError: If the value is missing, not integral, or negative
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError(f"{name} must be finite, got {value}")
    if int(value) != value:
        raise ValidationError(f"{name} must be a whole number, got {value}")
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return int(value)


def validate_intention(state: str) -> str:
    """
    Validate an intention (state of mind) name.

    Matching is case-insensitive; the canonical capitalised name is returned.

    Raises:
        ValidationError: If the state is not one of the known states
    """
    for known in INTENTION_STATES:
        if known.lower() == str(state).strip().lower():
            return known
    raise ValidationError(
        f"Invalid intention: {state!r}. Must be one of {', '.join(INTENTION_STATES)}"
    )


def session_record_to_dict(record: SessionRecord) -> dict[str, Any]:
    """
    Convert SessionRecord to JSON-compatible dict.

    ``intention`` is omitted when absent.
    """
    d: dict[str, Any] = {
        "id": record.id,
        "name": record.name,
        "date": record.date.isoformat(),
        "timerDuration": record.work_seconds,
        "restDuration": record.rest_seconds,
        "sets": record.sets,
    }
    if record.intention is not None:
        d["intention"] = record.intention
    return d


def dict_to_session_record(data: dict[str, Any]) -> SessionRecord:
    """
    Convert dict to SessionRecord.

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Session record must be an object, got {type(data).__name__}")

    try:
        record_id = data["id"]
        date = validate_timestamp(data["date"])
        work = validate_non_negative_int(data["timerDuration"], "timerDuration")
        rest = validate_non_negative_int(data["restDuration"], "restDuration")
        sets = validate_non_negative_int(data["sets"], "sets")
    except KeyError as e:
        raise ValidationError(f"Session record missing field {e}") from e

    intention = data.get("intention")
    if intention is not None and not isinstance(intention, str):
        raise ValidationError(f"intention must be a string, got {intention!r}")

    try:
        return SessionRecord(
            id=str(record_id),
            name=str(data.get("name", "")),
            date=date,
            work_seconds=work,
            rest_seconds=rest,
            sets=sets,
            intention=intention,
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e


def intent_record_to_dict(record: IntentRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "date": record.date.isoformat(),
        "state": record.state,
    }


def dict_to_intent_record(data: dict[str, Any]) -> IntentRecord:
    """
    Convert dict to IntentRecord.

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Intent record must be an object, got {type(data).__name__}")
    try:
        return IntentRecord(
            id=str(data["id"]),
            date=validate_timestamp(data["date"]),
            state=validate_intention(data["state"]),
        )
    except KeyError as e:
        raise ValidationError(f"Intent record missing field {e}") from e


def encode_list(items: list[T], to_dict: Callable[[T], dict[str, Any]]) -> str:
    """Serialize a list of records into a single JSON blob."""
    return json.dumps([to_dict(item) for item in items])


def decode_list(blob: Any, from_dict: Callable[[dict[str, Any]], T]) -> list[T]:
    """
    Deserialize a JSON blob into a list of records.

    Raises:
        ValidationError: If the blob is not a JSON list of valid records
    """
    if not isinstance(blob, str):
        raise ValidationError(f"Expected a JSON string blob, got {type(blob).__name__}")
    try:
        data = json.loads(blob)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Malformed JSON: {e}") from e
    if not isinstance(data, list):
        raise ValidationError(f"Expected a JSON list, got {type(data).__name__}")
    return [from_dict(item) for item in data]


def encode_id_set(ids: set[str]) -> str:
    return json.dumps(sorted(ids))


def decode_id_set(blob: Any) -> set[str]:
    """
    Deserialize a JSON list of identifiers.

    Raises:
        ValidationError: If the blob is not a JSON list of strings
    """
    if not isinstance(blob, str):
        raise ValidationError(f"Expected a JSON string blob, got {type(blob).__name__}")
    try:
        data = json.loads(blob)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Malformed JSON: {e}") from e
    if not isinstance(data, list) or not all(isinstance(i, str) for i in data):
        raise ValidationError("Expected a JSON list of identifier strings")
    return set(data)
