"""
Persisted record lists: session history, saved configurations, deleted
built-in templates and the intentions log.

Each list is one JSON blob under one key of the KeyValueStore.  Loading is
fail-soft: a missing or malformed blob reads as an empty list and is only
logged.  Every mutation is a whole read/modify/write; last writer wins.
"""

from datetime import datetime
from typing import Any, Callable, Generic, TypeVar

from loguru import logger

from ..core.config import (
    KEY_DELETED_TEMPLATES,
    KEY_INTENTIONS_HISTORY,
    KEY_SAVED_CONFIGURATIONS,
    KEY_SESSION_HISTORY,
)
from ..core.models import IntentRecord, SessionRecord
from .kv_store import KeyValueStore
from .serializers import (
    ValidationError,
    decode_id_set,
    decode_list,
    dict_to_intent_record,
    dict_to_session_record,
    encode_id_set,
    encode_list,
    intent_record_to_dict,
    session_record_to_dict,
    validate_intention,
)

T = TypeVar("T")


class _RecordListStore(Generic[T]):
    """A list of records encoded as a single blob under ``key``."""

    key: str = ""

    def __init__(
        self,
        kv: KeyValueStore,
        to_dict: Callable[[T], dict[str, Any]],
        from_dict: Callable[[dict[str, Any]], T],
    ):
        self.kv = kv
        self._to_dict = to_dict
        self._from_dict = from_dict

    def load(self) -> list[T]:
        """
        Load the stored list.

        Returns:
            The decoded records, or an empty list if the key is missing or
            its blob cannot be decoded
        """
        blob = self.kv.get(self.key)
        if blob is None:
            return []
        try:
            return decode_list(blob, self._from_dict)
        except ValidationError as e:
            logger.warning(f"Treating {self.key!r} as empty: {e}")
            return []

    def _save(self, items: list[T]) -> None:
        self.kv.set(self.key, encode_list(items, self._to_dict))

    def clear(self) -> None:
        """Remove the stored blob entirely."""
        self.kv.remove(self.key)


class SessionHistoryStore(_RecordListStore[SessionRecord]):
    """
    Append-only log of completed workouts.

    Single writer (the active workout); readers see whatever was last saved.
    """

    key = KEY_SESSION_HISTORY

    def __init__(self, kv: KeyValueStore):
        super().__init__(kv, session_record_to_dict, dict_to_session_record)

    def append(self, record: SessionRecord) -> None:
        """
        Append a completed session.

        Args:
            record: Session to append
        """
        history = self.load()
        history.append(record)
        self._save(history)
        logger.info(f"Saved session {record.id} ({record.display_name})")

    def delete(self, record_id: str) -> bool:
        """
        Delete one session by id.

        Returns:
            True if a record was removed
        """
        history = self.load()
        remaining = [r for r in history if r.id != record_id]
        if len(remaining) == len(history):
            return False
        self._save(remaining)
        return True

    @staticmethod
    def sorted_by_date_descending(history: list[SessionRecord]) -> list[SessionRecord]:
        """Newest first, for display.  Does not touch stored data."""
        return sorted(history, key=lambda r: r.date, reverse=True)


class ConfigurationStore(_RecordListStore[SessionRecord]):
    """User-named workout presets, newest first."""

    key = KEY_SAVED_CONFIGURATIONS

    def __init__(self, kv: KeyValueStore):
        super().__init__(kv, session_record_to_dict, dict_to_session_record)

    def add(self, record: SessionRecord) -> None:
        configs = self.load()
        configs.insert(0, record)
        self._save(configs)

    def find(self, id_or_name: str) -> SessionRecord | None:
        """Look up a preset by exact id, then by case-insensitive name."""
        configs = self.load()
        for record in configs:
            if record.id == id_or_name:
                return record
        wanted = id_or_name.strip().lower()
        for record in configs:
            if record.name.lower() == wanted:
                return record
        return None

    def delete(self, record_id: str) -> bool:
        configs = self.load()
        remaining = [r for r in configs if r.id != record_id]
        if len(remaining) == len(configs):
            return False
        self._save(remaining)
        return True

    def rename(self, record_id: str, name: str) -> SessionRecord:
        """
        Rename a preset in place.

        Raises:
            KeyError: If no preset has this id
        """
        configs = self.load()
        for i, record in enumerate(configs):
            if record.id == record_id:
                configs[i] = record.renamed(name)
                self._save(configs)
                return configs[i]
        raise KeyError(record_id)


class DeletedTemplatesStore:
    """Identifiers of built-in templates the user has removed."""

    key = KEY_DELETED_TEMPLATES

    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    def load(self) -> set[str]:
        blob = self.kv.get(self.key)
        if blob is None:
            return set()
        try:
            return decode_id_set(blob)
        except ValidationError as e:
            logger.warning(f"Treating {self.key!r} as empty: {e}")
            return set()

    def mark_deleted(self, template_id: str) -> None:
        ids = self.load()
        ids.add(template_id)
        self.kv.set(self.key, encode_id_set(ids))

    def restore_all(self) -> None:
        self.kv.remove(self.key)


class IntentionsStore(_RecordListStore[IntentRecord]):
    """Log of state-of-mind answers."""

    key = KEY_INTENTIONS_HISTORY

    def __init__(self, kv: KeyValueStore):
        super().__init__(kv, intent_record_to_dict, dict_to_intent_record)

    def append(self, state: str, date: datetime | None = None) -> IntentRecord:
        """
        Record an intention.

        Raises:
            ValidationError: If the state is not a known state of mind
        """
        canonical = validate_intention(state)
        record = IntentRecord(state=canonical) if date is None else IntentRecord(state=canonical, date=date)
        intents = self.load()
        intents.append(record)
        self._save(intents)
        return record
