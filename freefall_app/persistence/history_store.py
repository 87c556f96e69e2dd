"""Measurement history persisted as a single JSON slot in key-value storage."""

import json
import math
from collections.abc import Iterator, Sequence
from typing import Any

import structlog

from ..errors import HistoryIndexError, MalformedDataError, PersistenceError
from ..state.models import Measurement
from .storage import KeyValueStorage

logger = structlog.get_logger(__name__)

DEFAULT_SLOT_KEY = "measurementHistory"

EXPECTED_FORMAT = 'JSON array of {"depth": number, "elapsedTime": number, "name": string}'


def encode_history(entries: Sequence[Measurement]) -> str:
    """Serialize the full history to its persisted JSON form."""
    return json.dumps([entry.to_dict() for entry in entries])


def _is_quantity(value: Any) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        number = float(value)
    except OverflowError:
        return False
    return math.isfinite(number) and number >= 0


def decode_history(raw: str) -> list[Measurement]:
    """
    Parse a persisted history payload.

    The payload is accepted or rejected as a whole.

    Raises:
        MalformedDataError: If the payload is not valid JSON or any item
            does not have the measurement shape
    """
    # JSONDecodeError is a ValueError, as is an integer literal past the digit limit
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError, TypeError) as e:
        raise MalformedDataError(
            f"History payload is not valid JSON: {e}",
            raw_data=raw,
            expected_format=EXPECTED_FORMAT
        ) from e

    if not isinstance(data, list):
        raise MalformedDataError(
            f"History payload must be an array, got {type(data).__name__}",
            raw_data=raw,
            expected_format=EXPECTED_FORMAT
        )

    entries = []
    for position, item in enumerate(data):
        if not (
            isinstance(item, dict)
            and _is_quantity(item.get("depth"))
            and _is_quantity(item.get("elapsedTime"))
            and isinstance(item.get("name"), str)
        ):
            raise MalformedDataError(
                f"History item {position} has the wrong shape",
                raw_data=raw,
                expected_format=EXPECTED_FORMAT,
                context={"position": position}
            )
        entries.append(Measurement.from_dict(item))

    return entries


class HistoryStore:
    """
    Ordered history of completed measurements.

    The store exclusively owns the list. Readers get tuple snapshots; every
    mutation writes the whole list to storage before it takes effect in
    memory, so storage and memory agree once a mutator returns.
    """

    def __init__(self, storage: KeyValueStorage, slot_key: str = DEFAULT_SLOT_KEY):
        self.storage = storage
        self.slot_key = slot_key
        self.logger = logger.bind(slot_key=slot_key)
        self._entries: list[Measurement] = []

    @property
    def entries(self) -> tuple[Measurement, ...]:
        """Read-only snapshot in chronological order."""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> Measurement:
        return self._entries[self._check_index(index, "get")]

    def __iter__(self) -> Iterator[Measurement]:
        return iter(self.entries)

    def load(self) -> tuple[Measurement, ...]:
        """
        Replace the in-memory history with whatever storage holds.

        Absent, unreadable or malformed data yields an empty history.
        """
        try:
            raw = self.storage.get_item(self.slot_key)
        except PersistenceError as e:
            self.logger.warning("History storage unreadable, starting empty", error=str(e))
            raw = None

        if raw is None:
            self._entries = []
            self.logger.info("No stored history")
            return self.entries

        try:
            self._entries = decode_history(raw)
        except MalformedDataError as e:
            self.logger.warning("Discarded malformed history", error=str(e), **e.context)
            self._entries = []
            return self.entries

        self.logger.info("History loaded", count=len(self._entries))
        return self.entries

    def append(self, measurement: Measurement) -> None:
        """Add a completed measurement to the end of the history."""
        self._commit(self._entries + [measurement])
        self.logger.info(
            "Measurement appended",
            index=len(self._entries) - 1,
            depth=measurement.depth,
            elapsed_time=measurement.elapsed_time
        )

    def rename(self, index: int, new_name: str) -> None:
        """Replace the name of the measurement at ``index``."""
        index = self._check_index(index, "rename")

        updated = list(self._entries)
        updated[index] = updated[index].with_name(new_name)
        self._commit(updated)
        self.logger.info("Measurement renamed", index=index, name=new_name)

    def delete(self, index: int) -> Measurement:
        """Remove the measurement at ``index``; later entries shift down by one."""
        index = self._check_index(index, "delete")

        updated = list(self._entries)
        removed = updated.pop(index)
        self._commit(updated)
        self.logger.info("Measurement deleted", index=index, remaining=len(updated))
        return removed

    def _commit(self, updated: list[Measurement]) -> None:
        self.storage.set_item(self.slot_key, encode_history(updated))
        self._entries = updated

    def _check_index(self, index: int, operation: str) -> int:
        length = len(self._entries)
        if not 0 <= index < length:
            raise HistoryIndexError(
                f"Cannot {operation} history entry {index}: history has {length} entries",
                index=index,
                length=length
            )
        return index
