"""Tests for the persisted measurement history."""

import json

import pytest
from unittest.mock import Mock

from freefall_app.errors import HistoryIndexError, MalformedDataError, PersistenceError
from freefall_app.persistence.history_store import (
    DEFAULT_SLOT_KEY, HistoryStore, decode_history, encode_history
)
from freefall_app.persistence.storage import MemoryStorage, SqliteStorage
from freefall_app.state.models import Measurement


OVERFLOWING_DEPTH = '[{"depth": 1' + "0" * 400 + ', "elapsedTime": 1.0, "name": "x"}]'
TOO_MANY_DIGITS = '[{"depth": ' + "1" * 5000 + ', "elapsedTime": 1.0, "name": "x"}]'
DEEPLY_NESTED = "[" * 100000


def stored(storage, key=DEFAULT_SLOT_KEY):
    return json.loads(storage.get_item(key))


@pytest.fixture
def three():
    return [
        Measurement(depth=4.9, elapsed_time=1.0),
        Measurement(depth=19.6, elapsed_time=2.0, name="Well"),
        Measurement(depth=44.1, elapsed_time=3.0, name="Cliff"),
    ]


@pytest.fixture
def filled(memory_storage, three):
    store = HistoryStore(memory_storage)
    for measurement in three:
        store.append(measurement)
    return store


class TestCodec:
    """Test history encoding and decoding."""

    def test_encode_wire_form(self, three):
        assert json.loads(encode_history(three[:1])) == [
            {"depth": 4.9, "elapsedTime": 1.0, "name": "Measurement"}
        ]

    def test_encode_empty(self):
        assert encode_history([]) == "[]"

    def test_decode(self, sample_history_payload):
        entries = decode_history(sample_history_payload)
        assert entries == [
            Measurement(depth=19.6, elapsed_time=2.0, name="Well"),
            Measurement(depth=4.9, elapsed_time=1.0, name="Measurement"),
        ]

    def test_decode_invalid_json(self):
        with pytest.raises(MalformedDataError) as exc_info:
            decode_history("{not json")
        assert exc_info.value.raw_data == "{not json"

    @pytest.mark.parametrize("payload", [
        '{"depth": 1}',
        '"text"',
        'null',
        '[1, 2]',
        '[{"depth": 1.0, "elapsedTime": 1.0}]',
        '[{"depth": "1", "elapsedTime": 1.0, "name": "x"}]',
        '[{"depth": 1.0, "elapsedTime": null, "name": "x"}]',
        '[{"depth": true, "elapsedTime": 1.0, "name": "x"}]',
        '[{"depth": -1.0, "elapsedTime": 1.0, "name": "x"}]',
        '[{"depth": 1.0, "elapsedTime": 1.0, "name": 5}]',
        '[{"depth": NaN, "elapsedTime": 1.0, "name": "x"}]',
        '[{"depth": 1.0, "elapsedTime": Infinity, "name": "x"}]',
        pytest.param(OVERFLOWING_DEPTH, id="overflowing-depth"),
        pytest.param(TOO_MANY_DIGITS, id="too-many-digits"),
        pytest.param(DEEPLY_NESTED, id="deeply-nested"),
    ])
    def test_decode_wrong_shape(self, payload):
        with pytest.raises(MalformedDataError):
            decode_history(payload)

    def test_decode_rejects_whole_payload_for_one_bad_item(self):
        payload = '[{"depth": 4.9, "elapsedTime": 1.0, "name": "ok"}, {"depth": 1}]'
        with pytest.raises(MalformedDataError) as exc_info:
            decode_history(payload)
        assert exc_info.value.context == {"position": 1}


class TestHistoryStoreLoad:
    """Test loading history at startup."""

    def test_empty_slot_loads_empty(self, memory_storage):
        store = HistoryStore(memory_storage)
        assert store.load() == ()
        assert len(store) == 0

    def test_loads_stored_payload(self, sample_history_payload):
        storage = MemoryStorage({DEFAULT_SLOT_KEY: sample_history_payload})
        store = HistoryStore(storage)

        entries = store.load()

        assert len(entries) == 2
        assert entries[0].name == "Well"
        assert store.entries == entries

    @pytest.mark.parametrize("payload", [
        "", "garbage", "{}", '[{"depth": 1}]',
        pytest.param(OVERFLOWING_DEPTH, id="overflowing-depth"),
        pytest.param(TOO_MANY_DIGITS, id="too-many-digits"),
        pytest.param(DEEPLY_NESTED, id="deeply-nested"),
    ])
    def test_malformed_payload_loads_empty(self, payload):
        store = HistoryStore(MemoryStorage({DEFAULT_SLOT_KEY: payload}))
        assert store.load() == ()

    def test_load_replaces_in_memory_list(self, filled, memory_storage):
        memory_storage.set_item(DEFAULT_SLOT_KEY, "[]")
        assert filled.load() == ()

    def test_unreadable_storage_loads_empty(self):
        storage = Mock()
        storage.get_item.side_effect = PersistenceError("disk gone", operation="get")
        store = HistoryStore(storage)

        assert store.load() == ()

    def test_custom_slot_key(self, memory_storage, sample_history_payload):
        memory_storage.set_item("other", sample_history_payload)
        assert HistoryStore(memory_storage).load() == ()
        assert len(HistoryStore(memory_storage, slot_key="other").load()) == 2


class TestHistoryStoreAppend:
    """Test appending completed measurements."""

    def test_append_adds_to_end_and_persists(self, memory_storage):
        store = HistoryStore(memory_storage)
        store.append(Measurement(depth=4.9, elapsed_time=1.0))
        store.append(Measurement(depth=19.6, elapsed_time=2.0))

        assert [m.elapsed_time for m in store] == [1.0, 2.0]
        assert stored(memory_storage) == [
            {"depth": 4.9, "elapsedTime": 1.0, "name": "Measurement"},
            {"depth": 19.6, "elapsedTime": 2.0, "name": "Measurement"},
        ]

    def test_failed_write_leaves_list_unchanged(self, filled, three):
        filled.storage = Mock()
        filled.storage.set_item.side_effect = PersistenceError("full", operation="set")

        with pytest.raises(PersistenceError):
            filled.append(Measurement(depth=1.0, elapsed_time=0.45))

        assert list(filled.entries) == three

    def test_entries_snapshot_is_read_only(self, filled):
        snapshot = filled.entries
        assert isinstance(snapshot, tuple)
        filled.append(Measurement(depth=1.0, elapsed_time=0.45))
        assert len(snapshot) == 3
        assert len(filled) == 4


class TestHistoryStoreRename:
    """Test renaming entries."""

    def test_rename_changes_only_name(self, filled, memory_storage):
        before = filled[1]

        filled.rename(1, "X")

        after = filled[1]
        assert after.name == "X"
        assert after.depth == before.depth
        assert after.elapsed_time == before.elapsed_time
        assert stored(memory_storage)[1]["name"] == "X"

    def test_rename_leaves_other_entries(self, filled, three):
        filled.rename(0, "First")
        assert filled[1] == three[1]
        assert filled[2] == three[2]

    def test_rename_to_empty_string(self, filled):
        filled.rename(0, "")
        assert filled[0].name == ""

    @pytest.mark.parametrize("index", [3, 10, -1])
    def test_rename_out_of_range(self, filled, memory_storage, index):
        before = memory_storage.get_item(DEFAULT_SLOT_KEY)

        with pytest.raises(HistoryIndexError) as exc_info:
            filled.rename(index, "X")

        assert isinstance(exc_info.value, IndexError)
        assert exc_info.value.length == 3
        assert memory_storage.get_item(DEFAULT_SLOT_KEY) == before


class TestHistoryStoreDelete:
    """Test deleting entries."""

    def test_delete_shifts_later_entries(self, filled, three, memory_storage):
        removed = filled.delete(1)

        assert removed == three[1]
        assert len(filled) == 2
        assert filled.entries == (three[0], three[2])
        assert [item["name"] for item in stored(memory_storage)] == ["Measurement", "Cliff"]

    def test_delete_last_remaining(self, memory_storage):
        store = HistoryStore(memory_storage)
        store.append(Measurement(depth=4.9, elapsed_time=1.0))

        store.delete(0)

        assert store.entries == ()
        assert stored(memory_storage) == []

    @pytest.mark.parametrize("index", [3, -1])
    def test_delete_out_of_range(self, filled, index):
        with pytest.raises(HistoryIndexError):
            filled.delete(index)
        assert len(filled) == 3

    def test_getitem_out_of_range(self, filled):
        with pytest.raises(IndexError):
            filled[5]


class TestHistoryRoundTrip:
    """A fresh store reading the same slot reproduces the prior session's list."""

    def test_round_trip_memory(self, memory_storage, three):
        first = HistoryStore(memory_storage)
        for measurement in three:
            first.append(measurement)
        first.rename(2, "Renamed")
        first.delete(0)
        first.append(Measurement(depth=1.225, elapsed_time=0.5))

        second = HistoryStore(memory_storage)
        assert second.load() == first.entries

    def test_round_trip_sqlite(self, db_path, three):
        first = HistoryStore(SqliteStorage(db_path))
        for measurement in three:
            first.append(measurement)
        first.rename(0, "Renamed")
        first.delete(1)

        second = HistoryStore(SqliteStorage(db_path))
        assert second.load() == first.entries
        assert second[0].name == "Renamed"
