from pathlib import Path

import pytest

from grayscale_mode.services.preference_store import PreferenceStore
from grayscale_mode.services.storage import InMemoryStorage, JsonFileStorage, StorageAccessError

from factories import CrashingStorage, FailingStorage


def test_missing_key_reads_false(store):
    assert store.read() is False


@pytest.mark.parametrize("value", ["0", "true", "on", "", " 1", "11"])
def test_non_sentinel_values_read_false(value):
    store = PreferenceStore(InMemoryStorage({"sgmUserOff": value}))
    assert store.read() is False


def test_sentinel_reads_true():
    assert PreferenceStore(InMemoryStorage({"sgmUserOff": "1"})).read() is True


def test_write_round_trip(storage, store):
    assert store.write(True) is True
    assert storage.get_item("sgmUserOff") == "1"
    assert store.read() is True
    store.write(False)
    assert storage.get_item("sgmUserOff") == "0"
    assert store.read() is False


def test_failures_are_swallowed(failing_storage):
    store = PreferenceStore(failing_storage)
    assert store.read() is False
    assert store.write(True) is False
    assert failing_storage.write_attempts == 1


def test_unexpected_exception_types_are_swallowed():
    store = PreferenceStore(CrashingStorage())
    assert store.read() is False
    assert store.write(True) is False


def test_no_storage_degrades_to_unset():
    store = PreferenceStore(None)
    assert store.read() is False
    assert store.write(True) is False


def test_json_file_storage_survives_new_instance(tmp_path: Path):
    PreferenceStore(JsonFileStorage(str(tmp_path))).write(True)
    # Simulated reload: fresh storage object over the same profile
    assert PreferenceStore(JsonFileStorage(str(tmp_path))).read() is True


def test_json_file_storage_corrupt_profile_raises_access_error(tmp_path: Path):
    storage = JsonFileStorage(str(tmp_path))
    Path(storage.path).write_text("{oops", encoding="utf-8")
    with pytest.raises(StorageAccessError):
        storage.get_item("sgmUserOff")
    assert PreferenceStore(storage).read() is False


def test_json_file_storage_remove_item(tmp_path: Path):
    storage = JsonFileStorage(str(tmp_path))
    storage.set_item("sgmUserOff", "1")
    storage.set_item("other", "x")
    storage.remove_item("sgmUserOff")
    assert storage.get_item("sgmUserOff") is None
    assert storage.get_item("other") == "x"


def test_write_failing_storage_keeps_default(write_failing_storage):
    store = PreferenceStore(write_failing_storage)
    store.write(True)
    assert store.read() is False
