# Shared fixtures for the grayscale mode test-suite.

import pytest

from grayscale_mode.services.preference_store import PreferenceStore
from grayscale_mode.services.storage import InMemoryStorage

from factories import FailingStorage


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def store(storage):
    return PreferenceStore(storage)


@pytest.fixture
def failing_storage():
    return FailingStorage()


@pytest.fixture
def write_failing_storage():
    # Reads succeed (and see nothing), writes always fail
    return FailingStorage(fail_reads=False, fail_writes=True)
