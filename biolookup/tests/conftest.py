"""
Pytest configuration and shared fixtures.

Provides fake lookup services and a fake clock that record the order of
lookups and waits, so batch tests never touch the network or really sleep.
"""

import os

import pytest

# Set test environment variables before imports, overriding any exported values
os.environ["BIOLOOKUP_BATCH_DELAY"] = "0"
os.environ["ENSEMBL_REST_URL"] = "https://rest.ensembl.test"
os.environ["UNIPROT_REST_URL"] = "https://rest.uniprot.test"

from biolookup.utils.errors import RecordLookupError  # noqa: E402


class EventLog:
    """Shared, ordered record of fetch and sleep calls."""

    def __init__(self):
        self.events = []

    @property
    def fetched_keys(self):
        return [value for kind, value in self.events if kind == "fetch"]

    @property
    def sleeps(self):
        return [value for kind, value in self.events if kind == "sleep"]


class FakeLookup:
    """Returns a record for every key except those in ``bad_keys``."""

    def __init__(self, log, bad_keys=()):
        self.log = log
        self.bad_keys = set(bad_keys)
        self.calls = 0

    def fetch(self, key):
        self.calls += 1
        self.log.events.append(("fetch", key))
        if key in self.bad_keys:
            raise RecordLookupError(f"no record for {key}", key=key, status_code=400)
        return {"id": key, "call": self.calls}


class FakeAsyncLookup(FakeLookup):
    async def fetch(self, key):
        return FakeLookup.fetch(self, key)


@pytest.fixture
def event_log():
    return EventLog()


@pytest.fixture
def fake_sleep(event_log):
    def _sleep(seconds):
        event_log.events.append(("sleep", seconds))
    return _sleep


@pytest.fixture
def fake_async_sleep(event_log):
    async def _sleep(seconds):
        event_log.events.append(("sleep", seconds))
    return _sleep


@pytest.fixture
def make_lookup(event_log):
    def _make(bad_keys=()):
        return FakeLookup(event_log, bad_keys)
    return _make


@pytest.fixture
def make_async_lookup(event_log):
    def _make(bad_keys=()):
        return FakeAsyncLookup(event_log, bad_keys)
    return _make
