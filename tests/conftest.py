"""
Shared fixtures for translabel tests.
"""

import re
import threading
import time
from typing import Dict, List, Mapping, Optional

import pytest
from prometheus_client import CollectorRegistry

from translabel.metrics import CacheMetrics
from translabel.provider import TranslationProvider


class CountingProvider(TranslationProvider):
    """Provider over fixed tables that records every load."""

    def __init__(self, tables: Optional[Dict[str, Optional[Mapping[str, str]]]] = None,
                 delay: float = 0.0, error: Optional[Exception] = None):
        self.tables = tables or {}
        self.delay = delay
        self.error = error
        self.calls: List[str] = []
        self._lock = threading.Lock()

    def load(self, key: str):
        with self._lock:
            self.calls.append(key)
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.tables.get(key, {})

    def count(self, key: str) -> int:
        with self._lock:
            return self.calls.count(key)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRedis:
    """In-memory stand-in for the subset of redis.Redis used by the cache."""

    def __init__(self):
        self.hashes: Dict[str, Dict[str, str]] = {}
        self.ttls: Dict[str, int] = {}
        self.commands: List[tuple] = []
        self._lock = threading.Lock()

    def hmget(self, name, keys):
        with self._lock:
            self.commands.append(("hmget", name, tuple(keys)))
            data = self.hashes.get(name, {})
            return [data.get(k) for k in keys]

    def hgetall(self, name):
        with self._lock:
            self.commands.append(("hgetall", name))
            return dict(self.hashes.get(name, {}))

    def delete(self, *names):
        with self._lock:
            self.commands.append(("delete",) + names)
            removed = 0
            for name in names:
                if self.hashes.pop(name, None) is not None:
                    removed += 1
                self.ttls.pop(name, None)
            return removed

    def hset(self, name, mapping):
        with self._lock:
            self.commands.append(("hset", name, dict(mapping)))
            self.hashes.setdefault(name, {}).update(mapping)

    def expire(self, name, seconds):
        with self._lock:
            self.commands.append(("expire", name, seconds))
            self.ttls[name] = seconds

    def scan_iter(self, match=None, count=None):
        prefix = re.sub(r"\\(.)", r"\1", match[:-1])
        with self._lock:
            names = [n for n in self.hashes if n.startswith(prefix)]
        return iter(names)

    def pipeline(self, transaction=True):
        return FakePipeline(self)

    def expire_now(self, name: str) -> None:
        """Simulate the server expiring a key."""
        with self._lock:
            self.hashes.pop(name, None)
            self.ttls.pop(name, None)


class FakePipeline:
    def __init__(self, client: FakeRedis):
        self.client = client
        self.queued = []

    def delete(self, *names):
        self.queued.append(lambda: self.client.delete(*names))

    def hset(self, name, mapping):
        self.queued.append(lambda: self.client.hset(name, mapping=mapping))

    def expire(self, name, seconds):
        self.queued.append(lambda: self.client.expire(name, seconds))

    def execute(self):
        return [command() for command in self.queued]


GENDER = {"1": "Male", "2": "Female"}
STATUS = {"1": "Active", "2": "Inactive"}


@pytest.fixture
def provider():
    """Provider with gender and status tables."""
    return CountingProvider({"gender": GENDER, "status": STATUS})


@pytest.fixture
def metrics():
    """Metrics bound to an isolated registry."""
    return CacheMetrics(registry=CollectorRegistry())


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_redis():
    return FakeRedis()
