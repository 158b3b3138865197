# tests/conftest.py
from datetime import datetime, timedelta

import pytest

from paydesk import create_app
from paydesk.config import TestingConfig
from paydesk.services.storage_service import MemStorage


class FakeClock:
    """Deterministic stand-in for ``datetime.now``."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **delta) -> datetime:
        self.current = self.current + timedelta(**delta)
        return self.current


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 10, 15, 9, 30))


@pytest.fixture
def storage(clock):
    return MemStorage(clock=clock)


@pytest.fixture
def app(storage):
    return create_app(TestingConfig, storage=storage)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_payment(storage):
    def _make(developer="Ada", amount="75.00", **kw):
        return storage.create_payment(developer, amount, **kw)
    return _make
