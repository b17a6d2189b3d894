from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from phoneverify.main import app
from phoneverify.services.code_store import InMemoryCodeStore
from phoneverify.services.sms_sender import SmsSender, SmsSendResult
from phoneverify.services.verification_service import VerificationService, get_verification_service


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start=None):
        self.now = start or datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += timedelta(seconds=seconds)


class FakeSmsSender(SmsSender):
    """Records messages and returns a preset result."""

    def __init__(self, result=None):
        self.sent = []
        self.result = result or SmsSendResult.sent("SM123", "queued")

    async def send(self, to_phone, message):
        self.sent.append((to_phone, message))
        return self.result


class SequenceCodes:
    """Hands out predetermined codes in order."""

    def __init__(self, *codes):
        self._codes = list(codes)

    def __call__(self):
        return self._codes.pop(0)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sender():
    return FakeSmsSender()


@pytest.fixture
def store():
    return InMemoryCodeStore()


@pytest.fixture
def service(store, sender, clock):
    return VerificationService(
        store=store,
        sender=sender,
        ttl_seconds=120,
        country_code="+91",
        clock=clock,
        code_generator=SequenceCodes("482193", "111111", "222222")
    )


@pytest.fixture
def client(service):
    app.dependency_overrides[get_verification_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
