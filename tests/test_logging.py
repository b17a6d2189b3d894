import asyncio
import logging

from phoneverify.core.logging import LogContext, get_logger
from phoneverify.services.code_store import InMemoryCodeStore
from phoneverify.services.sms_sender import SmsSender, SmsSendResult
from phoneverify.services.verification_service import VerificationService


class GatedSmsSender(SmsSender):
    """Holds every send until its recipient's gate is opened."""

    def __init__(self):
        self.gates = {}

    def gate(self, to_phone):
        if to_phone not in self.gates:
            self.gates[to_phone] = asyncio.Event()
        return self.gates[to_phone]

    async def send(self, to_phone, message):
        await self.gate(to_phone).wait()
        return SmsSendResult.sent("SM1")


def make_record(name="unrelated"):
    return logging.getLogRecordFactory()(name, logging.INFO, __file__, 1, "after", None, None)


def test_get_logger_does_not_double_prefix():
    assert get_logger("phoneverify.services.verification_service").name == (
        "phoneverify.services.verification_service"
    )
    assert get_logger("phoneverify").name == "phoneverify"
    assert get_logger("worker").name == "phoneverify.worker"


def test_log_context_is_removed_on_exit():
    with LogContext(phone="******3210"):
        assert make_record().phone == "******3210"

    assert not hasattr(make_record(), "phone")


def test_nested_log_context_restores_outer_fields():
    with LogContext(phone="******1111"):
        with LogContext(outcome="sent"):
            record = make_record()
            assert record.phone == "******1111"
            assert record.outcome == "sent"
        assert not hasattr(make_record(), "outcome")


def test_overlapping_requests_keep_their_own_context(caplog):
    caplog.set_level(logging.INFO, logger="phoneverify")

    async def scenario():
        sender = GatedSmsSender()
        service = VerificationService(store=InMemoryCodeStore(), sender=sender)

        first = asyncio.create_task(service.request_code("1111111111"))
        second = asyncio.create_task(service.request_code("2222222222"))
        # Let both requests reach the SMS send
        for _ in range(3):
            await asyncio.sleep(0)

        sender.gate("+911111111111").set()
        await first
        sender.gate("+912222222222").set()
        await second

    asyncio.run(scenario())

    assert not hasattr(make_record(), "phone")

    sent = [r for r in caplog.records if r.getMessage() == "Verification code sent"]
    assert sorted(r.phone for r in sent) == ["******1111", "******2222"]
    assert all(r.name == "phoneverify.services.verification_service" for r in sent)
