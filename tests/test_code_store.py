from datetime import datetime, timedelta, timezone

from phoneverify.models.verification_entry import VerificationEntry
from phoneverify.services.code_store import InMemoryCodeStore

NOW = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def entry(code="482193", ttl=120):
    return VerificationEntry(code=code, expires_at=NOW + timedelta(seconds=ttl))


def test_get_missing_returns_none():
    store = InMemoryCodeStore()
    assert store.get("9876543210") is None


def test_put_then_get():
    store = InMemoryCodeStore()
    store.put("9876543210", entry())
    assert store.get("9876543210") == entry()
    assert len(store) == 1


def test_put_overwrites_existing_entry():
    store = InMemoryCodeStore()
    store.put("9876543210", entry("111111"))
    store.put("9876543210", entry("222222"))

    assert store.get("9876543210").code == "222222"
    assert len(store) == 1


def test_remove_is_idempotent():
    store = InMemoryCodeStore()
    store.put("9876543210", entry())

    store.remove("9876543210")
    store.remove("9876543210")
    store.remove("0000000000")

    assert store.get("9876543210") is None
    assert len(store) == 0


def test_get_does_not_evict_expired_entries():
    store = InMemoryCodeStore()
    store.put("9876543210", entry(ttl=-1))

    assert store.get("9876543210") is not None


def test_purge_expired_removes_only_expired():
    store = InMemoryCodeStore()
    store.put("1111111111", entry(ttl=-1))
    store.put("2222222222", entry(ttl=0))
    store.put("3333333333", entry(ttl=60))

    removed = store.purge_expired(NOW)

    assert removed == 1
    assert "1111111111" not in store
    # Expiry instant itself is still valid
    assert "2222222222" in store
    assert "3333333333" in store


def test_entry_expiry_boundary():
    e = entry(ttl=120)
    assert not e.is_expired(NOW + timedelta(seconds=120))
    assert e.is_expired(NOW + timedelta(seconds=120, milliseconds=1))
