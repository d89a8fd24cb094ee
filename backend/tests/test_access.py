import pytest

from contraband.core.errors import StorageFailure, Unauthorized
from contraband.services.access import AccessGate
from contraband.services.store import MemoryStore
from tests.helpers import ADMIN_PASS, ADMIN_USER


class FailingSaveStore(MemoryStore):
    def save(self, kind, snapshot):
        raise StorageFailure("disk full")


def test_login_mints_unique_persisted_keys(gate, store) -> None:
    keys = [gate.issue_key(ADMIN_USER, ADMIN_PASS) for _ in range(25)]

    assert len(set(keys)) == 25
    assert store.load("keys") == {"keys": keys}
    assert gate.issued_count == 25
    for key in keys:
        gate.authorize(key)


@pytest.mark.parametrize(
    "username,password",
    [("admin", "wrong"), ("root", "quakerfm"), ("", ""), (None, None), ("ADMIN", "quakerfm"), ("admin", "quakerfm ")],
)
def test_bad_credentials_issue_nothing(gate, store, username, password) -> None:
    with pytest.raises(Unauthorized):
        gate.issue_key(username, password)
    assert store.load("keys") == {"keys": []}


@pytest.mark.parametrize("key", [None, "", "not-a-key"])
def test_authorize_rejects_unknown_keys(gate, key) -> None:
    gate.issue_key(ADMIN_USER, ADMIN_PASS)
    with pytest.raises(Unauthorized):
        gate.authorize(key)
    assert not gate.is_issued(key)


def test_keys_survive_restart(store) -> None:
    key = AccessGate(store, username=ADMIN_USER, password=ADMIN_PASS).issue_key(ADMIN_USER, ADMIN_PASS)
    restarted = AccessGate(store, username=ADMIN_USER, password=ADMIN_PASS)
    restarted.authorize(key)
    assert restarted.issue_key(ADMIN_USER, ADMIN_PASS) != key


def test_key_not_issued_when_keyset_cannot_be_saved() -> None:
    gate = AccessGate(FailingSaveStore(), username=ADMIN_USER, password=ADMIN_PASS)
    with pytest.raises(StorageFailure):
        gate.issue_key(ADMIN_USER, ADMIN_PASS)
    assert gate.issued_count == 0


def test_corrupt_keyset_fails_loudly() -> None:
    with pytest.raises(StorageFailure):
        AccessGate(MemoryStore({"keys": {"keys": "abc"}}), username=ADMIN_USER, password=ADMIN_PASS)


@pytest.mark.parametrize("key", [12345, {"k": "v"}, ["k"]])
def test_authorize_rejects_non_string_keys(gate, key) -> None:
    gate.issue_key(ADMIN_USER, ADMIN_PASS)
    assert not gate.is_issued(key)
    with pytest.raises(Unauthorized):
        gate.authorize(key)
