"""
Admin access: one hardcoded username/password pair mints API keys; holding any issued key
authorizes drop-table edits.

Keys never expire and are never revoked. The KeySet only grows and is persisted after
every successful login.
"""
import hmac
import logging
import threading
import uuid

from contraband.core.constants import KEY_LOG_PREFIX, KIND_KEYS
from contraband.core.errors import StorageFailure, Unauthorized
from contraband.services.store import SnapshotStore

logger = logging.getLogger(__name__)


def _same(a: str, b: str) -> bool:
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


class AccessGate:
    """Issues and checks admin API keys against an injected snapshot store."""

    def __init__(self, store: SnapshotStore, *, username: str, password: str) -> None:
        self._store = store
        self._username = username
        self._password = password
        self._lock = threading.Lock()
        keys = store.load(KIND_KEYS).get("keys") or []
        if not isinstance(keys, list):
            raise StorageFailure("Unable to read keys")
        self._keys: list[str] = [k for k in keys if isinstance(k, str)]

    @property
    def issued_count(self) -> int:
        return len(self._keys)

    def credentials_match(self, username: str | None, password: str | None) -> bool:
        # Evaluate both comparisons so timing doesn't reveal which field was wrong
        user_ok = _same(username or "", self._username)
        pass_ok = _same(password or "", self._password)
        return user_ok and pass_ok

    def issue_key(self, username: str | None, password: str | None) -> str:
        """
        Mint a fresh key for matching credentials and persist the KeySet.
        Raises Unauthorized on bad credentials, StorageFailure if the KeySet can't be saved
        (the key is then not issued).
        """
        if not self.credentials_match(username, password):
            logger.warning("Admin login rejected for username=%r", username)
            raise Unauthorized("Invalid credentials")
        with self._lock:
            api_key = str(uuid.uuid4())
            while api_key in self._keys:
                api_key = str(uuid.uuid4())
            keys = [*self._keys, api_key]
            self._store.save(KIND_KEYS, {"keys": keys})
            self._keys = keys
        logger.info("Issued admin API key %s... (%s total)", api_key[:KEY_LOG_PREFIX], len(keys))
        return api_key

    def is_issued(self, api_key: str | None) -> bool:
        return isinstance(api_key, str) and bool(api_key) and api_key in self._keys

    def authorize(self, api_key: str | None) -> None:
        """Raise Unauthorized unless api_key is an exact member of the KeySet."""
        if not self.is_issued(api_key):
            if isinstance(api_key, str) and api_key:
                logger.warning("Rejected unknown API key %s...", api_key[:KEY_LOG_PREFIX])
            elif api_key is not None:
                logger.warning("Rejected non-string API key of type %s", type(api_key).__name__)
            raise Unauthorized("Missing or invalid API key")
