# ethsignin/nonce_store.py

import logging
import threading
from typing import Dict

from .exceptions import NonceNotFound

logger = logging.getLogger(__name__)


def normalize_address(address: str) -> str:
    """Addresses are compared case-insensitively, so keys are stored lowercased."""
    return address.strip().lower()


class NonceStore:
    """
    In-memory store holding at most one outstanding nonce per address.

    Every operation takes the same lock for the duration of the dict access
    only, so calls from concurrent request threads are linearizable.
    WARNING: Contents are lost on server restart.
    """

    def __init__(self):
        self._nonces: Dict[str, str] = {}
        self._lock = threading.Lock()

    def set(self, address: str, nonce: str) -> None:
        """Store a nonce for the address, replacing any previous one."""
        key = normalize_address(address)
        with self._lock:
            replaced = self._nonces.get(key)
            self._nonces[key] = nonce
        if replaced is not None:
            logger.debug(f"Replaced outstanding nonce for {key}")

    def get(self, address: str) -> str:
        """Return the outstanding nonce for the address or raise NonceNotFound."""
        key = normalize_address(address)
        with self._lock:
            nonce = self._nonces.get(key)
        if nonce is None:
            raise NonceNotFound(f"no outstanding nonce for address {address}")
        return nonce

    def remove(self, address: str, nonce: str | None = None) -> bool:
        """
        Delete the entry for the address. Missing entries are not an error.

        If `nonce` is given, the entry is only deleted while it still holds
        that value. Returns True if something was deleted.
        """
        key = normalize_address(address)
        with self._lock:
            current = self._nonces.get(key)
            if current is None or (nonce is not None and current != nonce):
                return False
            del self._nonces[key]
        return True

    def __contains__(self, address: str) -> bool:
        key = normalize_address(address)
        with self._lock:
            return key in self._nonces

    def __len__(self) -> int:
        with self._lock:
            return len(self._nonces)


# Process-wide store shared by all request handlers
nonce_store = NonceStore()


def get_nonce_store() -> NonceStore:
    """FastAPI dependency returning the shared store."""
    return nonce_store
