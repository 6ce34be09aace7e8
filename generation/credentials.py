"""Round-robin API key pool"""

import threading
from typing import Iterable, List

from generation.exceptions import ConfigurationError


class CredentialRotator:
    """
    Hands out API keys in round-robin order.

    The index advances on every call whether or not the key worked, so
    consecutive requests spread across the pool. Shared by every client built
    on it; concurrent callers each get a distinct position but the order they
    see is interleaved.
    """

    def __init__(self, keys: Iterable[str]):
        self._keys: List[str] = [key.strip() for key in keys if key and key.strip()]
        if not self._keys:
            raise ConfigurationError("No Gemini API keys found! Set GEMINI_API_KEYS in your environment.")
        self._index = 0
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._keys)

    def next_key(self) -> str:
        with self._lock:
            key = self._keys[self._index]
            self._index = (self._index + 1) % len(self._keys)
            return key
