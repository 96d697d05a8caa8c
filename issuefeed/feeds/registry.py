"""Opaque feed tokens mapped to registration indices.

Tokens are hashids of the index, keyed by a salt: cheap, stable for the
process lifetime and not obviously sequential, but not a secret.
"""

import logging
import threading
from typing import Generic, List, Tuple, TypeVar

from hashids import Hashids

from issuefeed.errors import InvalidTokenError

LOG = logging.getLogger("issuefeed.feeds.registry")

T = TypeVar("T")

__all__ = ["FeedRegistry", "InvalidTokenError"]


class FeedRegistry(Generic[T]):
    """Append-only list of values addressed by hashids tokens."""

    def __init__(self, salt: str, min_length: int = 8) -> None:
        self._hashids = Hashids(salt=salt, min_length=min_length)
        self._values: List[T] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)

    def encode(self, index: int) -> str:
        if index < 0:
            raise ValueError(f"index must be >= 0, got {index}")
        return self._hashids.encode(index)

    def decode(self, token: str) -> int:
        """Decode a token to its index; raise InvalidTokenError unless it is exactly one integer."""
        if not token:
            raise InvalidTokenError()
        try:
            numbers = self._hashids.decode(token)
        except (ValueError, TypeError) as e:
            raise InvalidTokenError() from e
        if len(numbers) != 1:
            raise InvalidTokenError()
        # Reject alternative spellings that decode but are not what encode produces
        if self._hashids.encode(numbers[0]) != token:
            raise InvalidTokenError()
        return numbers[0]

    def register(self, value: T) -> str:
        """Append value and return its token."""
        with self._lock:
            token = self.encode(len(self._values))
            self._values.append(value)
        return token

    def resolve(self, token: str) -> T:
        index = self.decode(token)
        with self._lock:
            if index >= len(self._values):
                LOG.debug("Token %s decodes to unregistered index %s", token, index)
                raise InvalidTokenError()
            return self._values[index]

    def items(self) -> List[Tuple[str, T]]:
        """(token, value) pairs in registration order."""
        with self._lock:
            values = list(self._values)
        return [(self.encode(i), v) for i, v in enumerate(values)]
