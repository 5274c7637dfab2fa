"""ID generators for STAYBOOK."""

import secrets
import threading

from ulid import monotonic

from staybook import config
from staybook.interfaces.id_generator import IdGenerator

# pylint: disable=too-few-public-methods


class ULIDGenerator(IdGenerator):
    """Thread-safe monotonic ULID generator.

    ULIDs are unique, lexicographically sortable identifiers made of a
    timestamp and a random component. Used for entity ids.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def new_id(self) -> str:
        """Generate a new ULID (serialized across threads)."""
        with self._lock:
            return str(monotonic.new())


class ConfirmationCodeGenerator(IdGenerator):
    """Unpredictable booking confirmation codes.

    Codes are drawn from a CSPRNG (``secrets``) over an upper-case
    alphanumeric alphabet; 10 characters give 36**10 (~3.6e15) codes.
    """

    def __init__(
        self,
        length: int = config.CONFIRMATION_CODE_LENGTH,
        alphabet: str = config.CONFIRMATION_CODE_ALPHABET,
    ) -> None:
        if length < 1:
            raise ValueError("length must be positive")
        self._length = length
        self._alphabet = alphabet

    def new_id(self) -> str:
        """Generate a new confirmation code."""
        return "".join(secrets.choice(self._alphabet) for _ in range(self._length))

