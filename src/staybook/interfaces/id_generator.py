"""Interface for ID generators (entity ids and booking confirmation codes)."""

import abc

# pylint: disable=too-few-public-methods


class IdGenerator(abc.ABC):
    """Contract for an ID generator.

    Generators are not required to guarantee uniqueness on their own; callers
    that need it (confirmation codes) check against the store.
    """

    @abc.abstractmethod
    def new_id(self) -> str:
        """Generate a new identifier."""
