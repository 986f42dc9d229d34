"""Interface for generating entity identifiers."""

import abc

# pylint: disable=too-few-public-methods


class IdGenerator(abc.ABC):
    """Contract for an ID generator.

    Services ask for a new id whenever they create an entity; ids must be
    unique for the lifetime of the store.
    """

    @abc.abstractmethod
    def new_id(self) -> str:
        """Return a fresh, never-before-issued identifier."""
