"""Base class for all entities."""

import abc
from datetime import UTC, datetime
from enum import Enum
from typing import ClassVar

from twotrack.domain.errors import raise_for_failure
from twotrack.domain.results import ConcurrencyConflict, InvalidStateTransition, Result


class Entity(abc.ABC):
    """Generic base class for all entities."""

    ENTITY_TYPE: ClassVar[str]
    """A string identifier for the entity type.

    Used in error metadata and messages. Concrete entities must set this.
    """

    def __init__(self, entity_id: str) -> None:
        self.id: str = entity_id
        self.created_at: datetime = datetime.now(UTC)
        self._version: int = 0

    # --- Optimistic concurrency ---

    def update_version(self, expected_version: int) -> None:
        """Advance the version, raising if `expected_version` is stale.

        Raises:
            OptimisticLockError: If `expected_version` differs from the current version.
        """
        raise_for_failure(self.try_update_version(expected_version))

    def try_update_version(self, expected_version: int) -> Result:
        """Advance the version, or return a concurrency-conflict failure."""
        if expected_version != self._version:
            return Result.failure(
                ConcurrencyConflict(
                    self.ENTITY_TYPE, self.id, expected_version, self._version
                )
            )
        self._bump_version()
        return Result.success()

    # --- Plumbing ---

    def _bump_version(self) -> None:
        self._version += 1

    def _transition(
        self, from_state: Enum | str, to_state: Enum | str
    ) -> InvalidStateTransition:
        return InvalidStateTransition(
            _state_name(from_state), _state_name(to_state), self.ENTITY_TYPE
        )

    @property
    def version(self) -> int:
        """The current version of the entity."""
        return self._version

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, version={self._version})"


def _state_name(state: Enum | str) -> str:
    return state.value if isinstance(state, Enum) else state
