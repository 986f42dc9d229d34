"""ID generators for twotrack entities."""

import itertools
import threading
import uuid

from ulid import monotonic

from twotrack.interfaces.id_generator import IdGenerator

# pylint: disable=too-few-public-methods


class ULIDGenerator(IdGenerator):
    """Thread-safe monotonic ULID generator.

    ULIDs sort by creation time, so orders created later list later.
    This generator uses the `ulid-py` library.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def new_id(self) -> str:
        with self._lock:
            return str(monotonic.new())


class UUIDv4Generator(IdGenerator):
    """Random UUIDv4 identifiers, as produced by the standard `uuid` module."""

    def new_id(self) -> str:
        return str(uuid.uuid4())


class SimpleIdGenerator(IdGenerator):
    """Sequential, human-readable ids such as ``order-0001``.

    Note:
        Not suitable for production use; primarily for tests and demos, where
        predictable ids make output easy to compare.
    """

    def __init__(self, prefix: str = "id", width: int = 4) -> None:
        self._counter = itertools.count(1)
        self._prefix = prefix
        self._width = width
        self._lock = threading.Lock()

    def new_id(self) -> str:
        with self._lock:
            number = next(self._counter)
        return f"{self._prefix}-{number:0{self._width}d}"


GENERATORS: dict[str, type[IdGenerator]] = {
    "ulid": ULIDGenerator,
    "uuid4": UUIDv4Generator,
    "simple": SimpleIdGenerator,
}
