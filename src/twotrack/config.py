"""Configuration utilities for twotrack.

This module centralizes small helpers and constants related to application
configuration. Every setting is read from the environment; invalid values are
rejected with `InvalidConfigurationError` rather than silently replaced.
"""

import os
from dataclasses import dataclass

from twotrack.domain.errors import DEFAULT_PROBLEM_TYPE_BASE
from twotrack.domain.value_objects import DEFAULT_CURRENCY, VALID_CURRENCY_CODES

CURRENCY_ENV = "TWOTRACK_DEFAULT_CURRENCY"  # pragma: no mutate
ID_GENERATOR_ENV = "TWOTRACK_ID_GENERATOR"  # pragma: no mutate
PROBLEM_TYPE_BASE_ENV = "TWOTRACK_PROBLEM_TYPE_BASE"  # pragma: no mutate
SEED_DEMO_DATA_ENV = "TWOTRACK_SEED_DEMO_DATA"  # pragma: no mutate

ID_GENERATOR_NAMES = ("ulid", "uuid4", "simple")
DEFAULT_ID_GENERATOR = "uuid4"

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


class InvalidConfigurationError(Exception):
    """Raised when an environment variable holds an unusable value."""

    def __init__(self, name: str, value: str, expected: str) -> None:
        super().__init__(f"Invalid value {value!r} for {name}; expected {expected}.")
        self.name = name
        self.value = value
        self.expected = expected


def get_default_currency() -> str:
    """Get the currency new orders are priced in.

    Returns:
        The upper-cased value of `TWOTRACK_DEFAULT_CURRENCY`, or `USD` if unset.

    Raises:
        InvalidConfigurationError: If the currency is not a supported ISO 4217 code.
    """
    value = os.environ.get(CURRENCY_ENV, "").strip() or DEFAULT_CURRENCY
    if value.upper() not in VALID_CURRENCY_CODES:
        raise InvalidConfigurationError(CURRENCY_ENV, value, "an ISO 4217 currency code")
    return value.upper()


def get_id_generator_name() -> str:
    """Get the name of the ID generator to wire (`ulid`, `uuid4` or `simple`)."""
    value = os.environ.get(ID_GENERATOR_ENV, "").strip().lower() or DEFAULT_ID_GENERATOR
    if value not in ID_GENERATOR_NAMES:
        raise InvalidConfigurationError(
            ID_GENERATOR_ENV, value, "one of " + ", ".join(ID_GENERATOR_NAMES)
        )
    return value


def get_problem_type_base() -> str:
    """Get the base URI that Problem Details `type` members are built on."""
    value = os.environ.get(PROBLEM_TYPE_BASE_ENV, "").strip() or DEFAULT_PROBLEM_TYPE_BASE
    if not value.startswith(("http://", "https://")):
        raise InvalidConfigurationError(PROBLEM_TYPE_BASE_ENV, value, "an http(s) URI")
    return value.rstrip("/")


def get_seed_demo_data() -> bool:
    """Whether a fresh store should be filled with the demo customer and products."""
    value = os.environ.get(SEED_DEMO_DATA_ENV, "").strip().lower()
    if not value or value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise InvalidConfigurationError(SEED_DEMO_DATA_ENV, value, "a boolean flag")


@dataclass(frozen=True)
class Settings:
    """Snapshot of every setting, read once at start-up."""

    default_currency: str = DEFAULT_CURRENCY
    id_generator: str = DEFAULT_ID_GENERATOR
    problem_type_base: str = DEFAULT_PROBLEM_TYPE_BASE
    seed_demo_data: bool = True


def load_settings() -> Settings:
    """Read all settings from the environment.

    Raises:
        InvalidConfigurationError: If any variable holds an invalid value.
    """
    return Settings(
        default_currency=get_default_currency(),
        id_generator=get_id_generator_name(),
        problem_type_base=get_problem_type_base(),
        seed_demo_data=get_seed_demo_data(),
    )
