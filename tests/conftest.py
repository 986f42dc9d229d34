"""Global pytest fixtures for twotrack."""

pytest_plugins = [
    "tests.fixtures.domain",
]
