"""Service layer for twotrack.

Implements the order use-cases twice, once per error-handling discipline.
Calls domain objects and the repository ports from `twotrack.interfaces`.

Dependency rule: may import `twotrack.domain` and `twotrack.interfaces`, but
not `twotrack.adapters` or `twotrack.entrypoints`.
"""
