"""Domain layer for twotrack.

Contains business rules: error values and result containers, the exception
hierarchy, value objects and entities. This package is deliberately
technology-agnostic.

Dependency rule: do not import from `twotrack.adapters` or `twotrack.entrypoints`.
"""
