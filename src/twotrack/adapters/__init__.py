"""Adapters (infrastructure) for twotrack.

Provide concrete implementations of the interfaces: in-memory repositories,
demo seed data and ID generators.

Dependency rule: may import `twotrack.domain`; the domain must not import this
package.
"""
