"""Interfaces (application boundary) for twotrack.

Defines framework-free application contracts: repository ABCs per entity type
and the ID generator. Business rules stay out of this package.

Dependency rule: may import `twotrack.domain` types for signatures only. It may
be imported by `twotrack.service_layer`, `twotrack.adapters`, and
`twotrack.bootstrap`.
"""
