"""Entrypoints (inbound adapters) for twotrack.

Expose the application to the outside world: the CLI and the Problem Details
mapping a web boundary would use. Parse inputs, call the services, and present
results.

Dependency rule: may import `twotrack.service_layer`; avoid importing
`twotrack.adapters` directly.
"""
