"""Bootstrap (composition root) for twotrack.

Assembles the application at runtime: wires the in-memory repositories and an
ID generator into both order services, reads configuration, and optionally
seeds demo data.

Import rules:
- Entry points import *this* package (not adapters directly).
- This package may import: `twotrack.adapters`, `twotrack.service_layer`,
  `twotrack.interfaces`, `twotrack.domain`, and `twotrack.config`.
- Inner layers must not import `twotrack.bootstrap`.

No business rules live here; this is assembly only.
"""

from twotrack.adapters.repositories import DEMO_CUSTOMER_ID, DEMO_LAPTOP_ID, DEMO_MOUSE_ID

from .bootstrap import AppContainer, bootstrap, build_id_generator

__all__ = [
    "DEMO_CUSTOMER_ID",
    "DEMO_LAPTOP_ID",
    "DEMO_MOUSE_ID",
    "AppContainer",
    "bootstrap",
    "build_id_generator",
]
