"""twotrack

A small order-management domain implemented twice: once raising exceptions and
once returning explicit result values. Both paths converge on the same error
payload and the same RFC 7807 Problem Details representation.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
