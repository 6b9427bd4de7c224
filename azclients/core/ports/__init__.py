# azclients/core/ports/__init__.py
"""
Core Ports (Interfaces).

Protocols the adapters depend on without knowing who implements them.
"""

from .credential import ICredential

__all__ = [
    "ICredential",
]
