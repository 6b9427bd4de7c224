# azclients/core/__init__.py
"""
Core Domain Layer.

Typed payload models, the ETag precondition rules and the bulk registry
mapping. Nothing in here performs I/O; the HTTP side lives in
``azclients.adapters``.
"""
