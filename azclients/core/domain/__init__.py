# azclients/core/domain/__init__.py
"""
Domain models and value objects.

``iothub_models`` and ``feature_models`` mirror the JSON payloads of the
two REST surfaces; ``preconditions`` holds the If-Match rules shared by
every write operation.
"""
