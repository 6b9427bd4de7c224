# azclients/core/use_cases/__init__.py
