# tests/__init__.py
"""
Test suite for azclients.

Organization:
- `core`: domain models, If-Match rules and bulk mapping; no I/O.
- `shared`: paging, configuration, logging and tracing setup.
- `adapters`: the HTTP pipeline and IoT Hub REST clients against a scripted transport.
- `services`: the public clients end to end over `httpx.MockTransport`.
"""
