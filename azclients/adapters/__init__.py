# azclients/adapters/__init__.py
"""
Infrastructure Adapters.

- `http`: the httpx pipeline and credential implementations.
- `iothub`: request builders and REST clients for the IoT Hub service API.
- `features`: request builders and operation groups for ARM Microsoft.Features.

Dependencies point INWARD: these modules depend on `azclients.core`,
but `azclients.core` never imports from here.
"""
