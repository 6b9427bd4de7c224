# azclients/adapters/http/__init__.py
from .credentials import BearerTokenCredential, StaticCredential
from .pipeline import AsyncHttpPipeline, HttpPipeline, RestRequest

__all__ = [
    "AsyncHttpPipeline",
    "BearerTokenCredential",
    "HttpPipeline",
    "RestRequest",
    "StaticCredential",
]
