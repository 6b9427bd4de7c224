# azclients/core/domain/feature_models.py
from typing import List, Optional

from pydantic import Field

from azclients.core.domain.base import ServiceModel


class FeatureProperties(ServiceModel):
    """Registration state of a preview feature, e.g. 'Registered', 'Pending'."""
    state: Optional[str] = None

class FeatureResponse(ServiceModel):
    """A preview feature of a resource provider."""
    name: Optional[str] = None
    properties: Optional[FeatureProperties] = None
    id: Optional[str] = None
    type: Optional[str] = None

class FeatureOperationsListResult(ServiceModel):
    """One page of features; ``next_link`` is the URL of the next page."""
    value: List[FeatureResponse] = Field(default_factory=list)
    next_link: Optional[str] = None

class OperationDisplay(ServiceModel):
    provider: Optional[str] = None
    resource: Optional[str] = None
    operation: Optional[str] = None

class Operation(ServiceModel):
    """A REST operation exposed by the Microsoft.Features provider."""
    name: Optional[str] = None
    display: Optional[OperationDisplay] = None

class OperationListResult(ServiceModel):
    value: List[Operation] = Field(default_factory=list)
    next_link: Optional[str] = None
