# azclients/core/domain/base.py
from enum import Enum
from typing import Any, Callable, Dict, Type

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ServiceModel(BaseModel):
    """
    Base Pydantic model for every REST payload.

    Common config:
    - camelCase wire names, snake_case attributes (both accepted on input)
    - unknown fields from newer service versions are ignored
    - unset optional fields are omitted from request bodies
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def serialize(self) -> Dict[str, Any]:
        """JSON-ready dict using the service's property names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def known_member(enum_type: Type[Enum]) -> Callable[[Any], Any]:
    """
    Before-validator for service enums that may grow: a value matching a
    member (case-insensitively) becomes that member, anything else is kept
    as the raw string.
    """
    def coerce(value: Any) -> Any:
        if isinstance(value, str) and not isinstance(value, enum_type):
            for member in enum_type:
                if member.value.lower() == value.lower():
                    return member
        return value
    return coerce
