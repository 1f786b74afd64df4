"""Base models for the wire format.

Field names are kebab-case on the wire (``domain-name``, ``remote-mx``) and
snake_case in Python. Request bodies accept only the kebab-case keys and
reject unknown ones.
"""

from pydantic import BaseModel, ConfigDict


def to_kebab(name: str) -> str:
    return name.replace("_", "-")


class KebabModel(BaseModel):
    """Response model serialised with kebab-case keys."""
    model_config = ConfigDict(alias_generator=to_kebab, populate_by_name=True)


class RequestModel(KebabModel):
    """Request body with kebab-case keys; unknown fields are an error."""
    model_config = ConfigDict(alias_generator=to_kebab, extra="forbid")
