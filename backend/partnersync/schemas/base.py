"""Shared schema base."""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Snake-case attributes in Python, camelCase keys on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def to_json(model: BaseModel, exclude_none: bool = False) -> dict:
    """Wire representation of a schema for hand-built response envelopes."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=exclude_none)
