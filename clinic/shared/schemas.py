"""Common Pydantic schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase input and emits camelCase, like the stored records."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SnapshotModel(CamelModel):
    """Read-only record handed over by the owning collaborator for one render pass."""

    model_config = ConfigDict(frozen=True)
