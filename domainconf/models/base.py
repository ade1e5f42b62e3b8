"""Base classes for settings records.

Settings records are frozen pydantic models whose every field has a default,
so an absent configuration section binds to a fully populated instance.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel, to_pascal


class SettingsModel(BaseModel):
    """Settings bound from the configuration tree (PascalCase keys)."""

    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class PolicyModel(BaseModel):
    """Records persisted as policy documents (camelCase keys)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )
