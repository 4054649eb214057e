# orgmap/models/identity.py
from pydantic import BaseModel, ConfigDict, Field


class Identity(BaseModel):
    """A user record from the messaging platform's user directory."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)  # Make instances immutable

    handle: str  # Short unique user name, e.g. "alice"
    id: str  # Platform identifier, e.g. "U024BE7LH"
    display_name: str = Field("", serialization_alias="displayName")
