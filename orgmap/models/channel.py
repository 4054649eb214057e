from typing import List, Optional

from pydantic import BaseModel


class Channel(BaseModel):
    """A messaging platform channel with its topic and member identifiers."""

    name: str
    topic: str = ""
    members: List[str] = []
    # Set when the member list could not be fetched
    members_error: Optional[str] = None
