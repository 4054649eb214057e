# orgmap/models/team.py
from typing import List, Optional

from pydantic import BaseModel

from .enums import TeamCategory
from .identity import Identity


class Team(BaseModel):
    """A channel-backed feature team or guild."""

    name: str
    category: TeamCategory
    owner: Optional[Identity] = None  # Last resolved @mention in the topic
    members: List[Identity] = []
