from typing import Any, Dict, List

from pydantic import BaseModel, Field

from .identity import Identity
from .team import Team


class Diagnostic(BaseModel):
    """A non-fatal resolution or fetch failure."""

    message: str


class LeadReports(BaseModel):
    """A lead and the people reporting to them."""

    lead: Identity
    reports: List[Identity] = []


class AggregateResult(BaseModel):
    """Outcome of a single resolution pass."""

    feature_teams: List[Team] = Field(default_factory=list, serialization_alias="featureTeams")
    guilds: List[Team] = Field(default_factory=list)
    leads: List[LeadReports] = Field(default_factory=list)
    errors: List[Diagnostic] = Field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready dict; every collection is present even when empty."""
        return self.model_dump(mode="json", by_alias=True)
