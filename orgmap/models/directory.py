from pydantic import BaseModel


class DirectoryEntry(BaseModel):
    """One row of the lead assignment table."""

    real_name: str
    handle: str
    lead_real_name: str = ""
    # Filled in by the lead resolution pass
    resolved_lead_handle: str = ""
