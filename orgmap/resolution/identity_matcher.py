from typing import Dict, List, Optional, Sequence

from loguru import logger

from orgmap.models.identity import Identity
from orgmap.models.result import LeadReports
from .diagnostics import ErrorCollector


def match_identity(token: str, identities: Sequence[Identity]) -> Optional[Identity]:
    """Finds the first identity whose handle or id matches ``token``.

    The handle comparison ignores case; the id comparison is exact. Both are
    checked for each identity in directory order, so whichever identity comes
    first wins.
    """
    if not token:
        return None

    folded = token.casefold()
    for identity in identities:
        if identity.handle.casefold() == folded or identity.id == token:
            return identity
    return None


def resolve_lead_groups(
    groups: Dict[str, List[str]],
    identities: Sequence[Identity],
    errors: ErrorCollector,
) -> List[LeadReports]:
    """Matches every lead and report handle against the identity directory.

    An unknown lead drops its whole group; an unknown report drops only that
    report. Each miss is recorded once.
    """
    leads: List[LeadReports] = []

    for lead_handle, report_handles in groups.items():
        lead = match_identity(lead_handle, identities)
        if lead is None:
            errors.add(
                f"Could not find lead '{lead_handle}' "
                f"(reports: {', '.join(report_handles)})"
            )
            continue

        reports: List[Identity] = []
        for report_handle in report_handles:
            report = match_identity(report_handle, identities)
            if report is None:
                errors.add(
                    f"Could not find report '{report_handle}' of lead '{lead_handle}'"
                )
                continue
            reports.append(report)

        leads.append(LeadReports(lead=lead, reports=reports))

    logger.info(f"Resolved {len(leads)} of {len(groups)} lead groups.")
    return leads
