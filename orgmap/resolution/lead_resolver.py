from typing import Dict, List

from loguru import logger

from orgmap.models.directory import DirectoryEntry


def resolve_leads(entries: List[DirectoryEntry]) -> List[DirectoryEntry]:
    """Sets each entry's ``resolved_lead_handle`` from the table itself.

    A lead is looked up by exact real name. When several rows share a real
    name the first one in table order wins.
    """
    by_real_name: Dict[str, DirectoryEntry] = {}
    for entry in entries:
        by_real_name.setdefault(entry.real_name, entry)

    unresolved = 0
    for entry in entries:
        if not entry.lead_real_name:
            continue
        lead = by_real_name.get(entry.lead_real_name)
        if lead is None:
            unresolved += 1
            logger.debug(
                f"No directory row named '{entry.lead_real_name}' (lead of {entry.handle})"
            )
            continue
        entry.resolved_lead_handle = lead.handle

    if unresolved:
        logger.info(f"{unresolved} entries name a lead missing from the table.")
    return entries


def build_lead_groups(entries: List[DirectoryEntry]) -> Dict[str, List[str]]:
    """Groups report handles under their resolved lead handle, in table order."""
    groups: Dict[str, List[str]] = {}
    for entry in entries:
        if entry.resolved_lead_handle:
            groups.setdefault(entry.resolved_lead_handle, []).append(entry.handle)

    logger.info(f"Built {len(groups)} lead groups.")
    return groups
