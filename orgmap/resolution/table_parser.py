from typing import List, Sequence

from loguru import logger

from orgmap.models.directory import DirectoryEntry
from .diagnostics import ErrorCollector

# Column layout of the lead assignment table
REAL_NAME_COLUMN = 0
HANDLE_COLUMN = 1
LEAD_COLUMN = 2
MIN_CELLS = 3


def parse_directory_table(
    rows: Sequence[Sequence[str]], errors: ErrorCollector
) -> List[DirectoryEntry]:
    """Turns raw table rows into directory entries.

    Every cell is trimmed. Rows with fewer than three cells are reported and
    skipped; rows with an empty handle are dropped silently. Cells past the
    third are ignored.

    Args:
        rows: Table rows in document order, each a sequence of cell strings.
        errors: Sink for diagnostics about malformed rows.

    Returns:
        Entries in table order, with ``resolved_lead_handle`` unset.
    """
    entries: List[DirectoryEntry] = []

    for row_number, row in enumerate(rows, start=1):
        cells = [str(cell).strip() for cell in row]
        if len(cells) < MIN_CELLS:
            errors.add(
                f"Skipping malformed directory row {row_number}: expected at least "
                f"{MIN_CELLS} cells, got {len(cells)}"
            )
            continue

        handle = cells[HANDLE_COLUMN]
        if not handle:
            logger.debug(f"Dropping directory row {row_number} without a handle")
            continue

        entries.append(
            DirectoryEntry(
                real_name=cells[REAL_NAME_COLUMN],
                handle=handle,
                lead_real_name=cells[LEAD_COLUMN],
            )
        )

    logger.info(f"Parsed {len(entries)} directory entries from {len(rows)} rows.")
    return entries
