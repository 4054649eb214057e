from typing import Callable, Dict, List, Optional, Sequence, TypeVar

from loguru import logger

from orgmap.models.channel import Channel
from orgmap.models.identity import Identity
from orgmap.models.result import AggregateResult
from orgmap.resolution.diagnostics import ErrorCollector
from orgmap.resolution.identity_matcher import resolve_lead_groups
from orgmap.resolution.lead_resolver import build_lead_groups, resolve_leads
from orgmap.resolution.table_parser import parse_directory_table
from orgmap.resolution.team_aggregator import aggregate_teams

# Provider signatures: zero-argument callables returning in-memory collections
TableProvider = Callable[[], Sequence[Sequence[str]]]
ChannelProvider = Callable[[], Sequence[Channel]]
IdentityProvider = Callable[[], Sequence[Identity]]

T = TypeVar("T")


class OrgMapResolver:
    """Runs one independent lead/team resolution pass over fresh provider data.

    Provider failures are recorded as diagnostics and only skip the stages
    that depend on the failed provider; ``run`` never raises.
    """

    def __init__(
        self,
        fetch_directory_table: TableProvider,
        fetch_channels: ChannelProvider,
        fetch_identities: IdentityProvider,
    ):
        self.fetch_directory_table = fetch_directory_table
        self.fetch_channels = fetch_channels
        self.fetch_identities = fetch_identities

    def run(self) -> AggregateResult:
        logger.info("Starting organization mapping pass...")
        errors = ErrorCollector()
        result = AggregateResult()

        groups: Dict[str, List[str]] = {}
        rows = self._fetch("directory table", self.fetch_directory_table, errors)
        if rows is not None:
            try:
                entries = resolve_leads(parse_directory_table(rows, errors))
                groups = build_lead_groups(entries)
            except Exception as e:
                logger.exception("Unexpected error while resolving the directory table")
                errors.add(f"Failed to resolve directory table: {e}")

        channels = self._fetch("channel list", self.fetch_channels, errors)
        identities = self._fetch("identity directory", self.fetch_identities, errors)

        if identities is None:
            logger.error("Skipping lead and team resolution: no identity directory.")
        else:
            try:
                result.leads = resolve_lead_groups(groups, identities, errors)
                if channels is not None:
                    result.feature_teams, result.guilds = aggregate_teams(
                        channels, identities, errors
                    )
            except Exception as e:
                logger.exception("Unexpected error while matching identities")
                errors.add(f"Failed to match identities: {e}")

        result.errors = errors.diagnostics
        logger.info(
            f"Pass finished: {len(result.leads)} leads, {len(result.feature_teams)} feature teams, "
            f"{len(result.guilds)} guilds, {len(result.errors)} diagnostics."
        )
        return result

    @staticmethod
    def _fetch(
        what: str, provider: Callable[[], Sequence[T]], errors: ErrorCollector
    ) -> Optional[List[T]]:
        """Calls a provider, turning any failure into a single diagnostic."""
        try:
            data = list(provider())
        except Exception as e:
            errors.add(f"Failed to fetch {what}: {e}")
            return None
        logger.debug(f"Fetched {len(data)} items for {what}")
        return data


def build_org_map(
    fetch_directory_table: TableProvider,
    fetch_channels: ChannelProvider,
    fetch_identities: IdentityProvider,
) -> AggregateResult:
    """Convenience wrapper running a single resolution pass."""
    return OrgMapResolver(fetch_directory_table, fetch_channels, fetch_identities).run()
