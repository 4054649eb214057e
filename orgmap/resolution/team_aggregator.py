from typing import List, Optional, Sequence, Tuple

from loguru import logger

from orgmap.models.channel import Channel
from orgmap.models.enums import CATEGORY_PREFIXES, TeamCategory
from orgmap.models.identity import Identity
from orgmap.models.team import Team
from .diagnostics import ErrorCollector
from .identity_matcher import match_identity

OWNER_MARKER = "@"


def classify_channel(name: str) -> Optional[TeamCategory]:
    """Maps a channel name to its team category by prefix, if any."""
    for category, prefix in CATEGORY_PREFIXES.items():
        if name.startswith(prefix):
            return category
    return None


def build_team(
    channel: Channel,
    category: TeamCategory,
    identities: Sequence[Identity],
    errors: ErrorCollector,
) -> Team:
    """Builds a team from a channel's topic mentions and member list."""
    team = Team(name=channel.name, category=category)

    # Every @mention is a candidate owner; the last one that resolves wins.
    for token in channel.topic.split():
        if not token.startswith(OWNER_MARKER):
            continue
        owner_token = token[len(OWNER_MARKER):]
        owner = match_identity(owner_token, identities)
        if owner is None:
            errors.add(
                f"Could not find owner '{owner_token}' mentioned in topic of channel '{channel.name}'"
            )
            continue
        team.owner = owner

    if channel.members_error:
        errors.add(
            f"Could not fetch members of channel '{channel.name}': {channel.members_error}"
        )

    for member_id in channel.members:
        member = match_identity(member_id, identities)
        if member is None:
            errors.add(f"Could not find member '{member_id}' of channel '{channel.name}'")
            continue
        team.members.append(member)

    return team


def aggregate_teams(
    channels: Sequence[Channel],
    identities: Sequence[Identity],
    errors: ErrorCollector,
) -> Tuple[List[Team], List[Team]]:
    """Builds feature teams and guilds from the channel list.

    Channels without a recognised prefix are ignored.

    Returns:
        A ``(feature_teams, guilds)`` tuple, each in channel order.
    """
    feature_teams: List[Team] = []
    guilds: List[Team] = []

    for channel in channels:
        category = classify_channel(channel.name)
        if category is None:
            continue

        team = build_team(channel, category, identities, errors)
        if category == TeamCategory.FEATURE:
            feature_teams.append(team)
        else:
            guilds.append(team)

    logger.info(
        f"Aggregated {len(feature_teams)} feature teams and {len(guilds)} guilds "
        f"from {len(channels)} channels."
    )
    return feature_teams, guilds
