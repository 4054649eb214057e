# orgmap/fetchers/slack_fetcher.py

from typing import Any, Callable, Dict, List, Optional

import httpx
from loguru import logger

from orgmap.models.channel import Channel
from orgmap.models.identity import Identity
from .base_fetcher import AuthenticationError, BaseFetcher, FetchError

SLACK_API_BASE_URL = "https://slack.com/api"

# Largest page size Slack accepts; results past one page are not followed
PAGE_LIMIT = 1000

# Slack "ok": false error codes meaning the token itself is unusable
AUTH_ERRORS = {"invalid_auth", "not_authed", "account_inactive", "token_revoked"}


class SlackFetcher(BaseFetcher):
    """Fetches channels and users from the Slack Web API.

    ``fetch_channels`` makes one ``conversations.members`` call per channel
    accepted by ``channel_filter`` (every channel when no filter is given).
    """

    source: str = "Slack"

    def __init__(
        self,
        token: str,
        base_url: str = SLACK_API_BASE_URL,
        client: Optional[httpx.Client] = None,
        timeout: float = 30.0,
        channel_filter: Optional[Callable[[str], bool]] = None,
    ):
        if not token:
            logger.error("Slack token is not configured.")
            raise FetchError("Missing Slack token configuration.")
        super().__init__(client=client, timeout=timeout)
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.channel_filter = channel_filter
        logger.info("SlackFetcher initialized.")

    def _call(self, method: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Calls a Web API method and unwraps the ``ok`` envelope."""
        payload = self._get_json(
            f"{self.base_url}/{method}",
            params={"limit": PAGE_LIMIT, **(params or {})},
            headers={"Authorization": f"Bearer {self.token}"},
        )
        if not isinstance(payload, dict):
            raise FetchError(f"Unexpected response from {self.source} {method}")
        if not payload.get("ok", False):
            error = payload.get("error", "unknown_error")
            if error in AUTH_ERRORS:
                raise AuthenticationError(f"{self.source} {method} rejected token: {error}")
            raise FetchError(f"{self.source} {method} failed: {error}")

        next_cursor = (payload.get("response_metadata") or {}).get("next_cursor")
        if next_cursor:
            logger.warning(
                f"{self.source} {method} returned more than {PAGE_LIMIT} results; "
                f"only the first page is used."
            )
        return payload

    def _fetch_members(self, raw_channel: Dict[str, Any]) -> Channel:
        channel = Channel(
            name=raw_channel.get("name", ""),
            topic=(raw_channel.get("topic") or {}).get("value") or "",
        )
        if self.channel_filter is not None and not self.channel_filter(channel.name):
            return channel

        try:
            channel.members = self._call(
                "conversations.members", params={"channel": raw_channel["id"]}
            ).get("members", [])
        except AuthenticationError:
            raise
        except FetchError as e:
            logger.error(f"Error fetching members of channel {channel.name}: {e}")
            channel.members_error = str(e)
        return channel

    def fetch_channels(self) -> List[Channel]:
        """Fetch public, non-archived channels along with their member ids.

        A failed member lookup is attached to its channel instead of failing
        the whole list.
        """
        logger.info(f"Fetching channel list from {self.source}")
        payload = self._call(
            "conversations.list",
            params={"exclude_archived": "true", "types": "public_channel"},
        )

        channels = [self._fetch_members(raw) for raw in payload.get("channels", [])]

        logger.info(f"Fetched {len(channels)} channels from {self.source}.")
        return channels

    def fetch_identities(self) -> List[Identity]:
        """Fetch the workspace user directory."""
        logger.info(f"Fetching user directory from {self.source}")
        payload = self._call("users.list")

        identities = [
            Identity(
                handle=raw_user.get("name") or "",
                id=raw_user["id"],
                display_name=raw_user.get("real_name") or "",
            )
            for raw_user in payload.get("members", [])
        ]
        logger.info(f"Fetched {len(identities)} users from {self.source}.")
        return identities
