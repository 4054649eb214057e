import sys
import json

from loguru import logger

from orgmap.config.settings import load_settings
from orgmap.logging.setup import setup_logging
from orgmap.fetchers.base_fetcher import FetchError
from orgmap.fetchers.confluence_fetcher import ConfluenceFetcher
from orgmap.fetchers.slack_fetcher import SlackFetcher
from orgmap.orchestrator import build_org_map
from orgmap.resolution.team_aggregator import classify_channel

from rich import print_json


def main() -> int:
    """Runs one organization mapping pass and prints the JSON result."""
    settings = load_settings()
    setup_logging(
        settings.log_level,
        secrets=[settings.slack_token, settings.confluence_api_token],
    )

    missing = settings.missing_credentials()
    if missing:
        logger.critical(f"Missing required settings: {', '.join(missing)}")
        return 1

    try:
        confluence = ConfluenceFetcher(
            base_url=str(settings.confluence_url),
            username=settings.confluence_username,
            api_token=settings.confluence_api_token,
            page_id=settings.confluence_page_id,
            timeout=settings.http_timeout,
        )
        slack = SlackFetcher(
            token=settings.slack_token,
            base_url=str(settings.slack_api_url),
            timeout=settings.http_timeout,
            channel_filter=lambda name: classify_channel(name) is not None,
        )
    except FetchError as e:
        logger.critical(f"Could not set up collaborators: {e}")
        return 1

    with confluence, slack:
        result = build_org_map(
            confluence.fetch_directory_table,
            slack.fetch_channels,
            slack.fetch_identities,
        )

    payload = result.to_payload()
    print_json(data=payload)

    if settings.output_path:
        try:
            with open(settings.output_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=4, ensure_ascii=False)
            logger.success(f"Saved organization map to {settings.output_path}")
        except IOError as e:
            logger.error(f"Failed to write organization map to {settings.output_path}: {e}")

    if result.errors:
        logger.warning(f"Pass completed with {len(result.errors)} diagnostics.")
    else:
        logger.success("Pass completed without diagnostics.")
    return 0


def run() -> int:
    """Runs main(), turning interrupts and unexpected errors into exit codes."""
    try:
        return main()
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        return 0
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(run())
