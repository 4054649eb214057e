# orgmap/fetchers/confluence_fetcher.py

from typing import List, Optional

import httpx
from bs4 import BeautifulSoup
from loguru import logger

from .base_fetcher import BaseFetcher, FetchError

CONTENT_ENDPOINT = "/rest/api/content/{page_id}"


def extract_table_rows(html: str) -> List[List[str]]:
    """Returns the ``<td>`` texts of every table row in a storage-format page.

    Rows without ``<td>`` cells (header rows made of ``<th>``) are omitted.
    """
    soup = BeautifulSoup(html, "html.parser")
    rows: List[List[str]] = []
    for tr in soup.find_all("tr"):
        cells = [td.get_text() for td in tr.find_all("td")]
        if cells:
            rows.append(cells)
    return rows


class ConfluenceFetcher(BaseFetcher):
    """Fetches the lead assignment table from a Confluence page."""

    source: str = "Confluence"

    def __init__(
        self,
        base_url: str,
        username: str,
        api_token: str,
        page_id: str,
        client: Optional[httpx.Client] = None,
        timeout: float = 30.0,
    ):
        if not base_url:
            logger.error("Confluence base URL is not configured.")
            raise FetchError("Missing Confluence base URL configuration.")
        super().__init__(client=client, timeout=timeout)
        self.base_url = base_url.rstrip("/")
        self.page_id = page_id
        self.auth = httpx.BasicAuth(username, api_token)
        logger.info(f"ConfluenceFetcher initialized for page {page_id}.")

    def fetch_directory_table(self) -> List[List[str]]:
        """Fetch the page body and return its table rows as cell strings."""
        url = self.base_url + CONTENT_ENDPOINT.format(page_id=self.page_id)
        logger.info(f"Fetching directory table from {self.source} page {self.page_id}")
        content = self._get_json(url, params={"expand": "body.storage"}, auth=self.auth)

        try:
            html = content["body"]["storage"]["value"]
        except (KeyError, TypeError) as e:
            raise FetchError(
                f"Page {self.page_id} has no storage-format body"
            ) from e

        rows = extract_table_rows(html)
        logger.info(f"Extracted {len(rows)} table rows from page {self.page_id}.")
        return rows
