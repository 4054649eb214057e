"""Tests for the Confluence table fetcher, using httpx.MockTransport."""

import httpx
import pytest

from orgmap.fetchers.base_fetcher import AuthenticationError, FetchError
from orgmap.fetchers.confluence_fetcher import ConfluenceFetcher, extract_table_rows

STORAGE_HTML = """
<table><tbody>
<tr><th>Name</th><th>Slack</th><th>Lead</th></tr>
<tr><td>Alice Anders</td><td>alice</td><td></td></tr>
<tr><td>Bob Berg</td><td><p>bob</p></td><td>Alice Anders</td><td>Oslo</td></tr>
<tr><td>Ghost</td><td></td><td>Alice Anders</td></tr>
</tbody></table>
"""


def _fetcher(handler):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return ConfluenceFetcher(
        base_url="https://wiki.example.com/",
        username="svc",
        api_token="secret-token",
        page_id="12159063",
        client=client,
    )


class TestExtractTableRows:
    """Tests for extract_table_rows."""

    def test_skips_header_rows(self):
        rows = extract_table_rows(STORAGE_HTML)

        assert rows == [
            ["Alice Anders", "alice", ""],
            ["Bob Berg", "bob", "Alice Anders", "Oslo"],
            ["Ghost", "", "Alice Anders"],
        ]

    def test_no_table(self):
        assert extract_table_rows("<p>nothing here</p>") == []


class TestConfluenceFetcher:
    """Tests for ConfluenceFetcher.fetch_directory_table."""

    def test_fetches_storage_body(self):
        seen = {}

        def handler(request):
            seen["url"] = request.url
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"body": {"storage": {"value": STORAGE_HTML}}})

        with _fetcher(handler) as fetcher:
            rows = fetcher.fetch_directory_table()

        assert seen["url"].path == "/rest/api/content/12159063"
        assert seen["url"].params["expand"] == "body.storage"
        assert seen["auth"].startswith("Basic ")
        assert len(rows) == 3

    def test_missing_body_raises_fetch_error(self):
        with _fetcher(lambda request: httpx.Response(200, json={"id": "12159063"})) as fetcher:
            with pytest.raises(FetchError):
                fetcher.fetch_directory_table()

    def test_unauthorized(self):
        with _fetcher(lambda request: httpx.Response(401)) as fetcher:
            with pytest.raises(AuthenticationError):
                fetcher.fetch_directory_table()

    def test_not_found(self):
        with _fetcher(lambda request: httpx.Response(404)) as fetcher:
            with pytest.raises(FetchError):
                fetcher.fetch_directory_table()

    def test_missing_base_url(self):
        with pytest.raises(FetchError):
            ConfluenceFetcher(base_url="", username="u", api_token="t", page_id="1")

    def test_callers_client_is_not_modified(self):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"body": {"storage": {"value": STORAGE_HTML}}})

        client = httpx.Client(transport=httpx.MockTransport(handler))
        fetcher = ConfluenceFetcher(
            base_url="https://wiki.example.com",
            username="svc",
            api_token="secret-token",
            page_id="12159063",
            client=client,
        )

        fetcher.fetch_directory_table()

        assert seen["auth"].startswith("Basic ")
        assert client.auth is None
        fetcher.close()
