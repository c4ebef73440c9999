"""Fetch the raw Optio feed body."""

import logging

import requests

logger = logging.getLogger(__name__)

HEADERS = {
    "Accept": "*/*",
    "User-Agent": "optio-import/1.0",
}


class FeedFetchError(RuntimeError):
    """The feed could not be retrieved or was empty."""


def fetch_feed(url: str, timeout: float | None = None) -> str:
    """Fetch the feed at `url` and return its body text.

    Raises:
        FeedFetchError: on network failure, a non-2xx status, or an empty body.
    """
    logger.info("Fetching feed from: %s", url)
    try:
        response = requests.get(url, headers=HEADERS, timeout=timeout, allow_redirects=True)
        response.raise_for_status()
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else "unknown"
        raise FeedFetchError(f"Feed fetch failed: HTTP {status}") from e
    except requests.RequestException as e:
        raise FeedFetchError(f"Feed fetch failed: {e}") from e

    text = response.text
    if not text or not text.strip():
        raise FeedFetchError("Feed returned empty content")

    logger.info("Fetched %d characters", len(text))
    return text
