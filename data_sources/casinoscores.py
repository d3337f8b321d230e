"""HTTP client for the casinoscores game-events feed."""

import logging

import requests

from common.config import get_settings
from common.exceptions import FetchError

logger = logging.getLogger(__name__)


def fetch_roulette_events(url=None, session=None, timeout=None):
    """
    GET the latest roulette rounds and return the decoded JSON body.
    Raises FetchError on transport errors, non-2xx responses and non-JSON bodies.
    """
    settings = get_settings()
    url = url or settings.ROULETTE_API_URL
    timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS
    http = session or requests

    try:
        response = http.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise FetchError(f"Request to roulette API failed: {exc}", url=url) from exc

    if not response.ok:
        raise FetchError(
            f"HTTP error! status: {response.status_code}",
            url=url,
            status_code=response.status_code,
        )

    try:
        data = response.json()
    except ValueError as exc:
        raise FetchError("Roulette API returned a non-JSON body", url=url, status_code=response.status_code) from exc

    logger.info("Fetched %d roulette events from %s", len(data) if isinstance(data, list) else 0, url)
    return data
