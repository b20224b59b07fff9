# services/crawler.py

import logging
from urllib.parse import urlparse

import requests

from app.exceptions import FetchFailureError, InvalidInputError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "AriClearBot/0.1 (+https://ariclear.com)"


def is_valid_http_url(value) -> bool:
    """True for an absolute http:// or https:// URL with a host."""
    if not isinstance(value, str) or not value:
        return False
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def require_http_url(value) -> str:
    if not is_valid_http_url(value):
        raise InvalidInputError()
    return value


def fetch_html(
    url: str,
    timeout: float = 15.0,
    user_agent: str = DEFAULT_USER_AGENT,
) -> str:
    """
    Single GET, redirects followed, no retries.
    Any non-2xx answer fails the whole analysis; error pages are never parsed.
    """
    headers = {
        "User-Agent": user_agent,
        "Accept": "text/html",
    }
    try:
        resp = requests.get(url, headers=headers, timeout=timeout, allow_redirects=True)
    except requests.RequestException as e:
        logger.warning("[crawler] request failed url=%s error=%s", url, e)
        raise FetchFailureError() from e

    if not 200 <= resp.status_code < 300:
        logger.warning("[crawler] non-2xx url=%s status=%s", url, resp.status_code)
        raise FetchFailureError(resp.status_code)

    logger.info("[crawler] fetched url=%s status=%s length=%s", url, resp.status_code, len(resp.text))
    return resp.text
