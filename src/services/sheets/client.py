"""Fetches a published spreadsheet payload over HTTP."""

import logging
from typing import Optional
from urllib.parse import urlparse

import requests

from src.config.config_loader import get_config
from src.utils.error_utils import TransportError, log_error, redact_key

logger = logging.getLogger(__name__)

ACCEPT_HEADER = "text/csv,application/json;q=0.9,text/*;q=0.8,*/*;q=0.1"
SIGN_IN_HOST = "accounts.google.com"


def _error_detail(response: requests.Response) -> str:
    """Best-effort short description of an error response body."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        message = body["error"].get("message")
        if message:
            return message
    text = response.text or ""
    return (text[:200] + "...") if len(text) > 200 else text


def _redirected_to_sign_in(response: requests.Response) -> bool:
    """True when the request ended up on (or passed through) the Google accounts host."""
    hops = [response.url] + [hop.headers.get("Location", "") for hop in response.history or []]
    return any(
        isinstance(hop, str) and urlparse(hop).hostname == SIGN_IN_HOST
        for hop in hops
    )


def _looks_like_sign_in_page(response: requests.Response) -> bool:
    if _redirected_to_sign_in(response):
        return True
    content_type = response.headers.get("Content-Type", "")
    if "text/html" not in content_type:
        return False
    lower = (response.text or "").lower()
    # A login form posts to the accounts host; page wording alone is not enough
    return "<html" in lower and f"https://{SIGN_IN_HOST}/" in lower


def fetch_text(url: str, timeout: Optional[float] = None) -> str:
    """Issues one GET and returns the response body as text.

    Raises:
        TransportError: On network failure, on a non-2xx status, or when
            Google answers with its HTML sign-in page (sheet not published).
    """
    config = get_config()
    timeout = timeout if timeout is not None else config.request_timeout
    safe_url = redact_key(url)
    logger.info(f"Fetching sheet payload from {safe_url}")

    try:
        response = requests.get(
            url,
            headers={
                "User-Agent": config.user_agent,
                "Accept": ACCEPT_HEADER,
            },
            timeout=timeout,
        )
    except requests.exceptions.RequestException as e:
        # requests repeats the full request path (query included) in its messages
        reason = redact_key(str(e))
        log_error(f"Request failed: {reason}", url=url)
        raise TransportError(f"Request to {safe_url} failed: {reason}", url=url) from e

    if not 200 <= response.status_code < 300:
        detail = _error_detail(response)
        log_error(f"Non-success response: {detail}", url=url, status_code=response.status_code)
        raise TransportError(
            f"HTTP {response.status_code} fetching {safe_url}: {detail}",
            url=url,
            status_code=response.status_code,
        )

    if _looks_like_sign_in_page(response):
        log_error("Response is a Google sign-in page", url=url, status_code=response.status_code)
        raise TransportError(
            "Spreadsheet returned an HTML sign-in page. Is it published to the web?",
            url=url,
            status_code=response.status_code,
        )

    # Export responses may omit the charset; Google always sends UTF-8
    if response.encoding is None or response.encoding.lower() == "iso-8859-1":
        response.encoding = "utf-8"
    logger.debug(f"Fetched {len(response.text)} characters from {safe_url}")
    return response.text
