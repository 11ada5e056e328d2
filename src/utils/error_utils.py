import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)


class SheetError(Exception):
    """Base class for every failure raised while loading or reading a sheet."""


class TransportError(SheetError):
    """The request failed or the server answered with a non-success status."""
    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class PayloadError(SheetError):
    """The response body could not be parsed into rows."""


class ConfigurationError(SheetError, ValueError):
    """A required setting (e.g. the API key) is missing."""


class SheetLookupError(SheetError, LookupError):
    """An accessor was called with a position or header name that does not exist."""


class IndexOutOfRangeError(SheetLookupError, IndexError):
    def __init__(self, index: int, length: int, what: str = "item"):
        super().__init__(f"{what} index {index} out of range [0, {length})")
        self.index = index
        self.length = length


class HeaderNotFoundError(SheetLookupError, KeyError):
    def __init__(self, name, available=()):
        if available:
            message = f"header {name!r} not found (available: {', '.join(available)})"
        else:
            message = f"header {name!r} not found (sheet has no header row)"
        super().__init__(message)
        self.name = name

    def __str__(self):
        # KeyError would repr() the message
        return self.args[0]


def log_error(message: str, url: Optional[str] = None, status_code: Optional[int] = None, exc_info=False):
    """Logs an error message, optionally including request details and exception info."""
    log_message = f"ERROR: {redact_key(message)}"
    if url:
        log_message += f" | URL: {redact_key(url)}"
    if status_code is not None:
        log_message += f" | Status: {status_code}"

    logger.error(log_message, exc_info=exc_info)


KEY_PARAM_RE = re.compile(r"(key=)([^&\s#'\"()]+)")


def _mask(match: "re.Match") -> str:
    value = match.group(2)
    masked = f"{value[:4]}..." if len(value) > 4 else "***"
    return match.group(1) + masked


def redact_key(text: str) -> str:
    """Masks every 'key=' query value in a URL or message so API keys stay out of logs."""
    return KEY_PARAM_RE.sub(_mask, text)
