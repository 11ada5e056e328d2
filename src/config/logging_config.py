import logging

from .config import LOG_FORMAT, LOG_LEVEL


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Applies the reader's log format and returns the root logger."""
    resolved = level if level is not None else LOG_LEVEL
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.upper())
        if not isinstance(resolved, int):
            resolved = logging.INFO

    logging.basicConfig(
        format=LOG_FORMAT,
        level=resolved,
    )

    # Set higher logging level for noisy libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("urllib3.connectionpool").setLevel(logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved)
    return root_logger
