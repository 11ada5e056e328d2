import os
import logging
from typing import Optional
import threading # For singleton lock

from .config import DEFAULT_REQUEST_TIMEOUT, DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)

# Singleton instance and lock
_config_instance = None
_config_lock = threading.Lock()


class AppConfig:
    """Holds the reader configuration, loaded once as a singleton."""
    def __init__(self):
        logger.debug("Initializing AppConfig instance...")
        self.api_key: Optional[str] = None
        self.request_timeout: float = float(DEFAULT_REQUEST_TIMEOUT)
        self.user_agent: str = DEFAULT_USER_AGENT

    def _load_api_key(self):
        """Loads the default Sheets API key. Optional until an API load needs it."""
        api_key = os.environ.get("SHEETS_API_KEY")
        if api_key:
            self.api_key = api_key.strip()
            logger.info("SHEETS_API_KEY found in environment.")
        else:
            logger.info("SHEETS_API_KEY not set; API loads must pass a key explicitly.")

    def _load_http_settings(self):
        """Loads the request timeout and User-Agent header."""
        raw_timeout = os.environ.get("SHEETS_REQUEST_TIMEOUT")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
                if timeout <= 0:
                    raise ValueError("timeout must be positive")
                self.request_timeout = timeout
            except ValueError:
                logger.warning(f"Invalid SHEETS_REQUEST_TIMEOUT '{raw_timeout}'. Using default {DEFAULT_REQUEST_TIMEOUT}s.")
                self.request_timeout = float(DEFAULT_REQUEST_TIMEOUT)

        user_agent = os.environ.get("SHEETS_USER_AGENT")
        if user_agent and user_agent.strip():
            self.user_agent = user_agent.strip()

        logger.info(f"HTTP settings loaded (timeout: {self.request_timeout}s, user agent: {self.user_agent})")

    def load(self):
        """Load all configuration values."""
        logger.info("Loading reader configuration...")
        self._load_api_key()
        self._load_http_settings()
        logger.info("Configuration loading complete.")


def get_config() -> AppConfig:
    """Gets the singleton AppConfig instance, loading it on first call."""
    global _config_instance
    if _config_instance is None:
        with _config_lock:
            # Double-check locking
            if _config_instance is None:
                logger.info("Creating and loading singleton AppConfig instance.")
                temp_instance = AppConfig()
                try:
                    temp_instance.load()
                    _config_instance = temp_instance
                except Exception as e:
                    logger.critical(f"Failed to load configuration during singleton creation: {e}", exc_info=True)
                    raise
    else:
        logger.debug("Returning existing singleton AppConfig instance.")

    if _config_instance is None:
        logger.critical("Configuration instance is None after attempting initialization.")
        raise RuntimeError("Reader configuration could not be initialized.")

    return _config_instance


def reset_config() -> None:
    """Drops the cached singleton so the next get_config() re-reads the environment."""
    global _config_instance
    with _config_lock:
        _config_instance = None
