"""
Registry Fetcher.

Downloads the IEEE OUI registry text export over HTTP.
"""

import logging
import time
from typing import Optional

import requests

from ..core.exceptions import RegistryFetchError


logger = logging.getLogger(__name__)


DEFAULT_REGISTRY_URL = "https://standards-oui.ieee.org/oui/oui.txt"
DEFAULT_USER_AGENT = "oui-lookup/1.0"


class RegistryFetcher:
    """
    Blocking single-shot download of the registry text.

    Failed requests are retried with exponential backoff before giving up.
    """

    def __init__(
        self,
        url: str = DEFAULT_REGISTRY_URL,
        timeout: float = 30.0,
        retries: int = 3,
        backoff_seconds: float = 2.0,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.retries = max(0, retries)
        self.backoff_seconds = backoff_seconds
        self.user_agent = user_agent
        self._session = session or requests.Session()

    def fetch(self, url: Optional[str] = None) -> str:
        """
        Download registry text.

        Args:
            url: Override for the configured registry URL

        Returns:
            Registry text decoded as UTF-8

        Raises:
            RegistryFetchError: If every attempt failed
        """
        url = url or self.url
        attempts = self.retries + 1
        last_error: Optional[Exception] = None

        for attempt in range(1, attempts + 1):
            try:
                logger.info(f"Downloading OUI registry from {url} (attempt {attempt}/{attempts})")
                response = self._session.get(
                    url,
                    timeout=self.timeout,
                    headers={"User-Agent": self.user_agent},
                )
                response.raise_for_status()
                # text/plain without charset would otherwise decode as ISO-8859-1
                response.encoding = "utf-8"
                text = response.text
                logger.info(f"Downloaded {len(text)} characters of registry text")
                return text
            except requests.RequestException as e:
                last_error = e
                logger.warning(f"Registry download failed: {e}")
                if attempt < attempts:
                    delay = self.backoff_seconds * (2 ** (attempt - 1))
                    if delay > 0:
                        time.sleep(delay)

        raise RegistryFetchError(f"Failed to download registry from {url} after {attempts} attempts: {last_error}")

    def close(self):
        self._session.close()


def fetch_registry_text(url: str = DEFAULT_REGISTRY_URL, timeout: float = 30.0) -> str:
    """Convenience function for a one-off download."""
    fetcher = RegistryFetcher(url=url, timeout=timeout)
    try:
        return fetcher.fetch()
    finally:
        fetcher.close()
