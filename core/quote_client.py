"""Quote API client for quote mode."""

import logging
from typing import List

import requests

from core.models import Quote
from utils.config import AppSettings

log = logging.getLogger("gti.quotes")

QUOTE_URL = "https://zenquotes.io/api/random"
DEFAULT_PRACTICE_TEXT = (
    "Typing is not about speed alone, it is about accuracy, rhythm, and calm focus."
)
MAX_QUOTES = 10


def default_quote() -> Quote:
    return Quote(text=DEFAULT_PRACTICE_TEXT, author="Unknown")


class QuoteClient:
    """Fetches random quotes, falling back to a built-in practice text.

    Failures are never raised: a failed request yields the default quote.
    """

    def __init__(self, settings: AppSettings, url: str = QUOTE_URL):
        """Initialize quote client.

        Args:
            settings: Application settings; network.timeout_ms bounds each request
            url: Quote endpoint returning ``[{"q": ..., "a": ...}]``
        """
        self.url = url
        self.timeout_sec = settings.network.timeout_ms / 1000.0
        self.session = requests.Session()

    def fetch_quote(self) -> Quote:
        """Fetch a single quote.

        Returns:
            Quote from the API, or the default quote on any failure
        """
        try:
            response = self.session.get(self.url, timeout=self.timeout_sec)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            log.warning(f"Quote fetch failed, using default text: {e}")
            return default_quote()

        if not isinstance(payload, list) or not payload:
            log.warning("Quote API returned no quotes, using default text")
            return default_quote()

        entry = payload[0]
        if not isinstance(entry, dict) or not entry.get("q"):
            log.warning("Quote API returned an empty quote, using default text")
            return default_quote()

        return Quote(text=entry["q"], author=entry.get("a") or "Unknown")

    def fetch_quotes(self, count: int) -> List[Quote]:
        """Fetch several quotes, one request each.

        Args:
            count: Number of quotes, clamped to 1..MAX_QUOTES

        Returns:
            List with exactly the clamped number of quotes
        """
        count = min(MAX_QUOTES, max(1, count))
        return [self.fetch_quote() for _ in range(count)]
