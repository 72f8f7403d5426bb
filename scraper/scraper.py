"""Schedule scraper for the UEK class planner."""

from typing import Optional, Union

import requests
from bs4 import BeautifulSoup, ParserRejectedMarkup

from .exceptions import DocumentParseError, ExtractionEmptyError, UpstreamFetchError
from .models import ScheduleEvent
from .strategies import AutoStrategy, BaseStrategy


class ScheduleScraper:
    """Scraper for extracting schedule events from the planner page.

    Fetches the page over plain HTTP and hands the parsed document to an
    extraction strategy. One instance serves one document.
    """

    DEFAULT_TIMEOUT = 20
    DEFAULT_USER_AGENT = "UEK-ICS"

    def __init__(
        self,
        strategy: Optional[BaseStrategy] = None,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize the scraper.

        Args:
            strategy: Extraction strategy (default: table with text fallback).
            timeout: Seconds to wait for the upstream page.
            user_agent: User-Agent header sent upstream.
            session: HTTP session to use (default: a fresh requests session).
        """
        self._strategy = strategy or AutoStrategy()
        self._timeout = timeout
        self._user_agent = user_agent
        self._session = session
        self._soup: Optional[BeautifulSoup] = None

    def fetch_schedule(self, url: str) -> BeautifulSoup:
        """Fetch and parse the schedule page.

        Args:
            url: Full URL to the schedule page.

        Returns:
            Parsed HTML as BeautifulSoup object.

        Raises:
            UpstreamFetchError: On network failure, timeout or non-2xx status.
            DocumentParseError: If the body cannot be parsed.
        """
        session = self._session or requests.Session()

        try:
            response = session.get(
                url,
                headers={"User-Agent": self._user_agent},
                timeout=self._timeout,
            )
        except requests.Timeout as e:
            raise UpstreamFetchError(
                f"Timed out after {self._timeout}s fetching {url}", url, timed_out=True
            ) from e
        except requests.RequestException as e:
            raise UpstreamFetchError(f"Could not fetch {url}: {e}", url) from e
        finally:
            if self._session is None:
                session.close()

        if not response.ok:
            raise UpstreamFetchError(
                f"Bad upstream response: HTTP {response.status_code} from {url}", url
            )

        # Raw bytes let BeautifulSoup honour the page's own charset declaration
        return self.load_document(response.content)

    def load_document(self, document: Union[str, bytes]) -> BeautifulSoup:
        """Parse an already retrieved schedule document.

        Args:
            document: Page markup or plain text.

        Returns:
            Parsed document as BeautifulSoup object.

        Raises:
            DocumentParseError: If the document is not text or is rejected
                by the parser.
        """
        if not isinstance(document, (str, bytes)):
            raise DocumentParseError(
                f"Expected markup text, got {type(document).__name__}"
            )

        try:
            self._soup = BeautifulSoup(document, "lxml")
        except ParserRejectedMarkup as e:
            raise DocumentParseError(f"Schedule page could not be parsed: {e}") from e

        return self._soup

    def parse_events(self) -> list[ScheduleEvent]:
        """Extract all events from the loaded document.

        Returns:
            List of ScheduleEvent objects in page order.

        Raises:
            RuntimeError: If no document has been loaded.
            ExtractionEmptyError: If no events were recognised.
        """
        if self._soup is None:
            raise RuntimeError("No schedule data loaded. Call fetch_schedule() first.")

        events = self._strategy.extract(self._soup)

        if not events:
            raise ExtractionEmptyError(
                f"No events parsed using the '{self._strategy.name}' strategy"
            )

        return events
