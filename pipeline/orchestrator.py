"""Pipeline orchestrator: fetch, extract and serialize one schedule."""

import logging
from typing import Optional, Union

import requests

from scraper import ExtractionEmptyError, ScheduleScraper, get_strategy
from transformer import ICalTransformer

from .config import Config

logger = logging.getLogger(__name__)


class SchedulePipeline:
    """Fetches a schedule page, extracts its events and renders an ICS feed.

    Holds only the configuration, so one instance can serve concurrent
    requests: every run builds its own scraper and transformer.
    """

    def __init__(self, config: Config, session: Optional[requests.Session] = None) -> None:
        """Initialize the pipeline.

        Args:
            config: Validated configuration.
            session: HTTP session shared by fetches (default: one per fetch).
        """
        self.config = config
        self._session = session

    def _create_scraper(self) -> ScheduleScraper:
        return ScheduleScraper(
            strategy=get_strategy(self.config.strategy),
            timeout=self.config.fetch_timeout,
            user_agent=self.config.user_agent,
            session=self._session,
        )

    def _create_transformer(self) -> ICalTransformer:
        return ICalTransformer(
            tz_name=self.config.timezone,
            prodid=self.config.prodid,
            uid_domain=self.config.uid_domain,
            provenance=self.config.provenance,
            calendar_name=self.config.calendar_name,
        )

    def run(self, source_url: Optional[str] = None) -> str:
        """Fetch the schedule page and return it as ICS text.

        Args:
            source_url: Page to fetch instead of the configured one.

        Returns:
            The iCalendar document.

        Raises:
            UpstreamFetchError: If the page cannot be retrieved.
            DocumentParseError: If the page cannot be parsed.
            ExtractionEmptyError: If no usable events were found.
        """
        url = source_url or self.config.source_url
        logger.info(f"Fetching schedule from {url}")

        scraper = self._create_scraper()
        scraper.fetch_schedule(url)
        return self._render(scraper)

    def run_document(self, document: Union[str, bytes]) -> str:
        """Convert an already retrieved schedule page to ICS text.

        Args:
            document: Page markup or plain text.

        Returns:
            The iCalendar document.

        Raises:
            DocumentParseError: If the document cannot be parsed.
            ExtractionEmptyError: If no usable events were found.
        """
        scraper = self._create_scraper()
        scraper.load_document(document)
        return self._render(scraper)

    def _render(self, scraper: ScheduleScraper) -> str:
        """Extract events, serialize them and log any that were dropped."""
        events = scraper.parse_events()
        logger.info(f"Extracted {len(events)} schedule events")

        transformer = self._create_transformer()
        transformer.transform(events)

        for error in transformer.skipped:
            logger.warning(f"Skipping event: {error}")

        if transformer.event_count == 0:
            raise ExtractionEmptyError(
                f"All {len(events)} extracted events had invalid dates or times"
            )

        logger.info(
            f"Serialized {transformer.event_count}/{len(events)} events to iCalendar"
        )
        return transformer.to_ics()
