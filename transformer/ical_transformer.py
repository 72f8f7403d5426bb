"""iCalendar transformer for schedule events."""

import re
import uuid
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from icalendar import Calendar, Event

from scraper.exceptions import EventBuildError
from scraper.models import ScheduleEvent
from .base import BaseTransformer

# Commas and line breaks would split or break text fields in some clients
UNSAFE_TEXT = re.compile(r"[\r\n,]")


def escape_text(value: str) -> str:
    """Replace commas and line breaks with spaces."""
    return UNSAFE_TEXT.sub(" ", value or "")


class ICalTransformer(BaseTransformer):
    """Transformer that converts dated schedule events to iCalendar format."""

    TIMEZONE = "Europe/Warsaw"
    PRODID = "-//UEK-ICS//PL"
    UID_DOMAIN = "uek-ics"
    PROVENANCE = "planzajec.uek.krakow.pl"

    def __init__(
        self,
        tz_name: str = TIMEZONE,
        prodid: str = PRODID,
        uid_domain: str = UID_DOMAIN,
        provenance: str = PROVENANCE,
        calendar_name: Optional[str] = None,
    ) -> None:
        """Initialize the iCalendar transformer.

        Args:
            tz_name: IANA zone the page's wall-clock times belong to.
            prodid: PRODID of the generated calendar.
            uid_domain: Suffix appended to every event UID.
            provenance: Source label put into event descriptions.
            calendar_name: Display name (X-WR-CALNAME); omitted when None.
        """
        super().__init__()
        self._tz_name = tz_name
        self._timezone = ZoneInfo(tz_name)
        self._prodid = prodid
        self._uid_domain = uid_domain
        self._provenance = provenance
        self._calendar_name = calendar_name
        self._calendar: Optional[Calendar] = None

    def _generate_uid(self) -> str:
        """Generate a random unique identifier for an event."""
        return f"{uuid.uuid4()}@{self._uid_domain}"

    def _localize(self, event: ScheduleEvent, clock: str) -> datetime:
        """Combine the event date with a wall-clock time in the local zone.

        Raises:
            EventBuildError: If the date or time is not a real calendar value.
        """
        try:
            naive = datetime.strptime(f"{event.date} {clock}", "%Y-%m-%d %H:%M")
        except ValueError as e:
            raise EventBuildError(
                f"Invalid date/time '{event.date} {clock}' for '{event.title}': {e}",
                event,
            ) from e
        return naive.replace(tzinfo=self._timezone)

    def _describe(self, event: ScheduleEvent) -> str:
        return "\n".join([
            f"Typ: {event.class_type}",
            f"Prowadzący: {event.instructor}",
            f"Sala: {event.room}",
            f"Źródło: {self._provenance}",
        ])

    def _build_event(self, schedule_event: ScheduleEvent, stamp: datetime) -> Event:
        start_datetime = self._localize(schedule_event, schedule_event.start_time)
        # Both ends use the listed date; a range past midnight is not rolled over
        end_datetime = self._localize(schedule_event, schedule_event.end_time)

        ical_event = Event()
        ical_event.add("uid", self._generate_uid())
        ical_event.add("dtstamp", stamp)
        ical_event.add("dtstart", start_datetime)
        ical_event.add("dtend", end_datetime)
        ical_event.add("summary", escape_text(schedule_event.title))
        ical_event.add("description", self._describe(schedule_event))

        if schedule_event.room:
            ical_event.add("location", escape_text(schedule_event.room))

        return ical_event

    def transform(self, events: list[ScheduleEvent]) -> Calendar:
        """Transform schedule events into iCalendar format.

        Args:
            events: List of schedule events to transform.

        Returns:
            iCalendar Calendar object with one VEVENT per usable event,
            in input order.
        """
        self.skipped = []
        self._calendar = Calendar()
        self._calendar.add("version", "2.0")
        self._calendar.add("prodid", self._prodid)
        self._calendar.add("calscale", "GREGORIAN")
        self._calendar.add("method", "PUBLISH")
        if self._calendar_name:
            self._calendar.add("x-wr-calname", self._calendar_name)
            self._calendar.add("x-wr-timezone", self._tz_name)

        stamp = datetime.now(timezone.utc)

        for schedule_event in events:
            try:
                ical_event = self._build_event(schedule_event, stamp)
            except EventBuildError as e:
                self.skipped.append(e)
                continue
            self._calendar.add_component(ical_event)

        return self._calendar

    @property
    def event_count(self) -> int:
        """Number of VEVENTs in the last transformed calendar."""
        if self._calendar is None:
            return 0
        return len(self._calendar.walk("VEVENT"))

    def to_ics(self) -> str:
        """Serialize the calendar to ICS text.

        Properties keep their insertion order so every VEVENT reads
        UID, DTSTAMP, DTSTART, DTEND, SUMMARY, DESCRIPTION, LOCATION.

        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        if self._calendar is None:
            raise RuntimeError("No calendar data. Call transform() first.")

        return self._calendar.to_ical(sorted=False).decode("utf-8")

    def save(self, output_path: str) -> None:
        """Save the calendar to an .ics file.

        Args:
            output_path: Path to the output file.

        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        if self._calendar is None:
            raise RuntimeError("No calendar data. Call transform() first.")

        with open(output_path, "wb") as f:
            f.write(self._calendar.to_ical(sorted=False))
