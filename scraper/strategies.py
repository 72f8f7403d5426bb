"""Extraction strategies turning a parsed schedule page into events.

The UEK planner has changed its markup more than once, so extraction is
heuristic and split into interchangeable strategies. A strategy drops rows
or lines it cannot make sense of instead of failing.
"""

import re
from abc import ABC, abstractmethod
from typing import Optional

from bs4 import BeautifulSoup, Tag

from .models import ScheduleEvent
from .text import clean

DATE = re.compile(r"\d{4}-\d{2}-\d{2}")
TIME_RANGE = re.compile(r"(\d{2}:\d{2})\s*-\s*(\d{2}:\d{2})")
EVENT_LINE = re.compile(
    r"^(\d{4}-\d{2}-\d{2})\s+\S+\s+(\d{2}:\d{2})\s*-\s*(\d{2}:\d{2})\s*(.*)$"
)
FIELD_SEPARATOR = re.compile(r"\s{2,}|\t")

CLASS_TYPES = (
    "wykład",
    "ćwiczenia",
    "ćw.",
    "konwersatorium",
    "lektorat",
    "rezerwacja",
    "seminarium",
    "laboratorium",
    "lab.",
)


class BaseStrategy(ABC):
    """Interface for turning a parsed document into schedule events."""

    name = ""

    @abstractmethod
    def extract(self, soup: BeautifulSoup) -> list[ScheduleEvent]:
        """Extract events from the document.

        Args:
            soup: Parsed schedule page.

        Returns:
            Events in document order. Unusable rows are skipped.
        """
        pass


class TableStrategy(BaseStrategy):
    """Reads table rows laid out as date, hours, subject, type, teacher, room."""

    name = "table"
    MIN_CELLS = 6

    def extract(self, soup: BeautifulSoup) -> list[ScheduleEvent]:
        events: list[ScheduleEvent] = []

        for row in soup.find_all("tr"):
            if not isinstance(row, Tag):
                continue

            cells = [
                clean(cell.get_text(" "))
                for cell in row.find_all(["td", "th"], recursive=False)
            ]
            if len(cells) < self.MIN_CELLS:
                continue

            date, hours, subject, class_type, instructor, room = cells[:6]

            # Header, separator and summary rows carry no date or hour range
            match = TIME_RANGE.search(hours)
            if not match or not DATE.fullmatch(date):
                continue

            events.append(ScheduleEvent(
                date=date,
                start_time=match.group(1),
                end_time=match.group(2),
                title=subject,
                class_type=class_type,
                instructor=instructor,
                room=room,
            ))

        return events


class TextStrategy(BaseStrategy):
    """Reads free text lines such as
    ``2025-10-07 Wt 09:45 - 11:15 Metody inwestowania ćwiczenia  dr X  Paw.A 014``.

    The class type is found by scanning for a known vocabulary word, and
    teacher and room are the last two fields separated by wide gaps. Titles
    containing double spaces will confuse that split.
    """

    name = "text"

    def __init__(self, class_types: tuple[str, ...] = CLASS_TYPES) -> None:
        words = sorted(class_types, key=len, reverse=True)
        self._type_pattern = re.compile(
            r"(?<=\s)(" + "|".join(re.escape(word) for word in words) + r")(?=\s|$)",
            re.IGNORECASE,
        )

    def _split_fields(self, text: str) -> list[str]:
        return [part for part in map(clean, FIELD_SEPARATOR.split(text)) if part]

    def _parse_line(self, line: str) -> Optional[ScheduleEvent]:
        match = EVENT_LINE.match(line)
        if not match:
            return None

        date, start, end, rest = match.groups()
        class_type = ""
        instructor = ""
        room = ""

        type_match = self._type_pattern.search(rest)
        if type_match:
            title = clean(rest[:type_match.start()])
            class_type = type_match.group(1)
            fields = self._split_fields(rest[type_match.end():])
            if len(fields) >= 2:
                instructor, room = fields[-2:]
        else:
            fields = self._split_fields(rest)
            if len(fields) >= 3:
                title = " ".join(fields[:-2])
                instructor, room = fields[-2:]
            else:
                title = clean(rest)

        return ScheduleEvent(
            date=date,
            start_time=start,
            end_time=end,
            title=title,
            class_type=class_type,
            instructor=instructor,
            room=room,
        )

    def extract(self, soup: BeautifulSoup) -> list[ScheduleEvent]:
        root = soup.body or soup
        events: list[ScheduleEvent] = []

        for line in root.get_text().splitlines():
            event = self._parse_line(line.strip())
            if event is not None:
                events.append(event)

        return events


class AutoStrategy(BaseStrategy):
    """Tries each strategy in turn and keeps the first non-empty result."""

    name = "auto"

    def __init__(self, strategies: Optional[list[BaseStrategy]] = None) -> None:
        self._strategies = strategies or [TableStrategy(), TextStrategy()]

    def extract(self, soup: BeautifulSoup) -> list[ScheduleEvent]:
        for strategy in self._strategies:
            events = strategy.extract(soup)
            if events:
                return events
        return []


STRATEGIES: dict[str, type[BaseStrategy]] = {
    TableStrategy.name: TableStrategy,
    TextStrategy.name: TextStrategy,
    AutoStrategy.name: AutoStrategy,
}


def get_strategy(name: str) -> BaseStrategy:
    """Instantiate a registered strategy by name.

    Raises:
        ValueError: If no strategy is registered under that name.
    """
    try:
        return STRATEGIES[name]()
    except KeyError:
        raise ValueError(
            f"Unknown extraction strategy: '{name}'. "
            f"Expected one of: {', '.join(sorted(STRATEGIES))}"
        ) from None
