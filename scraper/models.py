"""Data models for schedule events."""

from dataclasses import dataclass, field

DEFAULT_TITLE = "Zajęcia"


@dataclass
class ScheduleEvent:
    """Represents a single dated class as listed on the schedule page.

    Dates and times are kept as the page prints them (``YYYY-MM-DD`` and
    ``HH:MM``); they are resolved to real instants when serialized.
    """

    date: str
    start_time: str
    end_time: str
    title: str = field(default="")
    class_type: str = field(default="")
    instructor: str = field(default="")
    room: str = field(default="")

    def __post_init__(self) -> None:
        if not (self.date and self.start_time and self.end_time):
            raise ValueError("Event needs a date, start time and end time")
        if not self.title:
            self.title = self.class_type or DEFAULT_TITLE
