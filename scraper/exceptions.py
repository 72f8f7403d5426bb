"""Errors raised by the schedule pipeline."""


class ScheduleError(Exception):
    """Base class for pipeline failures surfaced to the caller."""

    status_code = 500


class UpstreamFetchError(ScheduleError):
    """The schedule page could not be retrieved."""

    status_code = 502

    def __init__(self, message: str, url: str, timed_out: bool = False) -> None:
        super().__init__(message)
        self.url = url
        self.timed_out = timed_out
        if timed_out:
            self.status_code = 504


class DocumentParseError(ScheduleError):
    """The fetched body could not be parsed as markup."""

    status_code = 503


class ExtractionEmptyError(ScheduleError):
    """No events matched any extraction rule, usually a layout change upstream."""

    status_code = 503


class EventBuildError(ValueError):
    """A single event could not be turned into calendar timestamps.

    Never propagated: the serializer collects these and drops the event.
    """

    def __init__(self, message: str, event) -> None:
        super().__init__(message)
        self.event = event
