"""Scraper module for extracting schedule data from the UEK planner."""

from .exceptions import (
    DocumentParseError,
    EventBuildError,
    ExtractionEmptyError,
    ScheduleError,
    UpstreamFetchError,
)
from .models import ScheduleEvent
from .scraper import ScheduleScraper
from .strategies import (
    STRATEGIES,
    AutoStrategy,
    BaseStrategy,
    TableStrategy,
    TextStrategy,
    get_strategy,
)
from .text import clean

__all__ = [
    "AutoStrategy",
    "BaseStrategy",
    "DocumentParseError",
    "EventBuildError",
    "ExtractionEmptyError",
    "STRATEGIES",
    "ScheduleError",
    "ScheduleEvent",
    "ScheduleScraper",
    "TableStrategy",
    "TextStrategy",
    "UpstreamFetchError",
    "clean",
    "get_strategy",
]
