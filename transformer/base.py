"""Abstract base class for schedule transformers."""

from abc import ABC, abstractmethod
from typing import Any

from scraper.exceptions import EventBuildError
from scraper.models import ScheduleEvent


class BaseTransformer(ABC):
    """Abstract base class defining the interface for schedule transformers.

    Extend this class to implement transformers for different output formats
    (e.g., iCalendar, JSON, etc.).
    """

    def __init__(self) -> None:
        self.skipped: list[EventBuildError] = []

    @abstractmethod
    def transform(self, events: list[ScheduleEvent]) -> Any:
        """Transform schedule events into the target format.

        Events that cannot be converted are left out and recorded in
        ``skipped``; they never abort the whole batch.

        Args:
            events: List of schedule events to transform, in output order.

        Returns:
            Transformed data in the target format.
        """
        pass

    @abstractmethod
    def save(self, output_path: str) -> None:
        """Save the transformed data to a file.

        Args:
            output_path: Path to the output file.
        """
        pass
