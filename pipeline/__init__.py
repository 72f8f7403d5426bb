"""Pipeline wiring the scraper and transformer together."""

from .config import DEFAULT_SOURCE_URL, Config
from .orchestrator import SchedulePipeline

__all__ = ["Config", "DEFAULT_SOURCE_URL", "SchedulePipeline"]
