"""Immutable configuration for the schedule pipeline.

Settings come from keyword arguments or, through Config.from_env(), from
the environment and an optional .env file.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from scraper.strategies import STRATEGIES

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_URL = "https://planzajec.uek.krakow.pl/index.php?typ=G&id=187131&okres=2"


@dataclass(frozen=True)
class Config:
    """Immutable settings for one pipeline instance.

    Raises:
        ValueError: On construction, if any setting is invalid.
    """

    source_url: str = DEFAULT_SOURCE_URL
    timezone: str = "Europe/Warsaw"
    prodid: str = "-//UEK-ICS//PL"
    uid_domain: str = "uek-ics"
    provenance: str = "planzajec.uek.krakow.pl"
    calendar_name: Optional[str] = None
    strategy: str = "auto"
    fetch_timeout: float = 20.0
    user_agent: str = "UEK-ICS"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: '{self.timezone}'") from None
        if self.strategy not in STRATEGIES:
            raise ValueError(
                f"Unknown extraction strategy: '{self.strategy}'. "
                f"Expected one of: {', '.join(sorted(STRATEGIES))}"
            )
        if self.fetch_timeout <= 0:
            raise ValueError("Fetch timeout must be positive")
        if not 0 < self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: '{self.log_level}'")

    @classmethod
    def from_env(cls, **overrides) -> "Config":
        """Build configuration from the environment and a .env file if present.

        Args:
            **overrides: Settings taking precedence over the environment.
                None values are ignored.

        Returns:
            Validated configuration.

        Raises:
            ValueError: If a setting is invalid.
        """
        load_dotenv()

        env = os.environ
        values = {
            "source_url": env.get("UEK_SOURCE_URL", DEFAULT_SOURCE_URL),
            "timezone": env.get("UEK_TIMEZONE", cls.timezone),
            "prodid": env.get("UEK_PRODID", cls.prodid),
            "uid_domain": env.get("UEK_UID_DOMAIN", cls.uid_domain),
            "provenance": env.get("UEK_PROVENANCE", cls.provenance),
            "calendar_name": env.get("UEK_CALENDAR_NAME") or None,
            "strategy": env.get("UEK_STRATEGY", cls.strategy),
            "user_agent": env.get("UEK_USER_AGENT", cls.user_agent),
            "host": env.get("HOST", cls.host),
            "log_level": env.get("LOG_LEVEL", cls.log_level).upper(),
        }

        try:
            values["fetch_timeout"] = float(env.get("UEK_FETCH_TIMEOUT", cls.fetch_timeout))
            values["port"] = int(env.get("PORT", cls.port))
        except ValueError as e:
            raise ValueError(f"Invalid numeric setting: {e}") from e

        values.update({key: value for key, value in overrides.items() if value is not None})
        config = cls(**values)
        logger.debug(f"Loaded configuration: {config}")
        return config
