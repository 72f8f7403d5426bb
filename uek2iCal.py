#!/usr/bin/env python3
"""UEK schedule to iCalendar converter.

ETL pipeline that scrapes class schedule data from the UEK planner
(planzajec.uek.krakow.pl) and generates an iCalendar (.ics) file.
"""

import argparse
import logging
import sys
from pathlib import Path

from pipeline import Config, SchedulePipeline
from scraper import STRATEGIES, ScheduleError

logger = logging.getLogger(__name__)


def positive_float(value: str) -> float:
    """Parse a strictly positive number of seconds."""
    try:
        seconds = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid number: '{value}'.")
    if seconds <= 0:
        raise argparse.ArgumentTypeError("Timeout must be positive.")
    return seconds


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert a UEK class schedule to iCalendar format.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 uek2iCal.py
  python3 uek2iCal.py --url "https://planzajec.uek.krakow.pl/index.php?typ=G&id=187131&okres=2" -o plan.ics
  python3 uek2iCal.py --input saved_page.html --strategy text -o -
        """
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--url",
        default=None,
        help="URL of the schedule page to scrape (default: UEK_SOURCE_URL or the built-in group page)"
    )
    source.add_argument(
        "--input",
        default=None,
        help="Read a saved schedule page from this file instead of fetching it"
    )

    parser.add_argument(
        "-o", "--output",
        default="schedule.ics",
        help="Output file path, or '-' for stdout (default: schedule.ics)"
    )

    parser.add_argument(
        "--strategy",
        choices=sorted(STRATEGIES),
        default=None,
        help="Extraction strategy (default: auto)"
    )

    parser.add_argument(
        "--timeout",
        type=positive_float,
        default=None,
        help="Seconds to wait for the schedule page (default: 20)"
    )

    parser.add_argument(
        "--timezone",
        default=None,
        help="IANA timezone of the schedule times (default: Europe/Warsaw)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    return parser


def main(argv=None) -> int:
    """Main entry point for the ETL pipeline."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    output_path = args.output
    if output_path != "-" and not output_path.lower().endswith(".ics"):
        output_path = f"{output_path}.ics"

    try:
        config = Config.from_env(
            source_url=args.url,
            strategy=args.strategy,
            fetch_timeout=args.timeout,
            timezone=args.timezone,
        )
        pipeline = SchedulePipeline(config)

        if args.input:
            ics = pipeline.run_document(Path(args.input).read_bytes())
        else:
            ics = pipeline.run()

        if output_path == "-":
            sys.stdout.write(ics)
        else:
            Path(output_path).write_bytes(ics.encode("utf-8"))
            logger.info(f"Schedule saved to: {output_path}")

    except KeyboardInterrupt:
        logger.error("Operation cancelled by user.")
        return 130
    except (ScheduleError, ValueError, OSError) as e:
        logger.error(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
