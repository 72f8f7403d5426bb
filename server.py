#!/usr/bin/env python3
"""HTTP service publishing the UEK schedule as an iCalendar subscription.

Subscribe a calendar client to http://HOST:PORT/calendar.ics, optionally
with ?url=<planner page> to follow a different group.
"""

import logging
from typing import Optional

from flask import Flask, Response, request

from pipeline import Config, SchedulePipeline
from scraper import ScheduleError

logger = logging.getLogger(__name__)

INDEX_PAGE = """<html>
<head><title>UEK ICS Generator</title></head>
<body>
<h3>UEK ICS Generator</h3>
<p>Endpoint: <a href="/calendar.ics">/calendar.ics</a></p>
<p>Optional parameter: <code>?url=&lt;planzajec.uek.krakow.pl page&gt;</code></p>
</body>
</html>
"""


def create_app(config: Optional[Config] = None, pipeline: Optional[SchedulePipeline] = None) -> Flask:
    """Create the Flask application serving the calendar feed."""
    config = config or Config.from_env()
    pipeline = pipeline or SchedulePipeline(config)

    app = Flask(__name__)

    @app.route("/")
    def index():
        return INDEX_PAGE

    @app.route("/calendar.ics")
    def serve_calendar():
        source_url = request.args.get("url") or None

        try:
            ics = pipeline.run(source_url)
        except ScheduleError as e:
            logger.error(f"Calendar generation failed: {e}")
            return Response(str(e), status=e.status_code, mimetype="text/plain")
        except Exception as e:
            logger.exception("Unexpected error while generating calendar")
            return Response(f"Error: {e}", status=500, mimetype="text/plain")

        return Response(
            ics,
            content_type="text/calendar; charset=utf-8",
            headers={"Content-Disposition": 'inline; filename="calendar.ics"'},
        )

    return app


def main() -> None:
    config = Config.from_env()

    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    app = create_app(config)
    logger.info(f"Server running on port {config.port}")
    app.run(host=config.host, port=config.port)


if __name__ == "__main__":
    main()
