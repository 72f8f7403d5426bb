import logging

import pytest
import requests

from pipeline import DEFAULT_SOURCE_URL, Config, SchedulePipeline
from scraper import DocumentParseError, ExtractionEmptyError, UpstreamFetchError


def test_run_uses_configured_source(make_session, table_page):
    session = make_session(table_page)
    pipeline = SchedulePipeline(Config(fetch_timeout=12, user_agent="agent"), session=session)

    ics = pipeline.run()

    assert ics.count("BEGIN:VEVENT") == 2
    assert session.calls[0]["url"] == DEFAULT_SOURCE_URL
    assert session.calls[0]["timeout"] == 12
    assert session.calls[0]["headers"] == {"User-Agent": "agent"}


def test_run_with_url_override(make_session, table_page):
    session = make_session(table_page)
    pipeline = SchedulePipeline(Config(), session=session)

    pipeline.run("https://planzajec.example/other")

    assert session.calls[0]["url"] == "https://planzajec.example/other"


def test_configured_strategy_is_used(make_session, text_page):
    with pytest.raises(ExtractionEmptyError):
        SchedulePipeline(Config(strategy="table"), session=make_session(text_page)).run()

    ics = SchedulePipeline(Config(strategy="text"), session=make_session(text_page)).run()
    assert ics.count("BEGIN:VEVENT") == 4


def test_upstream_failure_propagates(make_session):
    pipeline = SchedulePipeline(Config(), session=make_session(status_code=500))

    with pytest.raises(UpstreamFetchError):
        pipeline.run()


def test_upstream_timeout_propagates(make_session):
    session = make_session(error=requests.ConnectTimeout("timed out"))
    pipeline = SchedulePipeline(Config(), session=session)

    with pytest.raises(UpstreamFetchError) as excinfo:
        pipeline.run()

    assert excinfo.value.timed_out


def test_empty_page_is_an_error(make_session, empty_page):
    pipeline = SchedulePipeline(Config(), session=make_session(empty_page))

    with pytest.raises(ExtractionEmptyError):
        pipeline.run()


def test_all_events_invalid_is_an_error():
    document = (
        "<table><tr><td>2025-13-40</td><td>09:45 - 11:15</td><td>A</td>"
        "<td>wykład</td><td>dr X</td><td>Paw.A 1</td></tr></table>"
    )

    with pytest.raises(ExtractionEmptyError, match="invalid dates"):
        SchedulePipeline(Config()).run_document(document)


def test_invalid_event_is_logged_and_dropped(caplog):
    document = (
        "<table>"
        "<tr><td>2025-13-40</td><td>09:45 - 11:15</td><td>Zepsute</td>"
        "<td>wykład</td><td>dr X</td><td>Paw.A 1</td></tr>"
        "<tr><td>2025-10-07</td><td>09:45 - 11:15</td><td>Metody inwestowania</td>"
        "<td>ćwiczenia</td><td>dr Oleksij Kelebaj</td><td>Paw.A 014</td></tr>"
        "</table>"
    )

    with caplog.at_level(logging.WARNING, logger="pipeline.orchestrator"):
        ics = SchedulePipeline(Config()).run_document(document)

    assert ics.count("BEGIN:VEVENT") == 1
    assert "SUMMARY:Metody inwestowania" in ics
    assert "Zepsute" not in ics
    assert any("2025-13-40" in record.getMessage() for record in caplog.records)


def test_run_document_rejects_non_text():
    with pytest.raises(DocumentParseError):
        SchedulePipeline(Config()).run_document(None)


def test_summary_rows_do_not_hide_text_events():
    document = (
        "<table><tr><td>Razem godzin</td><td>08:00 - 20:00</td><td>12</td>"
        "<td></td><td></td><td></td></tr></table>\n"
        "<pre>2025-10-07 Wt 09:45 - 11:15 Metody inwestowania ćwiczenia  dr X  Paw.A 014</pre>"
    )

    ics = SchedulePipeline(Config()).run_document(document)

    assert ics.count("BEGIN:VEVENT") == 1
    assert "DTSTART;TZID=Europe/Warsaw:20251007T094500" in ics
    assert "Razem godzin" not in ics
