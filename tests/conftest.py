import pytest

from scraper.models import ScheduleEvent

TABLE_PAGE = """<html>
<head><meta charset="utf-8"><title>Plan zajęć</title></head>
<body>
<table class="plan">
<tr><th>Termin</th><th>Godziny</th><th>Przedmiot</th><th>Typ</th><th>Nauczyciel</th><th>Sala</th></tr>
<tr>
  <td>2025-10-07</td>
  <td>09:45 - 11:15 (2g.)</td>
  <td>Metody
      inwestowania</td>
  <td>ćwiczenia</td>
  <td>dr Oleksij Kelebaj</td>
  <td>Paw.A 014</td>
</tr>
<tr><td>2025-10-08</td><td>11:30-13:00</td><td>Ekonometria</td><td>wykład</td><td>prof. Jan Nowak</td><td>Paw.C 201</td></tr>
<tr><td colspan="6">Przerwa świąteczna</td></tr>
<tr><td>2025-10-09</td><td>odwołane</td><td>Statystyka</td><td>wykład</td><td>dr Ewa Lis</td><td>Paw.B 3</td></tr>
</table>
</body>
</html>
""".encode("utf-8")

TEXT_PAGE = """<html>
<head><meta charset="utf-8"></head>
<body>
<p>Plan zajęć grupy KrDUIs2012</p>
<pre>
2025-10-07 Wt 09:45 - 11:15 Metody inwestowania ćwiczenia  dr Oleksij Kelebaj  Paw.A 014
2025-10-08 Śr 11:30 - 13:00 Ekonometria wykład  prof. Jan Nowak  Paw.C 201
2025-10-09 Cz 08:00 - 09:30 Język angielski lektorat
Kontakt z dziekanatem od 2025-10-10
2025-10-10 Pt 15:00 - 16:30 Projekt zespołowy  mgr Anna Kowalska  Paw.D 12
</pre>
</body>
</html>
""".encode("utf-8")

EMPTY_PAGE = b"<html><body><p>Brak zaj\xc4\x99\xc4\x87</p></body></html>"


class FakeResponse:
    def __init__(self, content: bytes = b"", status_code: int = 200) -> None:
        self.content = content
        self.status_code = status_code

    @property
    def ok(self) -> bool:
        return self.status_code < 400


class FakeSession:
    """Stands in for requests.Session, recording every GET."""

    def __init__(self, response=None, error=None) -> None:
        self.response = response or FakeResponse()
        self.error = error
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def table_page() -> bytes:
    return TABLE_PAGE


@pytest.fixture
def text_page() -> bytes:
    return TEXT_PAGE


@pytest.fixture
def empty_page() -> bytes:
    return EMPTY_PAGE


@pytest.fixture
def sample_event() -> ScheduleEvent:
    return ScheduleEvent(
        date="2025-10-07",
        start_time="09:45",
        end_time="11:15",
        title="Metody inwestowania",
        class_type="ćwiczenia",
        instructor="dr Oleksij Kelebaj",
        room="Paw.A 014",
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "UEK_SOURCE_URL", "UEK_TIMEZONE", "UEK_PRODID", "UEK_UID_DOMAIN",
        "UEK_PROVENANCE", "UEK_CALENDAR_NAME", "UEK_STRATEGY",
        "UEK_FETCH_TIMEOUT", "UEK_USER_AGENT", "HOST", "PORT", "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_session():
    def factory(content: bytes = b"", status_code: int = 200, error=None) -> FakeSession:
        return FakeSession(FakeResponse(content, status_code), error)
    return factory
