from datetime import datetime, timezone

import pytest

from movieShelf import utils
from movieShelf.catalog.clients import RestClient, SqliteClient, open_client


def test_log_debug_appends(tmp_path):
    utils.log_debug("first")
    utils.log_debug("second")
    lines = (tmp_path / "debug.log").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert lines[1].endswith("] second")


def test_parse_timestamp():
    assert utils.parse_timestamp(None) is None
    naive = utils.parse_timestamp("2026-10-19T08:00:00")
    assert naive.tzinfo is timezone.utc
    assert utils.parse_timestamp("2026-10-19T08:00:00.500000Z").microsecond == 500000


def test_human_date_and_plural(local_tz):
    local_tz("UTC0")
    assert utils.human_date(datetime(2026, 3, 7)) == "Mar 7, 2026"
    assert utils.human_date(None) == ""
    assert utils.plural(0, "review") == "0 reviews"
    assert utils.plural(1, "review") == "1 review"


def test_human_date_uses_local_calendar_day(local_tz):
    late = datetime(2026, 10, 20, 2, 30, tzinfo=timezone.utc)
    local_tz("EST5")
    assert utils.human_date(late) == "Oct 19, 2026"
    local_tz("UTC0")
    assert utils.human_date(late) == "Oct 20, 2026"


def test_split_csv():
    assert utils.split_csv("Drama, , War ") == ["Drama", "War"]
    assert utils.split_csv(["a", " ", "b "]) == ["a", "b"]
    assert utils.split_csv(None) == []


def test_open_client(monkeypatch):
    monkeypatch.setattr("movieShelf.catalog.clients.rest_client.SUPABASE_URL", "https://x.example")
    monkeypatch.setattr("movieShelf.catalog.clients.rest_client.SUPABASE_ANON_KEY", "k")
    assert isinstance(open_client("rest"), RestClient)
    assert isinstance(open_client("sqlite"), SqliteClient)
    with pytest.raises(ValueError):
        open_client("mongo")
