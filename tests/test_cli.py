import json
import sys

import pytest
from icalendar import Calendar

import timetable2iCal


@pytest.fixture
def data_dir(tmp_path, raw_catalog):
    (tmp_path / "SchoolPeriods.json").write_text(json.dumps(raw_catalog), encoding="utf-8")
    (tmp_path / "settings.json").write_text(json.dumps({"current_week": "A", "year_level": 10}), encoding="utf-8")
    (tmp_path / "activities.json").write_text(json.dumps({"activities": [{
        "id": "a1",
        "title": "Band practice",
        "start_time": "2026-03-02T15:30:00",
        "end_time": "2026-03-02T17:00:00",
    }]}), encoding="utf-8")
    (tmp_path / "tasks.json").write_text(json.dumps({"tasks": [{
        "id": "t1",
        "title": "Essay",
        "subtasks": [{"weighting": 2, "completed": True}, {"weighting": 2}],
    }]}), encoding="utf-8")
    return tmp_path


def run(monkeypatch, *args: str) -> None:
    monkeypatch.setattr(sys, "argv", ["timetable2iCal.py", *args])
    timetable2iCal.main()


def test_exports_window(monkeypatch, capsys, data_dir, tmp_path):
    output = tmp_path / "week"
    arcs = tmp_path / "donut.json"
    run(
        monkeypatch,
        "--data-dir", str(data_dir),
        "--from", "2026-03-02T09:00",
        "-o", str(output),
        "--arcs", str(arcs),
        "--mode", "combined",
        "--tasks",
    )
    
    out = capsys.readouterr().out
    assert "Found 4 periods and 1 activities (week A, year 10)." in out
    assert "Essay: 50% Completed" in out
    
    calendar = Calendar.from_ical((tmp_path / "week.ics").read_bytes())
    assert len(list(calendar.walk("VEVENT"))) == 5
    
    payload = json.loads(arcs.read_text())
    assert [arc["category"] for arc in payload["arcs"]] == ["Timetable"] * 4 + ["Activity"]


def test_week_override_from_command_line(monkeypatch, capsys, data_dir, tmp_path):
    run(
        monkeypatch,
        "--data-dir", str(data_dir),
        "--week", "b",
        "--from", "2026-03-02T09:00",
        "--hours", "3",
        "-o", str(tmp_path / "b.ics"),
    )
    assert "Found 4 periods and 0 activities (week B, year 10)." in capsys.readouterr().out


def test_rejects_non_positive_hours(monkeypatch, data_dir):
    with pytest.raises(SystemExit) as exc:
        run(monkeypatch, "--data-dir", str(data_dir), "--hours", "0")
    assert exc.value.code == 2


def test_window_start_with_utc_offset(monkeypatch, capsys, data_dir, tmp_path):
    run(
        monkeypatch,
        "--data-dir", str(data_dir),
        "--from", "2026-03-02T09:00:00+00:00",
        "-o", str(tmp_path / "offset.ics"),
    )
    out = capsys.readouterr().out
    assert "Timetable saved to:" in out
    assert (tmp_path / "offset.ics").exists()


def test_parse_datetime_drops_offset():
    value = timetable2iCal.parse_datetime("2026-03-02T09:00:00+00:00")
    assert value.tzinfo is None
