from datetime import datetime, timedelta

import pytest
from icalendar import Calendar

from catalog import Activity
from schedule import periods_in_window
from transformer import ICalTransformer

START = datetime(2026, 3, 2, 8, 0)
END = datetime(2026, 3, 2, 20, 0)


@pytest.fixture
def window(catalog):
    periods = periods_in_window(catalog, "A", 10, START, END)
    activities = [
        Activity(
            id="act-1",
            title="Band practice",
            description="Bring sheet music",
            start=datetime(2026, 3, 2, 15, 30),
            end=datetime(2026, 3, 2, 17, 0),
        ),
        Activity(id="act-2", title="Undated"),
    ]
    return periods, activities


def _events(calendar: Calendar) -> list:
    return [component for component in calendar.walk("VEVENT")]


def test_transform_creates_one_event_per_instance(window):
    periods, activities = window
    calendar = ICalTransformer().transform(periods, activities, START, END)
    events = _events(calendar)
    assert len(events) == len(periods) + 1
    
    summaries = [str(event.get("summary")) for event in events]
    assert "[period_1] Mathematics" in summaries
    assert "RECESS" in summaries
    assert "Band practice" in summaries


def test_period_event_fields(window):
    periods, activities = window
    calendar = ICalTransformer().transform(periods, activities, START, END)
    maths = next(e for e in _events(calendar) if str(e.get("summary")) == "[period_1] Mathematics")
    assert maths.decoded("dtstart") == datetime(2026, 3, 2, 8, 40)
    assert maths.decoded("dtend") == datetime(2026, 3, 2, 9, 40)
    assert str(maths.get("location")) == "B12"
    assert str(maths.get("description")) == "Ms Hart"


def test_special_periods_can_be_excluded(window):
    periods, activities = window
    calendar = ICalTransformer(include_special=False).transform(periods, [], START, END)
    assert len(_events(calendar)) == sum(not p.is_special for p in periods)


def test_uids_are_stable_and_unique(window):
    periods, activities = window
    first = [str(e.get("uid")) for e in _events(ICalTransformer().transform(periods, activities, START, END))]
    second = [str(e.get("uid")) for e in _events(ICalTransformer().transform(periods, activities, START, END))]
    assert first == second
    assert len(set(first)) == len(first)


def test_save_requires_transform(tmp_path):
    with pytest.raises(RuntimeError):
        ICalTransformer().save(str(tmp_path / "out.ics"))


def test_save_writes_ics(tmp_path, window):
    periods, activities = window
    transformer = ICalTransformer()
    transformer.transform(periods, activities, START, START + timedelta(hours=12))
    output = tmp_path / "out.ics"
    transformer.save(str(output))
    
    parsed = Calendar.from_ical(output.read_bytes())
    assert len(_events(parsed)) == len(periods) + 1
