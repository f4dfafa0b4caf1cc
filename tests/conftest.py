"""Shared fixtures for the timetable tests."""

from datetime import date

import pytest

from catalog import ScheduleCatalog, parse_catalog

# 2026-03-02 is a Monday
MONDAY = date(2026, 3, 2)
TUESDAY = date(2026, 3, 3)
WEDNESDAY = date(2026, 3, 4)
FRIDAY = date(2026, 3, 6)
SATURDAY = date(2026, 3, 7)


@pytest.fixture
def raw_catalog() -> dict:
    """Raw definitions in the SchoolPeriods.json shape."""
    return {
        "subjects": {
            "Mathematics": {"teacher": "Ms Hart", "color": "#ff6b6b"},
            "English": {"teacher": "Mr Lowe", "color": "#4D96FF"},
            "Science": {"teacher": "Dr Reid"},
        },
        "period_times": {
            "standard": {
                "period_2": {"start_time": "10:00", "end_time": "11:00"},
                "period_1": {"start_time": "08:40", "end_time": "09:40"},
                "recess": {"start_time": "09:40", "end_time": "10:00"},
                "period_3": {"start_time": "11:00", "end_time": "12:00"},
            },
            "wednesday_year10": {
                "period_1": {"start_time": "09:00", "end_time": "10:00"},
                "sport": {"start_time": "13:00", "end_time": "15:00"},
            },
            "wednesday_year11": {
                "period_1": {"start_time": "08:30", "end_time": "09:30"},
                "study": {"start_time": "14:00", "end_time": "15:00"},
            },
            "late": {
                "period_1": {"start_time": "22:00", "end_time": "23:30"},
            },
        },
        "schedule": {
            "a": {
                "Monday": {
                    "period_template": "standard",
                    "subjects": {
                        "period_1": {"subject": "Mathematics", "room": "B12"},
                        "period_2": {"subject": "English", "room": "C3"},
                        "period_3": {"subject": "Chemistry", "room": "Lab 1"},
                    },
                },
                "Tuesday": {
                    "period_template": "standard",
                    "subjects": {
                        "period_1": {"subject": "Science", "room": "Lab 2"},
                    },
                },
                "Wednesday": {
                    "period_template": "wednesday_base",
                    "subjects": {
                        "period_1": {"subject": "English", "room": "C3"},
                    },
                },
                "Thursday": {"period_template": "missing_template", "subjects": {}},
                "Friday": {"period_template": "late", "subjects": {}},
            },
            "B": {
                "Monday": {
                    "period_template": "standard",
                    "subjects": {"period_3": {"subject": "Mathematics", "room": "B14"}},
                },
            },
        },
    }


@pytest.fixture
def catalog(raw_catalog) -> ScheduleCatalog:
    return parse_catalog(raw_catalog)
