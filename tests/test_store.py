import json

from catalog import JsonStore
from schedule import completion


def _write(path, payload) -> None:
    path.write_text(json.dumps(payload), encoding="utf-8")


def test_loads_all_files(tmp_path, raw_catalog):
    _write(tmp_path / "SchoolPeriods.json", raw_catalog)
    _write(tmp_path / "settings.json", {"current_week": "b", "year_level": 11})
    _write(tmp_path / "activities.json", {"activities": [{"id": "a1", "title": "Gym"}]})
    _write(tmp_path / "tasks.json", {"tasks": [{"id": "t1", "subtasks": [{"weighting": 2}]}]})
    
    store = JsonStore(tmp_path)
    assert set(store.load_catalog().weeks) == {"A", "B"}
    assert store.load_settings().current_week == "B"
    assert [a.title for a in store.load_activities()] == ["Gym"]
    assert store.load_tasks()[0].subtasks[0].weighting == 2.0


def test_missing_files_degrade_to_defaults(tmp_path):
    store = JsonStore(tmp_path / "nowhere")
    assert store.load_catalog().weeks == {}
    assert store.load_settings().year_level == 10
    assert store.load_activities() == []
    assert store.load_tasks() == []


def test_invalid_json_degrades(tmp_path):
    (tmp_path / "SchoolPeriods.json").write_text("{not json", encoding="utf-8")
    _write(tmp_path / "activities.json", {"activities": "oops"})
    _write(tmp_path / "tasks.json", [1, 2, 3])
    
    store = JsonStore(tmp_path)
    assert store.load_catalog().subjects == {}
    assert store.load_activities() == []
    assert store.load_tasks() == []


def test_non_finite_numbers_in_json_use_defaults(tmp_path):
    (tmp_path / "settings.json").write_text('{"current_week": "B", "year_level": NaN}', encoding="utf-8")
    (tmp_path / "tasks.json").write_text(
        '{"tasks": [{"id": "t1", "subtasks": [{"weighting": Infinity, "completed": true}, {"weighting": 1}]}]}',
        encoding="utf-8",
    )
    
    store = JsonStore(tmp_path)
    assert store.load_settings().year_level == 10
    assert completion(store.load_tasks()[0]) == 50
