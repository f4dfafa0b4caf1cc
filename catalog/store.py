"""Read-only loader for the JSON data directory."""

import json
from pathlib import Path
from typing import Any, Union

from loguru import logger

from .models import Activity, ScheduleCatalog, Settings, Task
from .parser import parse_activity, parse_catalog, parse_settings, parse_task


class JsonStore:
    """Loads catalog, activities, tasks and settings from a data directory.
    
    Every loader degrades to an empty or default value when its file is
    missing or does not hold valid JSON.
    """
    
    SCHOOL_PERIODS_FILE = "SchoolPeriods.json"
    ACTIVITIES_FILE = "activities.json"
    TASKS_FILE = "tasks.json"
    SETTINGS_FILE = "settings.json"
    
    def __init__(self, data_dir: Union[str, Path]) -> None:
        """Initialize the store.
        
        Args:
            data_dir: Directory holding the JSON data files.
        """
        self._data_dir = Path(data_dir)
    
    def _read(self, file_name: str) -> Any:
        path = self._data_dir / file_name
        if not path.exists():
            logger.warning(f"Data file not found: {path}")
            return {}
        
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Cannot read {path}: {e}")
            return {}
    
    def _read_list(self, file_name: str, key: str) -> list:
        root = self._read(file_name)
        items = root.get(key) if isinstance(root, dict) else None
        return items if isinstance(items, list) else []
    
    def load_catalog(self) -> ScheduleCatalog:
        return parse_catalog(self._read(self.SCHOOL_PERIODS_FILE))
    
    def load_settings(self) -> Settings:
        return parse_settings(self._read(self.SETTINGS_FILE))
    
    def load_activities(self) -> list[Activity]:
        return [parse_activity(item) for item in self._read_list(self.ACTIVITIES_FILE, "activities")]
    
    def load_tasks(self) -> list[Task]:
        return [parse_task(item) for item in self._read_list(self.TASKS_FILE, "tasks")]
