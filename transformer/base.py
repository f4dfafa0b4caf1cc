"""Abstract base class for timetable transformers."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from catalog.models import Activity, ResolvedPeriod


class BaseTransformer(ABC):
    """Abstract base class defining the interface for timetable transformers.
    
    Extend this class to turn a resolved window of periods and activities
    into an output format (radial chart payload, iCalendar, etc.).
    """
    
    @abstractmethod
    def transform(
        self,
        periods: list[ResolvedPeriod],
        activities: list[Activity],
        start: datetime,
        end: datetime
    ) -> Any:
        """Transform a resolved window into the target format.
        
        Args:
            periods: Resolved timetable periods intersecting the window.
            activities: Activities intersecting the window.
            start: Window start.
            end: Window end.
            
        Returns:
            Transformed data in the target format.
        """
        pass
    
    @abstractmethod
    def save(self, output_path: str) -> None:
        """Save the transformed data to a file.
        
        Args:
            output_path: Path to the output file.
        """
        pass
