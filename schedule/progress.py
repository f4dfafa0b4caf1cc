"""Weighted completion of tasks."""

from catalog.models import Task


def completion(task: Task) -> float:
    """Return the weighted completion of a task as a percentage.
    
    Negative subtask weights count as zero. A task without positive total
    weight is 0% complete.
    """
    total = 0.0
    done = 0.0
    for subtask in task.subtasks:
        weight = max(0.0, subtask.weighting)
        total += weight
        if subtask.completed:
            done += weight
    
    if total <= 0.0:
        return 0.0
    return done / total * 100.0
