# src/kanbanctl/engine/locate.py

"""
Task location lookup.

Answers "which column, at which position" for a task id.
A missing task is a normal outcome (None), never an error.
"""

from dataclasses import dataclass
from typing import Optional

from .model import Workspace


@dataclass(frozen=True, slots=True)
class TaskLocation:
    column_id: str
    index: int


def locate(workspace: Workspace, task_id: str) -> Optional[TaskLocation]:
    """
    Return the first (column, index) holding `task_id`.

    Columns are scanned in `column_order`, each column top to bottom.
    """
    for column_id in workspace.column_order:
        column = workspace.columns.get(column_id)
        if column is None:
            continue
        try:
            index = column.task_ids.index(task_id)
        except ValueError:
            continue
        return TaskLocation(column_id=column_id, index=index)
    return None
