# src/kanbanctl/engine/actions.py

"""
Task mutation actions.

This module contains the task-level operations on a Workspace:
adding and deleting tasks, plus the helper that puts an updated
workspace back into the board.

Design principles:
- Pure functions: every call returns a new value or the input unchanged.
- Unresolvable requests (empty title, unknown column or task) are no-ops.
- A task leaves `tasks` and its column together, never one without the other.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from .locate import locate
from .model import BoardState, IdFactory, Task, Workspace, new_id


# ---------------------------------------------------------------------
# Public actions
# ---------------------------------------------------------------------

def add_task(
    workspace: Workspace,
    column_id: str,
    raw_title: str,
    *,
    id_factory: IdFactory = new_id,
) -> Workspace:
    """
    Create a task at the top of `column_id`.

    The title is trimmed; an empty title or unknown column is a no-op.
    """
    title = (raw_title or "").strip()
    if not title:
        return workspace

    column = workspace.columns.get(column_id)
    if column is None:
        return workspace

    task = Task(id=id_factory(), title=title)

    tasks = dict(workspace.tasks)
    tasks[task.id] = task

    columns = dict(workspace.columns)
    columns[column_id] = replace(column, task_ids=(task.id,) + column.task_ids)

    return replace(workspace, tasks=tasks, columns=columns)


def delete_task(
    workspace: Workspace,
    task_id: str,
    column_id: Optional[str] = None,
) -> Workspace:
    """
    Remove a task from `tasks` and from the column that holds it.

    The owning column is always resolved from the layout, so a stale
    `column_id` from the caller cannot leave an orphan reference behind.
    A `column_id` that names no column at all is still a no-op.
    """
    if task_id not in workspace.tasks:
        return workspace

    if column_id is not None and column_id not in workspace.columns:
        return workspace

    tasks = dict(workspace.tasks)
    del tasks[task_id]

    loc = locate(workspace, task_id)
    if loc is None:
        return replace(workspace, tasks=tasks)

    column = workspace.columns[loc.column_id]
    columns = dict(workspace.columns)
    columns[column.id] = replace(
        column,
        task_ids=tuple(tid for tid in column.task_ids if tid != task_id),
    )

    return replace(workspace, tasks=tasks, columns=columns)


# ---------------------------------------------------------------------
# Board helpers
# ---------------------------------------------------------------------

def update_workspace(state: BoardState, workspace: Workspace) -> BoardState:
    """
    Put `workspace` back into the board under its own id.

    Returns `state` itself when nothing changed (same workspace object)
    or when the workspace is not part of the board.
    """
    current = state.workspaces.get(workspace.id)
    if current is None or current is workspace:
        return state

    workspaces = dict(state.workspaces)
    workspaces[workspace.id] = workspace
    return replace(state, workspaces=workspaces)
