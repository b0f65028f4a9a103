# src/kanbanctl/engine/move.py

"""
Move engine.

Computes the layout that results from dropping one task on a destination.

Rules:
- Pure: the input workspace is never modified.
- A move that is a no-op or cannot be resolved returns the *same*
  workspace object. That identity is the only failure signal.
- Only the affected column(s) are rebuilt; everything else is shared.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from .locate import locate
from .model import Column, Destination, Fallback, OverColumn, OverTask, Workspace


# ---------------------------------------------------------------------
# Sequence helpers
# ---------------------------------------------------------------------

def move_item(items: tuple[str, ...], from_index: int, to_index: int) -> tuple[str, ...]:
    """
    Move one element, keeping the relative order of all others.

    `to_index` is interpreted on the sequence *after* removal, which makes
    the result correct for both upward and downward moves.
    """
    out = list(items)
    item = out.pop(from_index)
    out.insert(to_index, item)
    return tuple(out)


def _with_columns(workspace: Workspace, *columns: Column) -> Workspace:
    next_columns = dict(workspace.columns)
    for column in columns:
        next_columns[column.id] = column
    return replace(workspace, columns=next_columns)


# ---------------------------------------------------------------------
# Destination resolution
# ---------------------------------------------------------------------

def _resolve(workspace: Workspace, destination: Destination) -> Optional[tuple[str, int]]:
    """
    Return (column_id, raw_index) or None if the destination is unusable.
    """
    if isinstance(destination, OverColumn):
        column = workspace.columns.get(destination.column_id)
        if column is None:
            return None
        return column.id, len(column.task_ids)

    if isinstance(destination, OverTask):
        column = workspace.columns.get(destination.column_id)
        if column is None:
            return None
        try:
            index = column.task_ids.index(destination.task_id)
        except ValueError:
            return None
        return column.id, index

    if isinstance(destination, Fallback):
        loc = locate(workspace, destination.target_id)
        if loc is None:
            return None
        return loc.column_id, loc.index

    raise TypeError(f"Unsupported destination: {destination!r}")


# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------

def move(workspace: Workspace, active_task_id: str, destination: Destination) -> Workspace:
    """
    Relocate `active_task_id` according to `destination`.

    Same column: array move; dropping on the column itself means "last
    slot", i.e. index len - 1 since the task already sits in the column.
    Cross column: filter out of the source, insert into the destination
    (end of column for OverColumn, the target's index otherwise).
    """
    source_loc = locate(workspace, active_task_id)
    if source_loc is None:
        return workspace

    resolved = _resolve(workspace, destination)
    if resolved is None:
        return workspace
    to_column_id, to_index = resolved
    if to_index < 0:
        return workspace

    source = workspace.columns[source_loc.column_id]

    if source_loc.column_id == to_column_id:
        if isinstance(destination, OverColumn):
            target_index = len(source.task_ids) - 1
        else:
            target_index = to_index

        if target_index < 0 or target_index == source_loc.index:
            return workspace

        reordered = move_item(source.task_ids, source_loc.index, target_index)
        return _with_columns(workspace, replace(source, task_ids=reordered))

    target = workspace.columns[to_column_id]
    next_source = tuple(tid for tid in source.task_ids if tid != active_task_id)

    next_target = list(target.task_ids)
    insert_at = len(next_target) if isinstance(destination, OverColumn) else to_index
    next_target.insert(insert_at, active_task_id)

    return _with_columns(
        workspace,
        replace(source, task_ids=next_source),
        replace(target, task_ids=tuple(next_target)),
    )
