# src/kanbanctl/engine/model.py

"""
Core domain models.

This module defines the in-memory representations of tasks, columns,
workspaces and the whole board, plus the destination variants consumed
by the move engine.

All models are immutable. Mutating operations elsewhere build new
instances and share unchanged sub-structures by reference; the dicts
held by a model must never be modified in place.

No filesystem access should happen here.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Callable, Final, Union


# ---------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------

COLUMN_TEMPLATE: Final[tuple[tuple[str, str], ...]] = (
    ("todo", "To Do"),
    ("in-progress", "Doing"),
    ("done", "Done"),
)

FIRST_WORKSPACE_NAME: Final[str] = "Workspace 1"
FALLBACK_WORKSPACE_NAME: Final[str] = "Untitled workspace"

IdFactory = Callable[[], str]


def new_id() -> str:
    """Return a fresh unique id."""
    return str(uuid.uuid4())


def auto_workspace_name(position: int) -> str:
    return f"Workspace {position}"


# ---------------------------------------------------------------------
# Task / Column
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Task:
    """
    A single work item.

    The title is stored trimmed and is never empty once persisted.
    """

    id: str
    title: str


@dataclass(frozen=True, slots=True)
class Column:
    """
    An ordered lane of task references.

    `task_ids` is top-first and holds each id at most once.
    """

    id: str
    title: str
    task_ids: tuple[str, ...] = ()


# ---------------------------------------------------------------------
# Workspace
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Workspace:
    """
    An independent board instance.

    Notes:
    - column_order is fixed at creation (no column add/remove).
    - every task in `tasks` is referenced by exactly one column.
    """

    id: str
    name: str
    column_order: tuple[str, ...]
    columns: dict[str, Column]
    tasks: dict[str, Task]

    def tasks_in(self, column_id: str) -> list[Task]:
        """Return the tasks of a column in display order."""
        column = self.columns.get(column_id)
        if column is None:
            return []
        return [self.tasks[tid] for tid in column.task_ids if tid in self.tasks]

    @property
    def task_count(self) -> int:
        return len(self.tasks)


def create_workspace(name: str, *, id_factory: IdFactory = new_id) -> Workspace:
    """
    Build an empty workspace from the fixed column template.
    """
    columns = {cid: Column(id=cid, title=title) for cid, title in COLUMN_TEMPLATE}
    return Workspace(
        id=id_factory(),
        name=name,
        column_order=tuple(cid for cid, _ in COLUMN_TEMPLATE),
        columns=columns,
        tasks={},
    )


# ---------------------------------------------------------------------
# BoardState
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class BoardState:
    """
    The whole persisted board: every workspace plus which one is shown.
    """

    active_workspace_id: str
    workspace_order: tuple[str, ...]
    workspaces: dict[str, Workspace]

    @property
    def active_workspace(self) -> Workspace:
        ws = self.workspaces.get(self.active_workspace_id)
        if ws is None:
            return self.workspaces[self.workspace_order[0]]
        return ws

    def ordered_workspaces(self) -> list[Workspace]:
        return [self.workspaces[wid] for wid in self.workspace_order]


def create_initial_state(*, id_factory: IdFactory = new_id) -> BoardState:
    """
    Fresh board: a single empty workspace, active.
    """
    ws = create_workspace(FIRST_WORKSPACE_NAME, id_factory=id_factory)
    return BoardState(
        active_workspace_id=ws.id,
        workspace_order=(ws.id,),
        workspaces={ws.id: ws},
    )


# ---------------------------------------------------------------------
# Move destinations
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class OverColumn:
    """Dropped on a column's free area: append to that column."""

    column_id: str


@dataclass(frozen=True, slots=True)
class OverTask:
    """Dropped on a task card: take that task's slot in its column."""

    column_id: str
    task_id: str


@dataclass(frozen=True, slots=True)
class Fallback:
    """
    Untyped drop target.

    `target_id` is resolved as if it were a task id.
    """

    target_id: str


Destination = Union[OverColumn, OverTask, Fallback]
