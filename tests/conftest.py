"""Shared fixtures and board builders for the test suite."""

from __future__ import annotations

import itertools
from typing import Callable

import pytest

from kanbanctl.engine.model import (
    COLUMN_TEMPLATE,
    BoardState,
    Column,
    Task,
    Workspace,
)


def sequential_ids(prefix: str = "id") -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


def make_workspace(
    layout: dict[str, list[str]] | None = None,
    *,
    ws_id: str = "ws-1",
    name: str = "Workspace 1",
) -> Workspace:
    """Build a template workspace whose columns hold the given task ids.

    Each task's title is its id in upper case.
    """
    layout = layout or {}
    columns = {
        cid: Column(id=cid, title=title, task_ids=tuple(layout.get(cid, [])))
        for cid, title in COLUMN_TEMPLATE
    }
    tasks = {
        tid: Task(id=tid, title=tid.upper())
        for ids in layout.values()
        for tid in ids
    }
    return Workspace(
        id=ws_id,
        name=name,
        column_order=tuple(cid for cid, _ in COLUMN_TEMPLATE),
        columns=columns,
        tasks=tasks,
    )


def make_board(*workspaces: Workspace, active: str | None = None) -> BoardState:
    order = tuple(ws.id for ws in workspaces)
    return BoardState(
        active_workspace_id=active or order[0],
        workspace_order=order,
        workspaces={ws.id: ws for ws in workspaces},
    )


@pytest.fixture
def ids() -> Callable[[], str]:
    return sequential_ids()


@pytest.fixture
def workspace() -> Workspace:
    return make_workspace({"todo": ["t1", "t2", "t3"], "in-progress": ["t4"]})


@pytest.fixture
def board() -> BoardState:
    return make_board(
        make_workspace({"todo": ["a1"]}, ws_id="A", name="Alpha"),
        make_workspace({"done": ["b1"]}, ws_id="B", name="Beta"),
        make_workspace({}, ws_id="C", name="Gamma"),
        active="B",
    )
