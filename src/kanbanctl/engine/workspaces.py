# src/kanbanctl/engine/workspaces.py

"""
Workspace lifecycle operations on a BoardState.

create / rename / delete / switch. Each returns a new BoardState, or the
input state itself when the request is a no-op. At least one workspace
always exists.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from .model import (
    FALLBACK_WORKSPACE_NAME,
    BoardState,
    IdFactory,
    auto_workspace_name,
    create_workspace as _new_workspace,
    new_id,
)


def normalize_name(raw_name: Optional[str]) -> str:
    """Trim a user-entered name; blank names become the fallback name."""
    return (raw_name or "").strip() or FALLBACK_WORKSPACE_NAME


# ---------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------

def create_workspace(
    state: BoardState,
    name: Optional[str] = None,
    *,
    id_factory: IdFactory = new_id,
) -> BoardState:
    """
    Append a new empty workspace and make it active.

    Without a name the workspace is called "Workspace N", N being its
    position in the order.
    """
    if name is None:
        name = auto_workspace_name(len(state.workspace_order) + 1)
    else:
        name = normalize_name(name)

    ws = _new_workspace(name, id_factory=id_factory)

    workspaces = dict(state.workspaces)
    workspaces[ws.id] = ws

    return BoardState(
        active_workspace_id=ws.id,
        workspace_order=state.workspace_order + (ws.id,),
        workspaces=workspaces,
    )


def rename_workspace(state: BoardState, workspace_id: str, raw_name: Optional[str]) -> BoardState:
    target = state.workspaces.get(workspace_id)
    if target is None:
        return state

    name = normalize_name(raw_name)
    if name == target.name:
        return state

    workspaces = dict(state.workspaces)
    workspaces[workspace_id] = replace(target, name=name)
    return replace(state, workspaces=workspaces)


def delete_workspace(state: BoardState, workspace_id: str) -> BoardState:
    """
    Remove a workspace unless it is the last one.

    If the active workspace is removed, activation steps left to its
    predecessor, clamped to the start of the order.
    """
    if len(state.workspace_order) <= 1:
        return state
    if workspace_id not in state.workspaces:
        return state

    prev_index = state.workspace_order.index(workspace_id)
    next_order = tuple(wid for wid in state.workspace_order if wid != workspace_id)

    workspaces = dict(state.workspaces)
    del workspaces[workspace_id]

    active_id = state.active_workspace_id
    if active_id == workspace_id:
        active_id = next_order[max(0, prev_index - 1)]

    return BoardState(
        active_workspace_id=active_id,
        workspace_order=next_order,
        workspaces=workspaces,
    )


def switch_workspace(state: BoardState, workspace_id: str) -> BoardState:
    if workspace_id not in state.workspaces:
        return state
    if workspace_id == state.active_workspace_id:
        return state
    return replace(state, active_workspace_id=workspace_id)
