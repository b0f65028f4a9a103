# src/kanbanctl/engine/parse.py

"""
Stored board decoder.

Turns the raw mapping read from storage into a BoardState.

Layout (camelCase keys, as written by `ops.dump_state`):

    activeWorkspaceId: <id>
    workspaceOrder: [<id>, ...]
    workspaces:
      <id>:
        id, name, columnOrder: [...]
        columns: {<cid>: {id, title, taskIds: [...]}}
        tasks:   {<tid>: {id, title}}

This module performs *structural* decoding only. Board invariants are
checked by `validate.validate_board`.
"""

from dataclasses import dataclass
from typing import Any, Final, Mapping

import yaml

from .model import BoardState, Column, Task, Workspace


KEY_ACTIVE: Final[str] = "activeWorkspaceId"
KEY_ORDER: Final[str] = "workspaceOrder"
KEY_WORKSPACES: Final[str] = "workspaces"


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParseError(Exception):
    """
    Raised when stored data is syntactically or structurally invalid.

    `path` points inside the document (e.g. "workspaces.abc.columns").
    """

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------

def load_document(text: str) -> Any:
    """Parse raw stored text (YAML, so JSON is accepted too)."""
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ParseError("<document>", f"Invalid YAML: {e}") from e


def check_shape(data: Any) -> None:
    """
    Top-level shape check applied before any stored board is trusted.

    Rejects a missing/non-string active id, an empty or non-string
    workspace order, a non-mapping `workspaces`, and ordered ids without
    a workspace entry.
    """
    if not isinstance(data, dict):
        raise ParseError("<document>", "Root must be a mapping")

    active = data.get(KEY_ACTIVE)
    if not isinstance(active, str) or not active:
        raise ParseError(KEY_ACTIVE, "Must be a non-empty string")

    order = data.get(KEY_ORDER)
    if not isinstance(order, list) or not order:
        raise ParseError(KEY_ORDER, "Must be a non-empty list")

    workspaces = data.get(KEY_WORKSPACES)
    if not isinstance(workspaces, dict):
        raise ParseError(KEY_WORKSPACES, "Must be a mapping")

    for i, wid in enumerate(order):
        if not isinstance(wid, str):
            raise ParseError(f"{KEY_ORDER}[{i}]", "Workspace id must be a string")
        if not isinstance(workspaces.get(wid), dict):
            raise ParseError(f"{KEY_WORKSPACES}.{wid}", "Missing workspace entry")


def parse_state(data: Any) -> BoardState:
    """
    Decode a stored board.

    - An active id that is not part of the order is corrected to the
      first entry of the order instead of rejecting the board.
    - Workspaces not listed in the order are dropped.
    """
    check_shape(data)

    order = tuple(data[KEY_ORDER])
    raw_workspaces: Mapping[str, Any] = data[KEY_WORKSPACES]

    active = data[KEY_ACTIVE]
    if active not in order:
        active = order[0]

    workspaces: dict[str, Workspace] = {}
    for wid in order:
        workspaces[wid] = _parse_workspace(f"{KEY_WORKSPACES}.{wid}", raw_workspaces[wid])

    return BoardState(
        active_workspace_id=active,
        workspace_order=order,
        workspaces=workspaces,
    )


# ---------------------------------------------------------------------
# Workspace
# ---------------------------------------------------------------------

def _parse_workspace(path: str, raw: Mapping[str, Any]) -> Workspace:
    ws_id = _require_str_field(path, raw, "id")
    name = _require_str_field(path, raw, "name", allow_empty=True)
    column_order = _require_str_list(path, raw, "columnOrder")

    raw_columns = _require_mapping(path, raw, "columns")
    columns: dict[str, Column] = {}
    for key, item in raw_columns.items():
        cpath = f"{path}.columns.{key}"
        if not isinstance(item, dict):
            raise ParseError(cpath, "Column must be a mapping")
        columns[str(key)] = Column(
            id=_require_str_field(cpath, item, "id"),
            title=_require_str_field(cpath, item, "title", allow_empty=True),
            task_ids=_require_str_list(cpath, item, "taskIds"),
        )

    raw_tasks = _require_mapping(path, raw, "tasks")
    tasks: dict[str, Task] = {}
    for key, item in raw_tasks.items():
        tpath = f"{path}.tasks.{key}"
        if not isinstance(item, dict):
            raise ParseError(tpath, "Task must be a mapping")
        tasks[str(key)] = Task(
            id=_require_str_field(tpath, item, "id"),
            title=_require_str_field(tpath, item, "title"),
        )

    return Workspace(
        id=ws_id,
        name=name,
        column_order=column_order,
        columns=columns,
        tasks=tasks,
    )


# ---------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------

def _require_str_field(
    path: str,
    data: Mapping[str, Any],
    key: str,
    *,
    allow_empty: bool = False,
) -> str:
    if key not in data:
        raise ParseError(path, f"Missing required key: {key}")

    value = data[key]
    if not isinstance(value, str):
        raise ParseError(path, f"Key '{key}' must be a string")

    if not allow_empty and not value.strip():
        raise ParseError(path, f"Key '{key}' must be a non-empty string")

    return value


def _require_str_list(path: str, data: Mapping[str, Any], key: str) -> tuple[str, ...]:
    value = data.get(key)
    if not isinstance(value, list):
        raise ParseError(path, f"Key '{key}' must be a list")

    for i, item in enumerate(value):
        if not isinstance(item, str):
            raise ParseError(f"{path}.{key}[{i}]", "Must be a string")

    return tuple(value)


def _require_mapping(path: str, data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ParseError(path, f"Key '{key}' must be a mapping")
    return value
