# src/kanbanctl/engine/ops.py

"""
Board serialisation.

This module renders BoardState objects into the stored document layout
read back by `parse.parse_state`.

No parsing is performed here.
"""

from __future__ import annotations

from typing import Any

import yaml

from .model import BoardState, Workspace
from .parse import KEY_ACTIVE, KEY_ORDER, KEY_WORKSPACES


# ---------------------------------------------------------------------
# YAML dumper
# ---------------------------------------------------------------------

# Characters YAML folds or normalises inside plain and single-quoted scalars.
_LINE_BREAKS = frozenset("\n\r\x85\u2028\u2029")


class _BoardDumper(yaml.SafeDumper):
    """SafeDumper that writes multi-line strings double-quoted (escaped)."""


def _represent_str(dumper: yaml.SafeDumper, value: str) -> yaml.ScalarNode:
    style = "\"" if _LINE_BREAKS.intersection(value) else None
    return dumper.represent_scalar("tag:yaml.org,2002:str", value, style=style)


_BoardDumper.add_representer(str, _represent_str)


# ---------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------

def dump_state(state: BoardState) -> dict[str, Any]:
    """
    Convert a board into plain dicts/lists, keeping all orderings.
    """
    return {
        KEY_ACTIVE: state.active_workspace_id,
        KEY_ORDER: list(state.workspace_order),
        KEY_WORKSPACES: {
            wid: _dump_workspace(ws) for wid, ws in state.workspaces.items()
        },
    }


def render_document(state: BoardState) -> str:
    return yaml.dump(
        dump_state(state),
        Dumper=_BoardDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )


def _dump_workspace(ws: Workspace) -> dict[str, Any]:
    return {
        "id": ws.id,
        "name": ws.name,
        "columnOrder": list(ws.column_order),
        "columns": {
            cid: {"id": c.id, "title": c.title, "taskIds": list(c.task_ids)}
            for cid, c in ws.columns.items()
        },
        "tasks": {
            tid: {"id": t.id, "title": t.title}
            for tid, t in ws.tasks.items()
        },
    }
