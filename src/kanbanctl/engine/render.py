# src/kanbanctl/engine/render.py

"""
Rendering helpers for CLI output.

This module is responsible for:
- the workspace tab line and workspace list (ws list),
- the column view of the active workspace (show).

It is presentation-only: it reads BoardState and never mutates it.
"""

from __future__ import annotations

import re
import shutil
import sys
import textwrap

from .model import FALLBACK_WORKSPACE_NAME, BoardState, Workspace


# ---------------------------------------------------------------------
# ANSI / terminal helpers
# ---------------------------------------------------------------------

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[90m"

_COLOR = {
    "todo": "\033[34m",         # blue
    "in-progress": "\033[33m",  # yellow
    "done": "\033[32m",         # green
}

SHORT_ID_LEN = 8


def _supports_color() -> bool:
    """Return True if stdout is a TTY."""
    return sys.stdout.isatty()


def _visible_len(s: str) -> int:
    """Return string length without ANSI colour escapes."""
    return len(_ANSI_RE.sub("", s))


def short_id(task_id: str) -> str:
    return task_id[:SHORT_ID_LEN]


def display_name(ws: Workspace) -> str:
    return ws.name or FALLBACK_WORKSPACE_NAME


# ---------------------------------------------------------------------
# Workspaces
# ---------------------------------------------------------------------

def render_workspace_tabs(state: BoardState, *, color: bool = True) -> None:
    """
    One line listing workspaces in order; the active one is bracketed.
    """
    use_color = color and _supports_color()
    parts: list[str] = []
    for ws in state.ordered_workspaces():
        if ws.id == state.active_workspace_id:
            label = f"[{display_name(ws)}]"
            if use_color:
                label = f"{_BOLD}{label}{_RESET}"
        else:
            label = display_name(ws)
        parts.append(label)
    print("  ".join(parts))


def render_workspaces(state: BoardState, *, color: bool = True) -> None:
    """
    Numbered workspace list:

      * 1) Name (N tasks) id: <id>
    """
    use_color = color and _supports_color()
    for i, ws in enumerate(state.ordered_workspaces(), start=1):
        marker = "*" if ws.id == state.active_workspace_id else " "
        ident = f"id: {ws.id}"
        if use_color:
            ident = f"{_DIM}{ident}{_RESET}"
        print(f"{marker} {i}) {display_name(ws)} ({ws.task_count} tasks) {ident}")


# ---------------------------------------------------------------------
# Board view (show)
# ---------------------------------------------------------------------

def render_board(state: BoardState, *, color: bool = True) -> None:
    """
    Render the active workspace, one box per column.

    Width is capped at 80 characters.
    """
    render_workspace_tabs(state, color=color)
    render_workspace(state.active_workspace, color=color)


def render_workspace(ws: Workspace, *, color: bool = True) -> None:
    width = min(80, shutil.get_terminal_size(fallback=(80, 24)).columns)
    inner_w = max(20, width - 4)  # borders + padding
    use_color = color and _supports_color()

    def box_rule(ch: str = "-") -> None:
        print(f"+{ch * (inner_w + 2)}+")

    def box_line(content: str = "") -> None:
        raw = content
        pad = inner_w - _visible_len(raw)
        if pad > 0:
            raw = raw + (" " * pad)
        print(f"| {raw} |")

    print()
    for column_id in ws.column_order:
        column = ws.columns.get(column_id)
        if column is None:
            continue

        header = f"{column.title} ({len(column.task_ids)})"
        if use_color:
            c = _COLOR.get(column.id, "")
            header = f"{_BOLD}{c}{header}{_RESET}"

        box_rule("=")
        box_line(header)
        box_rule("-")

        tasks = ws.tasks_in(column.id)
        if not tasks:
            empty = "(empty)"
            box_line(f"{_DIM}{empty}{_RESET}" if use_color else empty)

        for n, task in enumerate(tasks, start=1):
            tag = short_id(task.id)
            prefix = f"{n}. "
            suffix = f"  {tag}"
            wrapped = textwrap.wrap(
                task.title,
                width=max(1, inner_w - len(prefix) - len(suffix)),
                break_long_words=True,
                break_on_hyphens=False,
            ) or [""]

            tag_text = f"{_DIM}{tag}{_RESET}" if use_color else tag
            first = wrapped[0]
            gap = inner_w - len(prefix) - len(first) - len(tag)
            box_line(f"{prefix}{first}{' ' * max(2, gap)}{tag_text}")
            for ln in wrapped[1:]:
                box_line(" " * len(prefix) + ln)

    box_rule("=")
    print()
