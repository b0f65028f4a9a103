# src/kanbanctl/cli.py

"""
Command-line interface for kanbanctl.

This module:
- defines argument parsing and subcommands,
- turns user references (id prefixes, names, positions) into ids,
- delegates every board change to the StateStore.

KISS rule: keep commands small and predictable.
"""

import argparse
import sys
from pathlib import Path

from loguru import logger

from kanbanctl.config import (
    DEFAULT_LOG_LEVEL,
    VALID_LOG_LEVELS,
    get_color,
    get_log_level,
    load_config,
    resolve_home,
)
from kanbanctl.engine.locate import locate
from kanbanctl.engine.model import Destination, Fallback, OverColumn, OverTask, Workspace
from kanbanctl.engine.render import render_board, render_workspaces, short_id
from kanbanctl.engine.storage import BoardStorage, FileStore
from kanbanctl.engine.store import StateStore
from kanbanctl.engine.validate import ValidationError


# ---------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------

def _configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure loguru logger with the specified level."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{module}</cyan>:<cyan>{line}</cyan> - "
            "{message}"
        ),
    )


# ---------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kanbanctl")
    parser.add_argument(
        "--home",
        type=str,
        default=None,
        help="Data directory (default: $KANBANCTL_HOME or ~/.kanbanctl)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=sorted(VALID_LOG_LEVELS),
        default=None,
        help="Log level (default: WARNING, or log_level from config.yaml)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # ------------------------------------------------------------------
    # Board
    # ------------------------------------------------------------------

    p_show = sub.add_parser("show", help="Show the active workspace")
    p_show.add_argument("--no-color", action="store_true", help="Disable coloured output")
    p_show.set_defaults(func=cmd_show)

    p_add = sub.add_parser("add", help="Add a task at the top of a column")
    p_add.add_argument("column", help="Column id or title (todo, doing, done)")
    p_add.add_argument("title", nargs="+", help="Task title")
    p_add.set_defaults(func=cmd_add)

    p_rm = sub.add_parser("rm", help="Delete a task")
    p_rm.add_argument("task", help="Task id or unique id prefix")
    p_rm.set_defaults(func=cmd_rm)

    p_mv = sub.add_parser("mv", help="Move a task")
    p_mv.add_argument("task", help="Task id or unique id prefix")
    target = p_mv.add_mutually_exclusive_group(required=True)
    target.add_argument("--column", help="Drop on a column: becomes its last task")
    target.add_argument("--onto", help="Drop on a task: take its position")
    target.add_argument("--to", help="Drop on any id (resolved as a task id)")
    p_mv.set_defaults(func=cmd_mv)

    # ------------------------------------------------------------------
    # Workspaces
    # ------------------------------------------------------------------

    p_ws = sub.add_parser("ws", help="Manage workspaces")
    ws_sub = p_ws.add_subparsers(dest="ws_command", required=True)

    p_ws_list = ws_sub.add_parser("list", help="List workspaces")
    p_ws_list.add_argument("--no-color", action="store_true", help="Disable coloured output")
    p_ws_list.set_defaults(func=cmd_ws_list)

    p_ws_new = ws_sub.add_parser("new", help="Create a workspace and switch to it")
    p_ws_new.add_argument("name", nargs="*", help="Name (default: 'Workspace N')")
    p_ws_new.set_defaults(func=cmd_ws_new)

    p_ws_rename = ws_sub.add_parser("rename", help="Rename a workspace")
    p_ws_rename.add_argument("workspace", help="Workspace id, id prefix, name or number")
    p_ws_rename.add_argument("name", nargs="*", help="New name (blank resets to the default)")
    p_ws_rename.set_defaults(func=cmd_ws_rename)

    p_ws_rm = ws_sub.add_parser("rm", help="Delete a workspace")
    p_ws_rm.add_argument("workspace", help="Workspace id, id prefix, name or number")
    p_ws_rm.set_defaults(func=cmd_ws_rm)

    p_ws_use = ws_sub.add_parser("use", help="Switch the active workspace")
    p_ws_use.add_argument("workspace", help="Workspace id, id prefix, name or number")
    p_ws_use.set_defaults(func=cmd_ws_use)

    return parser


# ---------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------

def cmd_show(args: argparse.Namespace) -> int:
    store = _open_store(args)
    render_board(store.state, color=args.color and not args.no_color)
    return 0


def cmd_add(args: argparse.Namespace) -> int:
    store = _open_store(args)
    column_id = _resolve_column(store.active_workspace, args.column)
    title = " ".join(args.title)

    if not store.add_task(column_id, title):
        return _unchanged()

    task_id = store.active_workspace.columns[column_id].task_ids[0]
    print(f"Added {short_id(task_id)} to {column_id}")
    return 0


def cmd_rm(args: argparse.Namespace) -> int:
    store = _open_store(args)
    task_id = _resolve_task(store.active_workspace, args.task)

    if not store.delete_task(task_id):
        return _unchanged()

    print(f"Deleted {short_id(task_id)}")
    return 0


def cmd_mv(args: argparse.Namespace) -> int:
    store = _open_store(args)
    ws = store.active_workspace
    task_id = _resolve_task(ws, args.task)

    destination: Destination
    if args.column:
        destination = OverColumn(column_id=_resolve_column(ws, args.column))
    elif args.onto:
        target_id = _resolve_task(ws, args.onto)
        loc = locate(ws, target_id)
        if loc is None:
            return _unchanged()
        destination = OverTask(column_id=loc.column_id, task_id=target_id)
    else:
        try:
            target_id = _resolve_task(ws, args.to)
        except ValidationError:
            target_id = args.to
        destination = Fallback(target_id=target_id)

    store.begin_drag(task_id)
    if not store.drop(destination):
        return _unchanged()

    loc = locate(store.active_workspace, task_id)
    if loc is not None:
        print(f"Moved {short_id(task_id)} to {loc.column_id} #{loc.index + 1}")
    return 0


def cmd_ws_list(args: argparse.Namespace) -> int:
    store = _open_store(args)
    render_workspaces(store.state, color=args.color and not args.no_color)
    return 0


def cmd_ws_new(args: argparse.Namespace) -> int:
    store = _open_store(args)
    name = " ".join(args.name) if args.name else None
    store.create_workspace(name)
    ws = store.active_workspace
    print(f"Created workspace '{ws.name}' ({ws.id})")
    return 0


def cmd_ws_rename(args: argparse.Namespace) -> int:
    store = _open_store(args)
    workspace_id = _resolve_workspace(store, args.workspace)

    if not store.rename_workspace(workspace_id, " ".join(args.name)):
        return _unchanged()

    print(f"Renamed workspace to '{store.state.workspaces[workspace_id].name}'")
    return 0


def cmd_ws_rm(args: argparse.Namespace) -> int:
    store = _open_store(args)
    workspace_id = _resolve_workspace(store, args.workspace)
    name = store.state.workspaces[workspace_id].name

    if not store.delete_workspace(workspace_id):
        print("Cannot delete the last workspace")
        return 1

    print(f"Deleted workspace '{name}'; active: '{store.active_workspace.name}'")
    return 0


def cmd_ws_use(args: argparse.Namespace) -> int:
    store = _open_store(args)
    workspace_id = _resolve_workspace(store, args.workspace)

    if not store.switch_workspace(workspace_id):
        return _unchanged()

    print(f"Switched to '{store.active_workspace.name}'")
    return 0


def _unchanged() -> int:
    print("No changes.")
    return 0


# ---------------------------------------------------------------------
# Store / reference helpers
# ---------------------------------------------------------------------

def _open_store(args: argparse.Namespace) -> StateStore:
    home = Path(args.home_dir)
    return StateStore.open(BoardStorage(FileStore(home)))


def _resolve_column(ws: Workspace, ref: str) -> str:
    """
    Match a column by id or title (case-insensitive).
    """
    needle = ref.strip().lower()
    for column_id in ws.column_order:
        column = ws.columns[column_id]
        if needle in {column.id.lower(), column.title.lower()}:
            return column.id
    allowed = ", ".join(ws.column_order)
    raise ValidationError(f"Unknown column: {ref} (allowed: {allowed})")


def _resolve_task(ws: Workspace, ref: str) -> str:
    """
    Match a task by full id or unique id prefix.
    """
    ref = ref.strip()
    if not ref:
        raise ValidationError("Task reference is empty")
    if ref in ws.tasks:
        return ref

    matches = [tid for tid in ws.tasks if tid.startswith(ref)]
    if not matches:
        raise ValidationError(f"Task not found: {ref}")
    if len(matches) > 1:
        raise ValidationError(f"Ambiguous task reference: {ref} ({len(matches)} matches)")
    return matches[0]


def _resolve_workspace(store: StateStore, ref: str) -> str:
    """
    Match a workspace by id, exact name, 1-based number or unique id prefix.
    """
    state = store.state
    ref = ref.strip()
    if ref in state.workspaces:
        return ref

    by_name = [ws.id for ws in state.ordered_workspaces() if ws.name == ref]
    if len(by_name) == 1:
        return by_name[0]
    if len(by_name) > 1:
        raise ValidationError(f"Ambiguous workspace name: {ref}")

    if ref.isdigit():
        n = int(ref)
        if 1 <= n <= len(state.workspace_order):
            return state.workspace_order[n - 1]

    matches = [wid for wid in state.workspace_order if ref and wid.startswith(ref)]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        raise ValidationError(f"Ambiguous workspace reference: {ref}")

    raise ValidationError(f"Workspace not found: {ref}")


# ---------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    home = resolve_home(args.home)
    config, config_error = load_config(home)

    _configure_logging(args.log_level or get_log_level(config) or DEFAULT_LOG_LEVEL)
    if config_error:
        logger.warning("Ignoring config: {}", config_error)

    args.home_dir = str(home)
    args.color = get_color(config)

    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 2

    try:
        return func(args)
    except ValidationError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
