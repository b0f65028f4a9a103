# src/kanbanctl/engine/validate.py

"""
Board invariant checks.

This module validates a decoded BoardState against the structural
invariants every mutation must preserve:

- workspace order is duplicate-free and matches the workspace mapping,
- the active workspace is part of the order,
- each task is placed in exactly one column slot and exists in `tasks`,
- column order only names existing columns.

It does NOT perform parsing or any IO.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Sequence

from .model import BoardState, Workspace


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

class ValidationError(Exception):
    """
    Fatal validation error used for command flow control.

    Raised when a user-supplied reference cannot be resolved
    (e.g. unknown or ambiguous task id).
    """


# ---------------------------------------------------------------------
# Result objects
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """
    A single validation problem.

    `code` is a stable identifier suitable for tests and future filtering.
    """

    code: str
    message: str


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """
    Aggregated validation result for one board.
    """

    path: str
    issues: Sequence[ValidationIssue]

    @property
    def ok(self) -> bool:
        return not self.issues


# ---------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------

def validate_board(state: BoardState, *, path: str = "board") -> ValidationResult:
    issues: list[ValidationIssue] = []

    # -----------------------------------------------------------------
    # Workspace order
    # -----------------------------------------------------------------

    dupes = sorted(wid for wid, n in Counter(state.workspace_order).items() if n > 1)
    for wid in dupes:
        issues.append(
            ValidationIssue(
                code="order_duplicate",
                message=f"Workspace '{wid}' appears more than once in the order",
            )
        )

    if set(state.workspace_order) != set(state.workspaces):
        issues.append(
            ValidationIssue(
                code="order_mismatch",
                message="Workspace order does not match the set of workspaces",
            )
        )

    if state.active_workspace_id not in state.workspace_order:
        issues.append(
            ValidationIssue(
                code="active_missing",
                message=f"Active workspace '{state.active_workspace_id}' is not in the order",
            )
        )

    # -----------------------------------------------------------------
    # Per workspace
    # -----------------------------------------------------------------

    for key, ws in state.workspaces.items():
        if ws.id != key:
            issues.append(
                ValidationIssue(
                    code="workspace_id_mismatch",
                    message=f"Workspace stored under '{key}' has id '{ws.id}'",
                )
            )
        _validate_workspace(ws, issues)

    return ValidationResult(path=path, issues=tuple(issues))


def _validate_workspace(ws: Workspace, issues: list[ValidationIssue]) -> None:
    """
    Check column and task placement rules for one workspace.
    """
    for cid in ws.column_order:
        if cid not in ws.columns:
            issues.append(
                ValidationIssue(
                    code="column_missing",
                    message=f"{ws.id}: column '{cid}' is in the order but not defined",
                )
            )

    for key, column in ws.columns.items():
        if column.id != key:
            issues.append(
                ValidationIssue(
                    code="column_id_mismatch",
                    message=f"{ws.id}: column stored under '{key}' has id '{column.id}'",
                )
            )

    for key, task in ws.tasks.items():
        if task.id != key:
            issues.append(
                ValidationIssue(
                    code="task_id_mismatch",
                    message=f"{ws.id}: task stored under '{key}' has id '{task.id}'",
                )
            )

    placed = Counter(tid for column in ws.columns.values() for tid in column.task_ids)

    for tid, n in sorted(placed.items()):
        if n > 1:
            issues.append(
                ValidationIssue(
                    code="task_duplicate",
                    message=f"{ws.id}: task '{tid}' is placed {n} times",
                )
            )
        if tid not in ws.tasks:
            issues.append(
                ValidationIssue(
                    code="task_orphan_ref",
                    message=f"{ws.id}: column references unknown task '{tid}'",
                )
            )

    for tid in sorted(ws.tasks):
        if tid not in placed:
            issues.append(
                ValidationIssue(
                    code="task_unplaced",
                    message=f"{ws.id}: task '{tid}' is not in any column",
                )
            )
