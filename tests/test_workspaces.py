"""Tests for workspace lifecycle (engine/workspaces.py)."""

from __future__ import annotations

import pytest
from conftest import make_board, make_workspace

from kanbanctl.engine.model import COLUMN_TEMPLATE, FALLBACK_WORKSPACE_NAME, create_initial_state
from kanbanctl.engine.workspaces import (
    create_workspace,
    delete_workspace,
    rename_workspace,
    switch_workspace,
)


class TestCreate:
    def test_appends_and_activates(self, board, ids) -> None:
        out = create_workspace(board, id_factory=ids)
        assert out.workspace_order == ("A", "B", "C", "id-1")
        assert out.active_workspace_id == "id-1"
        assert out.workspaces["id-1"].name == "Workspace 4"

    def test_fresh_template_without_tasks(self, board, ids) -> None:
        ws = create_workspace(board, id_factory=ids).workspaces["id-1"]
        assert ws.column_order == tuple(cid for cid, _ in COLUMN_TEMPLATE)
        assert all(c.task_ids == () for c in ws.columns.values())
        assert ws.tasks == {}

    def test_explicit_name_is_trimmed(self, board, ids) -> None:
        out = create_workspace(board, "  Home  ", id_factory=ids)
        assert out.workspaces["id-1"].name == "Home"

    def test_blank_explicit_name_falls_back(self, board, ids) -> None:
        out = create_workspace(board, "   ", id_factory=ids)
        assert out.workspaces["id-1"].name == FALLBACK_WORKSPACE_NAME

    def test_columns_not_shared_between_workspaces(self, ids) -> None:
        state = create_initial_state(id_factory=ids)
        out = create_workspace(state, id_factory=ids)
        first, second = (out.workspaces[w] for w in out.workspace_order)
        assert first.columns is not second.columns


class TestRename:
    def test_trims(self, board) -> None:
        out = rename_workspace(board, "A", "  Work ")
        assert out.workspaces["A"].name == "Work"
        assert out.workspaces["B"] is board.workspaces["B"]

    def test_empty_falls_back(self, board) -> None:
        out = rename_workspace(board, "A", "  ")
        assert out.workspaces["A"].name == FALLBACK_WORKSPACE_NAME

    def test_same_name_is_noop(self, board) -> None:
        assert rename_workspace(board, "A", " Alpha ") is board

    def test_unknown_workspace_is_noop(self, board) -> None:
        assert rename_workspace(board, "Z", "Zed") is board


class TestDelete:
    def test_active_steps_left(self, board) -> None:
        out = delete_workspace(board, "B")
        assert out.workspace_order == ("A", "C")
        assert out.active_workspace_id == "A"
        assert "B" not in out.workspaces

    def test_active_first_clamps_to_start(self) -> None:
        state = make_board(
            make_workspace(ws_id="A"), make_workspace(ws_id="B"), make_workspace(ws_id="C"),
            active="A",
        )
        out = delete_workspace(state, "A")
        assert out.active_workspace_id == "B"

    def test_active_last(self, board) -> None:
        state = switch_workspace(board, "C")
        assert delete_workspace(state, "C").active_workspace_id == "B"

    def test_inactive_keeps_active(self, board) -> None:
        out = delete_workspace(board, "C")
        assert out.active_workspace_id == "B"
        assert out.workspace_order == ("A", "B")

    def test_last_workspace_is_noop(self) -> None:
        state = make_board(make_workspace(ws_id="A"))
        assert delete_workspace(state, "A") is state

    def test_unknown_workspace_is_noop(self, board) -> None:
        assert delete_workspace(board, "Z") is board


class TestSwitch:
    @pytest.mark.parametrize("target", ["A", "C"])
    def test_sets_active(self, board, target) -> None:
        out = switch_workspace(board, target)
        assert out.active_workspace_id == target
        assert out.workspaces is board.workspaces

    def test_already_active_is_noop(self, board) -> None:
        assert switch_workspace(board, "B") is board

    def test_unknown_is_noop(self, board) -> None:
        assert switch_workspace(board, "Z") is board
