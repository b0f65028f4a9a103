"""Tests for the move engine (engine/move.py)."""

from __future__ import annotations

import pytest
from conftest import make_workspace

from kanbanctl.engine.model import Fallback, OverColumn, OverTask
from kanbanctl.engine.move import move, move_item


def layout(ws) -> dict[str, list[str]]:
    return {cid: list(ws.columns[cid].task_ids) for cid in ws.column_order}


class TestMoveItem:
    @pytest.mark.parametrize(
        ("src", "dst", "expected"),
        [
            (0, 2, ("b", "c", "a")),
            (2, 0, ("c", "a", "b")),
            (1, 2, ("a", "c", "b")),
            (1, 0, ("b", "a", "c")),
        ],
    )
    def test_moves_single_element(self, src, dst, expected) -> None:
        assert move_item(("a", "b", "c"), src, dst) == expected


class TestCrossColumn:
    def test_over_column_appends(self) -> None:
        ws = make_workspace({"todo": ["t1", "t2"]})
        out = move(ws, "t1", OverColumn("in-progress"))
        assert layout(out)["todo"] == ["t2"]
        assert layout(out)["in-progress"] == ["t1"]

    def test_over_column_appends_after_existing(self) -> None:
        ws = make_workspace({"todo": ["t1"], "done": ["d1", "d2"]})
        out = move(ws, "t1", OverColumn("done"))
        assert layout(out)["done"] == ["d1", "d2", "t1"]
        assert layout(out)["todo"] == []

    def test_over_task_inserts_before_target(self) -> None:
        ws = make_workspace({"todo": ["t1"], "done": ["d1", "d2"]})
        out = move(ws, "t1", OverTask("done", "d2"))
        assert layout(out)["done"] == ["d1", "t1", "d2"]

    def test_fallback_resolves_target_as_task(self) -> None:
        ws = make_workspace({"todo": ["t1"], "done": ["d1", "d2"]})
        out = move(ws, "t1", Fallback("d1"))
        assert layout(out)["done"] == ["t1", "d1", "d2"]

    def test_shares_untouched_structures(self) -> None:
        ws = make_workspace({"todo": ["t1"], "in-progress": ["p1"], "done": ["d1"]})
        out = move(ws, "t1", OverColumn("done"))
        assert out is not ws
        assert out.columns["in-progress"] is ws.columns["in-progress"]
        assert out.tasks is ws.tasks
        assert out.column_order is ws.column_order

    def test_input_is_not_modified(self) -> None:
        ws = make_workspace({"todo": ["t1", "t2"]})
        before = layout(ws)
        move(ws, "t1", OverColumn("done"))
        assert layout(ws) == before


class TestSameColumn:
    def test_over_task_reorders_upwards(self) -> None:
        ws = make_workspace({"todo": ["t1", "t2", "t3"]})
        out = move(ws, "t3", OverTask("todo", "t1"))
        assert layout(out)["todo"] == ["t3", "t1", "t2"]

    def test_over_task_reorders_downwards(self) -> None:
        ws = make_workspace({"todo": ["t1", "t2", "t3"]})
        out = move(ws, "t1", OverTask("todo", "t3"))
        assert layout(out)["todo"] == ["t2", "t3", "t1"]

    def test_over_own_column_moves_to_last(self) -> None:
        ws = make_workspace({"todo": ["t1", "t2", "t3"]})
        out = move(ws, "t1", OverColumn("todo"))
        assert layout(out)["todo"] == ["t2", "t3", "t1"]

    def test_over_own_column_when_already_last_is_noop(self) -> None:
        ws = make_workspace({"todo": ["t1", "t2"]})
        assert move(ws, "t2", OverColumn("todo")) is ws

    def test_sole_task_over_own_column_is_noop(self) -> None:
        ws = make_workspace({"done": ["only"]})
        assert move(ws, "only", OverColumn("done")) is ws

    def test_fallback_in_same_column(self) -> None:
        ws = make_workspace({"todo": ["t1", "t2", "t3"]})
        out = move(ws, "t3", Fallback("t2"))
        assert layout(out)["todo"] == ["t1", "t3", "t2"]

    def test_only_source_column_replaced(self) -> None:
        ws = make_workspace({"todo": ["t1", "t2"], "done": ["d1"]})
        out = move(ws, "t2", OverTask("todo", "t1"))
        assert out.columns["done"] is ws.columns["done"]
        assert out.tasks is ws.tasks


class TestNoOps:
    def test_self_drop(self) -> None:
        ws = make_workspace({"todo": ["t1", "t2"]})
        assert move(ws, "t1", OverTask("todo", "t1")) is ws
        assert move(ws, "t1", Fallback("t1")) is ws

    def test_unknown_active_task(self) -> None:
        ws = make_workspace({"todo": ["t1"]})
        assert move(ws, "ghost", OverColumn("done")) is ws

    def test_unknown_destination_column(self) -> None:
        ws = make_workspace({"todo": ["t1"]})
        assert move(ws, "t1", OverColumn("archive")) is ws
        assert move(ws, "t1", OverTask("archive", "t1")) is ws

    def test_over_task_not_in_named_column(self) -> None:
        ws = make_workspace({"todo": ["t1"], "done": ["d1"]})
        assert move(ws, "t1", OverTask("in-progress", "d1")) is ws

    def test_unresolvable_fallback(self) -> None:
        ws = make_workspace({"todo": ["t1"]})
        assert move(ws, "t1", Fallback("column-drop-todo")) is ws

    def test_unsupported_destination_type(self) -> None:
        ws = make_workspace({"todo": ["t1"]})
        with pytest.raises(TypeError):
            move(ws, "t1", "done")  # type: ignore[arg-type]
