"""Tests for CLI rendering helpers (engine/render.py)."""

from __future__ import annotations

import os

import pytest
from conftest import make_board, make_workspace

from kanbanctl.engine import render
from kanbanctl.engine.model import FALLBACK_WORKSPACE_NAME


@pytest.fixture
def unnamed_board():
    return make_board(
        make_workspace(ws_id="A", name=""),
        make_workspace({"todo": ["b1"]}, ws_id="B", name="Beta"),
        active="A",
    )


def terminal_width(monkeypatch, columns: int) -> None:
    monkeypatch.setattr(
        render.shutil,
        "get_terminal_size",
        lambda fallback=None: os.terminal_size((columns, 24)),
    )


def box_lines(out: str) -> list[str]:
    return [ln for ln in out.splitlines() if ln.startswith(("+", "|"))]


class TestWorkspaceNames:
    def test_tabs_use_fallback_for_empty_name(self, unnamed_board, capsys) -> None:
        render.render_workspace_tabs(unnamed_board, color=False)
        out = capsys.readouterr().out
        assert out == f"[{FALLBACK_WORKSPACE_NAME}]  Beta\n"

    def test_list_uses_fallback_for_empty_name(self, unnamed_board, capsys) -> None:
        render.render_workspaces(unnamed_board, color=False)
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == f"* 1) {FALLBACK_WORKSPACE_NAME} (0 tasks) id: A"
        assert lines[1] == "  2) Beta (1 tasks) id: B"


class TestBoxLayout:
    @pytest.mark.parametrize("columns", [10, 15, 23, 24, 40, 120])
    def test_rules_match_content_width(self, monkeypatch, capsys, columns) -> None:
        terminal_width(monkeypatch, columns)
        ws = make_workspace({"todo": ["ab"], "done": ["a-much-longer-task-title"]})
        render.render_workspace(ws, color=False)
        lines = box_lines(capsys.readouterr().out)
        assert lines
        assert len({len(ln) for ln in lines}) == 1

    def test_width_is_capped(self, monkeypatch, capsys) -> None:
        terminal_width(monkeypatch, 200)
        render.render_workspace(make_workspace(), color=False)
        lines = box_lines(capsys.readouterr().out)
        assert len(lines[0]) == 80
