# src/kanbanctl/engine/store.py

"""
Current-snapshot holder.

StateStore owns the single current BoardState, routes every mutation
request to the pure engine functions and persists the result.

Rules:
- A request is handled to completion before the next one.
- An engine call that returns the same object is a no-op: the snapshot
  is kept and nothing is written.
- Persistence runs after a snapshot change and never alters it.
"""

from __future__ import annotations

from typing import Callable, Optional

from loguru import logger

from . import actions, workspaces
from .model import BoardState, Destination, IdFactory, Workspace, create_initial_state, new_id
from .move import move
from .storage import BoardStorage


class StateStore:
    def __init__(
        self,
        state: BoardState,
        storage: Optional[BoardStorage] = None,
        *,
        id_factory: IdFactory = new_id,
    ) -> None:
        self._state = state
        self._storage = storage
        self._id_factory = id_factory
        self._dragging: Optional[str] = None

    @classmethod
    def open(cls, storage: BoardStorage, *, id_factory: IdFactory = new_id) -> "StateStore":
        """
        Load the stored board, or start from a fresh one.

        A fresh board is written back right away.
        """
        state = storage.load()
        store = cls(state or create_initial_state(id_factory=id_factory), storage, id_factory=id_factory)
        if state is None:
            logger.info("Starting with a fresh board")
            store._persist()
        return store

    # -----------------------------------------------------------------
    # Read access
    # -----------------------------------------------------------------

    @property
    def state(self) -> BoardState:
        return self._state

    @property
    def active_workspace(self) -> Workspace:
        return self._state.active_workspace

    @property
    def dragging(self) -> Optional[str]:
        return self._dragging

    # -----------------------------------------------------------------
    # Commit / persist
    # -----------------------------------------------------------------

    def commit(self, next_state: BoardState, *, action: str = "update") -> bool:
        """
        Adopt `next_state` unless it is the current snapshot.

        Returns True when the board changed.
        """
        if next_state is self._state:
            logger.debug("{}: no changes", action)
            return False

        self._state = next_state
        logger.debug("{}: board updated", action)
        self._persist()
        return True

    def _persist(self) -> None:
        if self._storage is not None:
            self._storage.save(self._state)

    def _update_active(self, fn: Callable[[Workspace], Workspace], *, action: str) -> bool:
        current = self._state.active_workspace
        updated = fn(current)
        if updated is current:
            logger.debug("{}: no changes", action)
            return False
        return self.commit(actions.update_workspace(self._state, updated), action=action)

    # -----------------------------------------------------------------
    # Tasks (active workspace)
    # -----------------------------------------------------------------

    def add_task(self, column_id: str, raw_title: str) -> bool:
        return self._update_active(
            lambda ws: actions.add_task(ws, column_id, raw_title, id_factory=self._id_factory),
            action="add_task",
        )

    def delete_task(self, task_id: str, column_id: Optional[str] = None) -> bool:
        return self._update_active(
            lambda ws: actions.delete_task(ws, task_id, column_id),
            action="delete_task",
        )

    def move_task(self, task_id: str, destination: Destination) -> bool:
        return self._update_active(
            lambda ws: move(ws, task_id, destination),
            action="move_task",
        )

    # -----------------------------------------------------------------
    # Drag gesture
    # -----------------------------------------------------------------

    def begin_drag(self, task_id: str) -> None:
        self._dragging = task_id

    def cancel_drag(self) -> None:
        self._dragging = None

    def drop(self, destination: Optional[Destination]) -> bool:
        """
        Finish a drag. Without a destination nothing is moved.
        """
        task_id = self._dragging
        self._dragging = None
        if task_id is None or destination is None:
            return False
        return self.move_task(task_id, destination)

    # -----------------------------------------------------------------
    # Workspaces
    # -----------------------------------------------------------------

    def create_workspace(self, name: Optional[str] = None) -> bool:
        return self.commit(
            workspaces.create_workspace(self._state, name, id_factory=self._id_factory),
            action="create_workspace",
        )

    def rename_workspace(self, workspace_id: str, raw_name: Optional[str]) -> bool:
        return self.commit(
            workspaces.rename_workspace(self._state, workspace_id, raw_name),
            action="rename_workspace",
        )

    def delete_workspace(self, workspace_id: str) -> bool:
        return self.commit(
            workspaces.delete_workspace(self._state, workspace_id),
            action="delete_workspace",
        )

    def switch_workspace(self, workspace_id: str) -> bool:
        return self.commit(
            workspaces.switch_workspace(self._state, workspace_id),
            action="switch_workspace",
        )
