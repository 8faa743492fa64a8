# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Row interaction policy and render hook.

A folder row has three click targets nested inside each other::

    row ─┬─ label          click selects the folder
         └─ add area ── add button   click creates a child folder
    (row background)                 click toggles expand/collapse

Clicks bubble from the innermost target up to the row, like DOM events.
The label and the add area stop propagation, so only a click on the row
background toggles the folder.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Protocol

from .creation import FolderCreationFlow
from .node import FolderNode
from .store import FolderTreeStore

logger = logging.getLogger(__name__)


class RowTarget(str, Enum):
    ROW = 'row'
    LABEL = 'label'
    ADD = 'add'


@dataclass
class RowEvent:
    """A click travelling from its target up to the row."""

    node_id: str
    target: RowTarget
    propagation_stopped: bool = False
    handled_by: list[str] = field(default_factory=list)
    task: asyncio.Task | None = None

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


@dataclass(frozen=True)
class FolderRow:
    """What a renderer needs to draw one row and wire its gestures."""

    id: str
    name: str
    depth: int
    has_children: bool
    expanded: bool
    active: bool
    policy: FolderRowPolicy = field(repr=False, compare=False)

    def click_row(self) -> RowEvent:
        return self.policy.dispatch(self.id, RowTarget.ROW)

    def click_label(self) -> RowEvent:
        return self.policy.dispatch(self.id, RowTarget.LABEL)

    def click_add(self) -> RowEvent:
        return self.policy.dispatch(self.id, RowTarget.ADD)


class TreeRenderer(Protocol):
    """Capability interface a tree-rendering widget consumes."""

    def render(self, node: FolderNode, depth: int) -> FolderRow: ...

    def on_expand(self, node_id: str) -> None: ...

    def on_collapse(self, node_id: str) -> None: ...


class FolderRowPolicy:
    """Maps row gestures onto store operations and the creation flow.

    Selection belongs to the caller: the policy reads it through
    selected_folder_id() and changes it only through on_select_folder().
    """

    def __init__(
        self,
        store: FolderTreeStore,
        flow: FolderCreationFlow,
        on_select_folder: Callable[[str], None],
        selected_folder_id: Callable[[], str | None] = lambda: None,
    ) -> None:
        self.store = store
        self.flow = flow
        self.on_select_folder = on_select_folder
        self.selected_folder_id = selected_folder_id
        self._pending: set[asyncio.Task] = set()

    # ==================== Render hook ====================

    def on_expand(self, node_id: str) -> None:
        self.store.expand(node_id)

    def on_collapse(self, node_id: str) -> None:
        self.store.collapse(node_id)

    def render(self, node: FolderNode, depth: int = 0) -> FolderRow:
        return FolderRow(
            id=node.id,
            name=node.name,
            depth=depth,
            has_children=node.has_children,
            expanded=node.expanded,
            active=self.selected_folder_id() == node.id,
            policy=self,
        )

    def rows(self) -> list[FolderRow]:
        """Render every visible row of the current tree, root excluded."""
        return [self.render(node, depth) for depth, node in self.store.tree.iter_visible()]

    # ==================== Gestures ====================

    def dispatch(self, node_id: str, target: RowTarget) -> RowEvent:
        """Deliver a click on target of row node_id, bubbling up to the row."""
        event = RowEvent(node_id, RowTarget(target))
        if event.target is RowTarget.LABEL:
            path = (self._label_clicked, self._row_clicked)
        elif event.target is RowTarget.ADD:
            path = (self._add_clicked, self._add_area_clicked, self._row_clicked)
        else:
            path = (self._row_clicked,)

        for handler in path:
            handler(event)
            event.handled_by.append(handler.__name__.strip('_'))
            if event.propagation_stopped:
                break
        return event

    def _row_clicked(self, event: RowEvent) -> None:
        node = self.store.tree.get(event.node_id)
        if node is not None and node.has_children and node.expanded:
            self.on_collapse(event.node_id)
        else:
            # Childless folders expand too, there is just nothing to show
            self.on_expand(event.node_id)

    def _label_clicked(self, event: RowEvent) -> None:
        event.stop_propagation()
        self.on_select_folder(event.node_id)

    def _add_area_clicked(self, event: RowEvent) -> None:
        event.stop_propagation()

    def _add_clicked(self, event: RowEvent) -> None:
        loop = asyncio.get_running_loop()
        task = loop.create_task(self.flow.create_folder(event.node_id))
        self._pending.add(task)
        task.add_done_callback(self._task_done)
        event.task = task

    def _task_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        # The flow already reported the failure
        if not task.cancelled():
            task.exception()

    async def wait_pending(self) -> None:
        """Wait for every creation started from an add click."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
