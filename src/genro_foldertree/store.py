# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FolderTreeStore - Sole owner of the canonical folder tree.

The store holds one FolderTree value. Every operation computes a new value
from the current one and swaps the reference, so readers can compare
identities to know whether to redraw::

    store = FolderTreeStore()
    before = store.tree
    store.expand('a')
    store.tree is before   # False only if 'a' exists and was collapsed

Subscribers registered with subscribe() are called with (old, new) each
time the identity changes.
"""

from __future__ import annotations

import logging
from typing import Callable

from .node import FolderNode
from .tree import FolderTree

logger = logging.getLogger(__name__)

TreeCallback = Callable[[FolderTree, FolderTree], None]


class FolderTreeStore:
    """Owner of the canonical FolderTree.

    Operations:
    - load(tree): Replace the whole tree with a fetched snapshot
    - set_expanded(id, flag) / expand(id) / collapse(id): Local UI state
    - commit_new_node(parent_id, node): Insert a remotely confirmed folder

    Once close() is called the store is defunct: every operation becomes a
    logged no-op. Late callbacks from requests that outlived the component
    rely on this.
    """

    __slots__ = ('_tree', '_subscribers', '_alive')

    def __init__(self, tree: FolderTree | None = None, root_id: str = '') -> None:
        """Initialize a FolderTreeStore.

        Args:
            tree: Initial tree. Defaults to the root-only tree.
            root_id: Root id of the default empty tree.
        """
        self._tree = tree if tree is not None else FolderTree.empty(root_id)
        self._subscribers: dict[str, TreeCallback] = {}
        self._alive = True

    def __repr__(self) -> str:
        state = 'alive' if self._alive else 'closed'
        return f"FolderTreeStore({self._tree!r}, {state})"

    @property
    def tree(self) -> FolderTree:
        """The current tree value. Treat it as read-only."""
        return self._tree

    @property
    def is_alive(self) -> bool:
        return self._alive

    def close(self) -> None:
        """Mark the store defunct and drop all subscribers."""
        self._alive = False
        self._subscribers.clear()

    # ==================== Subscriptions ====================

    def subscribe(self, subscriber_id: str, callback: TreeCallback) -> None:
        """Register callback(old_tree, new_tree) under subscriber_id.

        A second subscription with the same id replaces the first. A failing
        callback is logged and does not stop the others.
        """
        self._subscribers[subscriber_id] = callback

    def unsubscribe(self, subscriber_id: str) -> None:
        self._subscribers.pop(subscriber_id, None)

    def _swap(self, new_tree: FolderTree) -> bool:
        old_tree = self._tree
        if new_tree is old_tree:
            return False
        self._tree = new_tree
        for subscriber_id, callback in list(self._subscribers.items()):
            try:
                callback(old_tree, new_tree)
            except Exception:
                logger.exception("subscriber %r failed on tree change", subscriber_id)
        return True

    # ==================== Operations ====================

    def load(self, tree: FolderTree) -> bool:
        """Replace the entire tree with a freshly fetched snapshot.

        Local expanded flags of the previous tree are discarded. Loading the
        same snapshot again (same object or equal value) changes nothing.

        Returns:
            True if the tree was replaced.
        """
        if not self._alive:
            logger.debug("load ignored, store is closed")
            return False
        if tree is self._tree or tree == self._tree:
            return False
        logger.debug("loaded folder tree with %d nodes", len(tree))
        return self._swap(tree)

    def set_expanded(self, node_id: str, expanded: bool) -> bool:
        """Set the expanded flag of node_id.

        Unknown ids are ignored: a click may race with a tree replacement.

        Returns:
            True if the tree changed.
        """
        if not self._alive:
            logger.debug("set_expanded(%r) ignored, store is closed", node_id)
            return False
        if node_id not in self._tree:
            logger.debug("set_expanded ignored stale id %r", node_id)
            return False
        return self._swap(self._tree.with_expanded(node_id, expanded))

    def expand(self, node_id: str) -> bool:
        return self.set_expanded(node_id, True)

    def collapse(self, node_id: str) -> bool:
        return self.set_expanded(node_id, False)

    def commit_new_node(self, parent_id: str, node: FolderNode) -> bool:
        """Append a confirmed node as the last child of parent_id.

        A parent other than the root is expanded so the new folder is
        visible right away.

        Returns:
            True if the node was committed, False if the store is closed.

        Raises:
            TreeInvariantError: If parent_id is missing or node.id already
                exists. The tree is left untouched.
        """
        if not self._alive:
            logger.debug("commit of %r ignored, store is closed", node.id)
            return False
        new_tree = self._tree.with_child(parent_id, node)
        logger.debug("committed folder %r under %r", node.id, parent_id)
        return self._swap(new_tree)
