# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FolderTree - An immutable folder hierarchy value.

This module provides the FolderTree class, the value held by a
FolderTreeStore. A FolderTree is a flat id -> FolderNode mapping plus the id
of a synthetic root node, the same shape the remote folder service sends.

Key Features:
    - **O(1) lookup**: Nodes are kept in a dict keyed by id
    - **Value semantics**: with_expanded() and with_child() return new trees
    - **Structural sharing**: Untouched FolderNode objects are reused as-is
    - **Invariant checking**: validate() rejects dangling, shared or cyclic ids

Example:
    Building a tree by hand::

        tree = FolderTree.empty('root')
        tree = tree.with_child('root', FolderNode('a', 'Docs'))
        tree = tree.with_child('a', FolderNode('b', 'Drafts'))

        tree.children_of('a')          # ('b',)
        tree.get('a').expanded         # False
        tree.with_expanded('a', True)  # new tree, `tree` is unchanged
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterator, Mapping

from .exceptions import TreeInvariantError
from .node import FolderNode


class FolderTree:
    """An immutable folder hierarchy.

    FolderTree provides:
    - get(id) / tree[id]: Node access
    - children_of(id) / children_length(id) / parent_of(id): Navigation
    - walk() / iter_visible(): Depth-first traversal with depth
    - with_expanded(id, flag) / with_child(parent_id, node): New trees

    Attributes:
        root_id: Id of the synthetic root node. The root is not a
            user-visible folder and is never listed as a child.
        nodes: Read-only mapping from id to FolderNode.

    Example:
        >>> tree = FolderTree('r', {'r': FolderNode('r', children=('a',)),
        ...                         'a': FolderNode('a', 'Docs')})
        >>> tree.children_length('r')
        1
    """

    __slots__ = ('_root_id', '_nodes')

    def __init__(
        self,
        root_id: str,
        nodes: Mapping[str, FolderNode],
        validate: bool = True,
    ) -> None:
        """Initialize a FolderTree.

        Args:
            root_id: Id of the synthetic root node.
            nodes: Mapping from id to FolderNode. It is copied, later changes
                to the argument do not leak into the tree.
            validate: If True (default), check every invariant and raise
                TreeInvariantError on the first violation. Internal
                mutations that already preserve the invariants pass False.
        """
        self._root_id = root_id
        self._nodes: dict[str, FolderNode] = dict(nodes)
        if validate:
            self.validate()

    @classmethod
    def empty(cls, root_id: str = '') -> FolderTree:
        """Return the degenerate root-only tree used before the first load."""
        return cls(root_id, {root_id: FolderNode(root_id)}, validate=False)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"FolderTree(root={self._root_id!r}, nodes={len(self._nodes)})"

    def __len__(self) -> int:
        """Return the number of nodes, root included."""
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __getitem__(self, node_id: str) -> FolderNode:
        return self._nodes[node_id]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FolderTree):
            return NotImplemented
        return self._root_id == other._root_id and self._nodes == other._nodes

    __hash__ = None  # type: ignore[assignment]

    # ==================== Accessors ====================

    @property
    def root_id(self) -> str:
        return self._root_id

    @property
    def nodes(self) -> Mapping[str, FolderNode]:
        return MappingProxyType(self._nodes)

    @property
    def root(self) -> FolderNode:
        """The synthetic root node."""
        return self._nodes[self._root_id]

    def get(self, node_id: str, default: Any = None) -> FolderNode | None:
        """Get node by id, with default."""
        return self._nodes.get(node_id, default)

    def children_of(self, node_id: str) -> tuple[str, ...]:
        """Return the ordered child ids of node_id.

        Raises:
            KeyError: If node_id is not in the tree.
        """
        return self._nodes[node_id].children

    def children_length(self, node_id: str) -> int:
        """Return how many children node_id has, 0 if it is unknown."""
        node = self._nodes.get(node_id)
        if node is None:
            return 0
        return len(node.children)

    def parent_of(self, node_id: str) -> str | None:
        """Return the id of the node listing node_id as a child, or None."""
        for candidate in self._nodes.values():
            if node_id in candidate.children:
                return candidate.id
        return None

    # ==================== Traversal ====================

    def walk(self) -> Iterator[tuple[int, FolderNode]]:
        """Yield (depth, node) depth-first in display order, root excluded.

        Children of the root have depth 0.
        """
        yield from self._walk(self._root_id, 0, only_expanded=False)

    def iter_visible(self) -> Iterator[tuple[int, FolderNode]]:
        """Yield (depth, node) for the rows a renderer should show.

        Same as walk(), but only descends into expanded nodes. The root's
        children are always visible.
        """
        yield from self._walk(self._root_id, 0, only_expanded=True)

    def _walk(
        self, node_id: str, depth: int, only_expanded: bool
    ) -> Iterator[tuple[int, FolderNode]]:
        for child_id in self._nodes[node_id].children:
            child = self._nodes[child_id]
            yield depth, child
            if child.has_children and (child.expanded or not only_expanded):
                yield from self._walk(child_id, depth + 1, only_expanded)

    # ==================== Mutations (new values) ====================

    def with_expanded(self, node_id: str, expanded: bool) -> FolderTree:
        """Return a tree where node_id has the given expanded flag.

        Unknown ids and unchanged flags return self, so callers can use
        identity to detect whether anything changed.
        """
        node = self._nodes.get(node_id)
        if node is None or node.expanded == bool(expanded):
            return self
        nodes = dict(self._nodes)
        nodes[node_id] = node.replace(expanded=bool(expanded))
        return FolderTree(self._root_id, nodes, validate=False)

    def with_child(self, parent_id: str, node: FolderNode) -> FolderTree:
        """Return a tree where node is appended as the last child of parent_id.

        A parent other than the root is expanded so the new child shows.

        Raises:
            TreeInvariantError: If parent_id is missing, node.id is already
                in the tree, or node lists children of its own.
        """
        parent = self._nodes.get(parent_id)
        if parent is None:
            raise TreeInvariantError(f"Parent '{parent_id}' not found")
        if node.id in self._nodes:
            raise TreeInvariantError(f"Node id '{node.id}' already exists")
        if node.children:
            raise TreeInvariantError(
                f"New node '{node.id}' cannot carry children {list(node.children)}"
            )

        parent = parent.with_child(node.id)
        if parent_id != self._root_id:
            parent = parent.replace(expanded=True)

        nodes = dict(self._nodes)
        nodes[node.id] = node
        nodes[parent_id] = parent
        return FolderTree(self._root_id, nodes, validate=False)

    # ==================== Validation ====================

    def validate(self) -> None:
        """Check every tree invariant.

        Raises:
            TreeInvariantError: On the first violation found.
        """
        if self._root_id not in self._nodes:
            raise TreeInvariantError(f"Root '{self._root_id}' not in nodes")

        seen_as_child: dict[str, str] = {}
        for node_id, node in self._nodes.items():
            if node.id != node_id:
                raise TreeInvariantError(
                    f"Node stored under '{node_id}' has id '{node.id}'"
                )
            for child_id in node.children:
                if child_id not in self._nodes:
                    raise TreeInvariantError(
                        f"Node '{node_id}' lists missing child '{child_id}'"
                    )
                if child_id == self._root_id:
                    raise TreeInvariantError(
                        f"Root '{child_id}' is listed as child of '{node_id}'"
                    )
                if child_id in seen_as_child:
                    raise TreeInvariantError(
                        f"Child '{child_id}' listed by both "
                        f"'{seen_as_child[child_id]}' and '{node_id}'"
                    )
                seen_as_child[child_id] = node_id

        # Every id has at most one parent, so reachability from the root
        # rules out cycles.
        reachable = {self._root_id}
        stack = [self._root_id]
        while stack:
            for child_id in self._nodes[stack.pop()].children:
                reachable.add(child_id)
                stack.append(child_id)
        unreachable = set(self._nodes) - reachable
        if unreachable:
            raise TreeInvariantError(
                f"Nodes not reachable from root: {sorted(unreachable)}"
            )

    @property
    def is_valid(self) -> bool:
        """True if validate() would not raise."""
        try:
            self.validate()
        except TreeInvariantError:
            return False
        return True

    # ==================== Conversion ====================

    def as_dict(self) -> dict[str, Any]:
        """Convert to the snapshot shape {'rootId': ..., 'items': {...}}."""
        return {
            'rootId': self._root_id,
            'items': {node_id: node.as_dict() for node_id, node in self._nodes.items()},
        }
