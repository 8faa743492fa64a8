# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FolderTree node class."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class FolderNode:
    """A single folder in a FolderTree.

    Each node has:
    - id: Identifier, unique across the whole tree
    - name: Display label
    - children: Ordered tuple of child ids (display and insertion order)
    - expanded: Local UI state, never sent to the remote service

    Nodes are immutable. Every change produces a new node through replace(),
    so a tree can share untouched nodes with the tree it was derived from.

    Example:
        >>> node = FolderNode('a', 'Docs')
        >>> node.children
        ()
        >>> node.replace(expanded=True).expanded
        True
    """

    id: str
    name: str = ''
    children: tuple[str, ...] = field(default_factory=tuple)
    expanded: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.id, str):
            raise TypeError(f"node id must be str, not {type(self.id).__name__}")
        if not isinstance(self.children, tuple):
            object.__setattr__(self, 'children', tuple(self.children))
        # The renderer reads expanded on every row, None would break it
        object.__setattr__(self, 'expanded', bool(self.expanded))

    @property
    def has_children(self) -> bool:
        """True if the node lists at least one child."""
        return len(self.children) > 0

    def replace(self, **changes: Any) -> FolderNode:
        """Return a copy of this node with the given fields changed."""
        return replace(self, **changes)

    def with_child(self, child_id: str) -> FolderNode:
        """Return a copy of this node with child_id appended to children."""
        return replace(self, children=self.children + (child_id,))

    def as_dict(self) -> dict[str, Any]:
        """Convert to the wire item shape used by folder snapshots."""
        return {
            'id': self.id,
            'children': list(self.children),
            'hasChildren': self.has_children,
            'isExpanded': self.expanded,
            'data': {'name': self.name},
        }
