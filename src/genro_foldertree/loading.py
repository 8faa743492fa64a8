# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Loading functions for FolderTree snapshots.

The remote folder service answers with the flat tree shape of the folder
list widget::

    {
        'rootId': 'root',
        'items': {
            'root': {'id': 'root', 'children': ['a'], 'data': ''},
            'a': {'id': 'a', 'children': [], 'data': {'name': 'Docs'},
                  'isExpanded': False},
        },
    }

tree_from_dict() normalizes that payload at the boundary so that optional
or loosely typed fields never reach the store.
"""

from __future__ import annotations

from typing import Any, Mapping

from .exceptions import SnapshotError, TreeInvariantError
from .node import FolderNode
from .tree import FolderTree


def tree_from_dict(payload: Mapping[str, Any]) -> FolderTree:
    """Build a FolderTree from a snapshot payload.

    Args:
        payload: Mapping with 'rootId' and 'items' keys.

    Returns:
        A validated FolderTree.

    Raises:
        SnapshotError: If the payload is malformed or breaks a tree
            invariant.
    """
    if not isinstance(payload, Mapping):
        raise SnapshotError(
            f"snapshot must be a mapping, not {type(payload).__name__}"
        )
    if 'rootId' not in payload:
        raise SnapshotError("snapshot has no 'rootId'")
    items = payload.get('items')
    if not isinstance(items, Mapping):
        raise SnapshotError("snapshot has no 'items' mapping")

    root_id = str(payload['rootId'])
    nodes: dict[str, FolderNode] = {}
    for key, item in items.items():
        node = node_from_dict(item)
        if node.id != str(key):
            raise SnapshotError(f"item '{key}' has id '{node.id}'")
        nodes[node.id] = node

    try:
        return FolderTree(root_id, nodes)
    except TreeInvariantError as e:
        raise SnapshotError(str(e)) from e


def node_from_dict(item: Mapping[str, Any]) -> FolderNode:
    """Build a FolderNode from one snapshot item.

    'data' may be a dict with a 'name' key or a plain string; a missing
    'isExpanded' means collapsed; any other non-bool value is rejected.
    """
    if not isinstance(item, Mapping):
        raise SnapshotError(f"item must be a mapping, not {type(item).__name__}")
    if item.get('id') is None:
        raise SnapshotError(f"item has no id: {dict(item)!r}")

    children = item.get('children') or []
    if isinstance(children, (str, bytes)) or not hasattr(children, '__iter__'):
        raise SnapshotError(f"item '{item['id']}' has invalid children {children!r}")

    data = item.get('data')
    if isinstance(data, Mapping):
        name = data.get('name') or ''
    elif isinstance(data, str):
        name = data
    else:
        name = ''

    expanded = item.get('isExpanded', False)
    if expanded is None:
        expanded = False
    if not isinstance(expanded, bool):
        raise SnapshotError(
            f"item '{item['id']}' has non-boolean isExpanded {expanded!r}"
        )

    return FolderNode(
        id=str(item['id']),
        name=str(name),
        children=tuple(str(child) for child in children),
        expanded=expanded,
    )


def tree_to_dict(tree: FolderTree) -> dict[str, Any]:
    """Convert a FolderTree back to the snapshot shape."""
    return tree.as_dict()
