# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-FolderTree - Folder tree state kept in step with a remote store.

An immutable folder hierarchy, a store that owns it, a confirmed-only
creation flow and the click policy of a folder list row.
"""

import logging

__version__ = "0.1.0"

from .api import (
    CreateFolderRequest,
    CreateFolderResponse,
    FolderApiClient,
    FolderQuerySource,
    RemoteFolderApi,
)
from .config import FolderTreeConfig
from .creation import FolderCreationFlow, log_error
from .exceptions import (
    FolderTreeError,
    RemoteFolderError,
    SnapshotError,
    TreeInvariantError,
)
from .interaction import FolderRow, FolderRowPolicy, RowEvent, RowTarget, TreeRenderer
from .loading import node_from_dict, tree_from_dict, tree_to_dict
from .node import FolderNode
from .panel import FolderPanel
from .store import FolderTreeStore
from .tree import FolderTree

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core classes
    "FolderNode",
    "FolderTree",
    "FolderTreeStore",
    # Loading
    "tree_from_dict",
    "tree_to_dict",
    "node_from_dict",
    # Flow and interaction
    "FolderCreationFlow",
    "FolderRowPolicy",
    "FolderRow",
    "RowEvent",
    "RowTarget",
    "TreeRenderer",
    "FolderPanel",
    "log_error",
    # Remote service
    "FolderApiClient",
    "FolderQuerySource",
    "RemoteFolderApi",
    "CreateFolderRequest",
    "CreateFolderResponse",
    "FolderTreeConfig",
    # Exceptions
    "FolderTreeError",
    "TreeInvariantError",
    "SnapshotError",
    "RemoteFolderError",
]
