# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FolderTree exceptions."""

from __future__ import annotations


class FolderTreeError(Exception):
    """Base exception for FolderTree errors."""

    pass


class TreeInvariantError(FolderTreeError):
    """Raised when a mutation would break the tree shape.

    Duplicate ids, missing parents, dangling children and cycles are
    programming faults: the mutation is aborted and the tree is left as is.
    """

    pass


class SnapshotError(FolderTreeError):
    """Raised when a folder snapshot payload cannot be normalized."""

    pass


class RemoteFolderError(FolderTreeError):
    """Raised when the remote folder service fails or answers garbage."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
