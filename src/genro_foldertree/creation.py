# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Folder creation flow.

Creation is confirmed-only: the store is touched after the remote service
answers, and only if it answered with an id. A failed request leaves the
tree exactly as it was, so there is nothing to roll back.
"""

from __future__ import annotations

import logging
from typing import Callable

from .api import CreateFolderRequest, RemoteFolderApi
from .config import DEFAULT_FOLDER_NAME
from .exceptions import TreeInvariantError
from .node import FolderNode
from .store import FolderTreeStore

logger = logging.getLogger(__name__)

ErrorReporter = Callable[[str, BaseException], None]


def log_error(message: str, error: BaseException) -> None:
    """Default error reporter: log the error with its traceback."""
    logger.error("%s: %s", message, error, exc_info=error)


class FolderCreationFlow:
    """Creates folders remotely and commits them into a FolderTreeStore.

    Concurrent calls for the same parent are not serialized: each computes
    its index before awaiting the service, so two quick calls may send the
    same index.
    """

    def __init__(
        self,
        store: FolderTreeStore,
        api: RemoteFolderApi,
        default_name: str = DEFAULT_FOLDER_NAME,
        report_error: ErrorReporter = log_error,
    ) -> None:
        self.store = store
        self.api = api
        self.default_name = default_name
        self.report_error = report_error

    def build_request(self, parent_id: str) -> CreateFolderRequest:
        """Build the request that appends a folder after parent_id's children."""
        return CreateFolderRequest(
            parent_id=parent_id,
            name=self.default_name,
            index=self.store.tree.children_length(parent_id),
        )

    async def create_folder(self, parent_id: str) -> FolderNode | None:
        """Create a folder under parent_id.

        Returns:
            The committed FolderNode, or None if the request failed or the
            store was closed while it was in flight.

        Raises:
            TreeInvariantError: If the service returned an id already in the
                tree, or parent_id vanished before the answer arrived.
        """
        request = self.build_request(parent_id)
        try:
            response = await self.api.create_folder(request)
        except Exception as e:
            self.report_error(f"Failed to create folder under {parent_id!r}", e)
            return None

        node = FolderNode(id=response.folder_id, name=request.name)
        try:
            committed = self.store.commit_new_node(parent_id, node)
        except TreeInvariantError as e:
            self.report_error(f"Cannot commit folder {node.id!r}", e)
            raise
        if not committed:
            return None

        logger.info("created folder %r under %r at index %d",
                    node.id, parent_id, request.index)
        return node
