# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FolderPanel - The folder list component without its pixels.

Wires a FolderTreeStore, a FolderCreationFlow and a FolderRowPolicy
together and drives their lifecycle::

    async with FolderApiClient(config) as client:
        panel = FolderPanel(client, client, on_select_folder=select)
        await panel.mount()
        for row in panel.rows():
            draw(row)
        ...
        panel.unmount()
"""

from __future__ import annotations

import logging
from typing import Callable

from .api import FolderQuerySource, RemoteFolderApi
from .config import FolderTreeConfig
from .creation import ErrorReporter, FolderCreationFlow, log_error
from .interaction import FolderRow, FolderRowPolicy
from .node import FolderNode
from .store import FolderTreeStore

logger = logging.getLogger(__name__)


class FolderPanel:
    """A mounted folder tree: store, creation flow and row policy."""

    def __init__(
        self,
        query_source: FolderQuerySource,
        api: RemoteFolderApi,
        on_select_folder: Callable[[str], None],
        selected_folder_id: Callable[[], str | None] = lambda: None,
        config: FolderTreeConfig | None = None,
        report_error: ErrorReporter = log_error,
    ) -> None:
        self.config = config or FolderTreeConfig()
        self.query_source = query_source
        self.store = FolderTreeStore(root_id=self.config.root_id)
        self.flow = FolderCreationFlow(
            self.store,
            api,
            default_name=self.config.default_folder_name,
            report_error=report_error,
        )
        self.policy = FolderRowPolicy(
            self.store,
            self.flow,
            on_select_folder=on_select_folder,
            selected_folder_id=selected_folder_id,
        )

    async def mount(self) -> bool:
        """Fetch the folder tree once and load it into the store.

        A failed fetch keeps the empty tree; there is no retry.

        Returns:
            True if a snapshot was loaded.
        """
        try:
            tree = await self.query_source.fetch_folder_tree()
        except Exception as e:
            logger.warning("folder tree fetch failed, keeping empty tree: %s", e)
            return False
        if tree is None:
            return False
        return self.store.load(tree)

    def unmount(self) -> None:
        """Tear down the panel. Requests still in flight commit nothing."""
        self.store.close()

    async def create_folder(self, parent_id: str) -> FolderNode | None:
        return await self.flow.create_folder(parent_id)

    def rows(self) -> list[FolderRow]:
        return self.policy.rows()
