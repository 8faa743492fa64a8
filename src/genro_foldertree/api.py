# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Remote folder service boundary.

Two collaborators live outside the tree core:

- FolderQuerySource: fetch_folder_tree() returns the initial FolderTree
- RemoteFolderApi: create_folder(request) creates a folder under a parent
  at a given index and returns the server-assigned id

FolderApiClient implements both over HTTP with httpx::

    async with FolderApiClient(FolderTreeConfig.from_env()) as client:
        tree = await client.fetch_folder_tree()
        response = await client.create_folder(
            CreateFolderRequest(parent_id='a', name='Docs', index=0)
        )
        response.folder_id
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .config import FolderTreeConfig
from .exceptions import RemoteFolderError
from .loading import tree_from_dict
from .tree import FolderTree

logger = logging.getLogger(__name__)


# ==================== Wire models ====================


class CreateFolderRequest(BaseModel):
    """Body of a folder creation request."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    parent_id: str = Field(alias='parentId')
    name: str
    index: int = Field(ge=0, description="Position among the parent's children")


class CreateFolderResponse(BaseModel):
    """Body of a folder creation response."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    folder_id: str = Field(alias='folderId')

    @field_validator('folder_id', mode='before')
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # Some backends send numeric ids
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


# ==================== Collaborator protocols ====================


class FolderQuerySource(Protocol):
    async def fetch_folder_tree(self) -> FolderTree: ...


class RemoteFolderApi(Protocol):
    async def create_folder(self, request: CreateFolderRequest) -> CreateFolderResponse: ...


# ==================== HTTP client ====================


class FolderApiClient:
    """HTTP client for the folder service.

    Transport failures, non-2xx answers and unparsable bodies all surface as
    RemoteFolderError. The client performs no retries.
    """

    def __init__(
        self,
        config: FolderTreeConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Service settings. Defaults to FolderTreeConfig().
            client: Optional preconfigured httpx.AsyncClient. When given, the
                caller owns it and aclose() leaves it open.
        """
        self.config = config or FolderTreeConfig()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
        )

    async def __aenter__(self) -> FolderApiClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise RemoteFolderError(
                f"{method} {url} failed with HTTP {status}", status_code=status
            ) from e
        except httpx.HTTPError as e:
            raise RemoteFolderError(f"{method} {url} failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise RemoteFolderError(
                f"{method} {url} returned invalid JSON",
                status_code=response.status_code,
            ) from e

    async def fetch_folder_tree(self) -> FolderTree:
        """Fetch and normalize the whole folder tree.

        Raises:
            RemoteFolderError: On transport or HTTP failure.
            SnapshotError: If the payload is not a valid tree.
        """
        payload = await self._request('GET', '/folders')
        tree = tree_from_dict(payload)
        logger.debug("fetched folder tree with %d nodes", len(tree))
        return tree

    async def create_folder(self, request: CreateFolderRequest) -> CreateFolderResponse:
        """Create a folder and return the server-assigned id.

        Raises:
            RemoteFolderError: On transport or HTTP failure, or when the
                response has no usable folderId.
        """
        payload = await self._request(
            'POST', '/folders', json=request.model_dump(by_alias=True)
        )
        try:
            return CreateFolderResponse.model_validate(payload)
        except ValidationError as e:
            raise RemoteFolderError(f"invalid create folder response: {payload!r}") from e
