# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FolderTree configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_BASE_URL = 'http://localhost:8080/api'
DEFAULT_TIMEOUT = 10.0
# "Untitled", the name every new folder gets until the user renames it
DEFAULT_FOLDER_NAME = '제목없음'


@dataclass(frozen=True)
class FolderTreeConfig:
    """Settings shared by the API client and the creation flow.

    Attributes:
        base_url: Root URL of the folder service, without trailing slash.
        timeout: HTTP timeout in seconds.
        default_folder_name: Name sent for every newly created folder.
        root_id: Root id of the empty tree shown before the first load.
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    default_folder_name: str = DEFAULT_FOLDER_NAME
    root_id: str = ''

    @classmethod
    def from_env(
        cls,
        prefix: str = 'FOLDERTREE_',
        environ: Mapping[str, str] | None = None,
    ) -> FolderTreeConfig:
        """Build a config from environment variables.

        Reads {prefix}BASE_URL, {prefix}TIMEOUT and {prefix}DEFAULT_NAME;
        unset variables keep their defaults.

        Raises:
            ValueError: If the timeout is not a positive number.
        """
        env = os.environ if environ is None else environ
        timeout_raw = env.get(f'{prefix}TIMEOUT')
        timeout = DEFAULT_TIMEOUT
        if timeout_raw is not None:
            try:
                timeout = float(timeout_raw)
            except ValueError:
                raise ValueError(
                    f"{prefix}TIMEOUT must be a number, got {timeout_raw!r}"
                ) from None
            if timeout <= 0:
                raise ValueError(f"{prefix}TIMEOUT must be positive, got {timeout}")

        return cls(
            base_url=env.get(f'{prefix}BASE_URL', DEFAULT_BASE_URL).rstrip('/'),
            timeout=timeout,
            default_folder_name=env.get(f'{prefix}DEFAULT_NAME', DEFAULT_FOLDER_NAME),
        )
