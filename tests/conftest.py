# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures and fakes for FolderTree tests."""

import asyncio

import pytest

from genro_foldertree import (
    CreateFolderResponse,
    FolderTree,
    RemoteFolderError,
    tree_from_dict,
)


class FakeFolderApi:
    """In-memory RemoteFolderApi answering with queued ids or errors."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.requests = []
        self.gate = None

    async def create_folder(self, request):
        self.requests.append(request)
        if self.gate is not None:
            await self.gate.wait()
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return CreateFolderResponse(folder_id=answer)


class FakeQuerySource:
    """FolderQuerySource returning a fixed tree or raising."""

    def __init__(self, result):
        self.result = result
        self.calls = 0

    async def fetch_folder_tree(self):
        self.calls += 1
        if isinstance(self.result, BaseException):
            raise self.result
        return self.result


class ErrorLog:
    """Error reporter collecting (message, error) pairs."""

    def __init__(self):
        self.reports = []

    def __call__(self, message, error):
        self.reports.append((message, error))


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def docs_tree() -> FolderTree:
    """Root 'r' with a single childless folder 'a' named Docs."""
    return tree_from_dict({
        'rootId': 'r',
        'items': {
            'r': {'id': 'r', 'children': ['a'], 'data': ''},
            'a': {'id': 'a', 'children': [], 'data': {'name': 'Docs'},
                  'isExpanded': False},
        },
    })


@pytest.fixture
def nested_tree() -> FolderTree:
    """Root 'r' -> a(b, c(d)), e."""
    return tree_from_dict({
        'rootId': 'r',
        'items': {
            'r': {'id': 'r', 'children': ['a', 'e'], 'data': ''},
            'a': {'id': 'a', 'children': ['b', 'c'], 'data': {'name': 'A'},
                  'isExpanded': True},
            'b': {'id': 'b', 'children': [], 'data': {'name': 'B'}},
            'c': {'id': 'c', 'children': ['d'], 'data': {'name': 'C'}},
            'd': {'id': 'd', 'children': [], 'data': {'name': 'D'}},
            'e': {'id': 'e', 'children': [], 'data': {'name': 'E'}},
        },
    })


@pytest.fixture
def error_log() -> ErrorLog:
    return ErrorLog()


@pytest.fixture
def network_error() -> RemoteFolderError:
    return RemoteFolderError("POST /folders failed: connection refused")
