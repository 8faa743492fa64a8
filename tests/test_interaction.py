# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for FolderRowPolicy gestures and the render hook."""

import asyncio
import gc
import logging

import pytest

from genro_foldertree import (
    FolderCreationFlow,
    FolderRowPolicy,
    FolderTreeStore,
    RowTarget,
)

from conftest import FakeFolderApi, run


def make_policy(tree, *answers, selected=None):
    store = FolderTreeStore(tree)
    api = FakeFolderApi(*answers)
    flow = FolderCreationFlow(store, api)
    selections = []
    policy = FolderRowPolicy(
        store,
        flow,
        on_select_folder=selections.append,
        selected_folder_id=lambda: selected,
    )
    return policy, store, api, selections


class TestRowClick:
    """Tests for clicks on the row background."""

    def test_childless_folder_expands(self, docs_tree):
        """Test clicking 'a' with no children expands it anyway."""
        policy, store, _, _ = make_policy(docs_tree)
        policy.dispatch('a', RowTarget.ROW)
        assert store.tree['a'].expanded is True
        assert store.tree['a'].children == ()

    def test_expanded_folder_with_children_collapses(self, nested_tree):
        """Test clicking an open folder closes it."""
        policy, store, _, _ = make_policy(nested_tree)
        policy.dispatch('a', RowTarget.ROW)
        assert store.tree['a'].expanded is False

    def test_collapsed_folder_with_children_expands(self, nested_tree):
        """Test clicking a closed folder opens it."""
        policy, store, _, _ = make_policy(nested_tree)
        policy.dispatch('c', RowTarget.ROW)
        assert store.tree['c'].expanded is True

    def test_expanded_childless_folder_stays_expanded(self, docs_tree):
        """Test a second click on a childless folder expands again."""
        policy, store, _, _ = make_policy(docs_tree)
        policy.dispatch('a', RowTarget.ROW)
        policy.dispatch('a', RowTarget.ROW)
        assert store.tree['a'].expanded is True

    def test_stale_row_is_ignored(self, nested_tree):
        """Test a click on a vanished id changes nothing."""
        policy, store, _, selections = make_policy(nested_tree)
        event = policy.dispatch('gone', RowTarget.ROW)
        assert store.tree is nested_tree
        assert event.handled_by == ['row_clicked']
        assert selections == []

    def test_row_click_does_not_select(self, nested_tree):
        """Test the row background never selects."""
        policy, _, _, selections = make_policy(nested_tree)
        policy.dispatch('a', RowTarget.ROW)
        assert selections == []


class TestLabelClick:
    """Tests for clicks on the folder name."""

    def test_selects_without_toggling(self, nested_tree):
        """Test the label selects and stops propagation."""
        policy, store, _, selections = make_policy(nested_tree)
        event = policy.dispatch('c', RowTarget.LABEL)
        assert selections == ['c']
        assert store.tree is nested_tree
        assert event.propagation_stopped is True
        assert event.handled_by == ['label_clicked']

    def test_string_target_accepted(self, nested_tree):
        """Test targets may be given by value."""
        policy, _, _, selections = make_policy(nested_tree)
        policy.dispatch('b', 'label')
        assert selections == ['b']


class TestAddClick:
    """Tests for clicks on the add button."""

    def test_creates_child_of_clicked_row(self, docs_tree):
        """Test the new folder becomes a child of the row."""
        policy, store, api, selections = make_policy(docs_tree, 'b')

        async def scenario():
            event = policy.dispatch('a', RowTarget.ADD)
            node = await event.task
            return event, node

        event, node = run(scenario())
        assert node.id == 'b'
        assert api.requests[0].parent_id == 'a'
        assert store.tree.children_of('a') == ('b',)
        assert store.tree['a'].expanded is True
        assert selections == []
        assert event.handled_by == ['add_clicked', 'add_area_clicked']

    def test_add_does_not_toggle_row(self, nested_tree):
        """Test the row handler never runs for an add click."""
        policy, store, _, _ = make_policy(nested_tree, 'x')

        async def scenario():
            policy.dispatch('a', RowTarget.ADD)
            # the add click must not have collapsed 'a' synchronously
            assert store.tree['a'].expanded is True
            await policy.wait_pending()

        run(scenario())
        assert store.tree['a'].expanded is True
        assert store.tree.children_of('a') == ('b', 'c', 'x')

    def test_add_requires_running_loop(self, docs_tree):
        """Test scheduling outside an event loop fails loudly."""
        policy, _, _, _ = make_policy(docs_tree, 'b')
        with pytest.raises(RuntimeError):
            policy.dispatch('a', RowTarget.ADD)

    def test_wait_pending_swallows_reported_failures(self, nested_tree):
        """Test wait_pending() returns even if a creation raised."""
        policy, store, _, _ = make_policy(nested_tree, 'd')

        async def scenario():
            event = policy.dispatch('a', RowTarget.ADD)
            await policy.wait_pending()
            return event

        event = run(scenario())
        assert event.task.done()
        assert store.tree is nested_tree

    def test_unawaited_failed_add_is_not_logged_by_asyncio(self, nested_tree, caplog):
        """Test a colliding creation nobody awaits only reaches the error reporter."""
        reports = []
        store = FolderTreeStore(nested_tree)
        flow = FolderCreationFlow(store, FakeFolderApi('d'),
                                  report_error=lambda message, error: reports.append(error))
        policy = FolderRowPolicy(store, flow, on_select_folder=lambda _id: None)

        async def scenario():
            task = policy.dispatch('a', RowTarget.ADD).task
            while not task.done():
                await asyncio.sleep(0)
            # let the done callbacks run
            await asyncio.sleep(0)
            return task.cancelled()

        with caplog.at_level(logging.ERROR, logger='asyncio'):
            assert run(scenario()) is False
            gc.collect()
        assert store.tree is nested_tree
        assert len(reports) == 1
        assert not [r for r in caplog.records if r.name == 'asyncio']


class TestRenderHook:
    """Tests for render(), rows() and the expand/collapse callbacks."""

    def test_render_row(self, nested_tree):
        """Test a rendered row mirrors its node."""
        policy, _, _, _ = make_policy(nested_tree, selected='c')
        row = policy.render(nested_tree['c'], depth=1)
        assert (row.id, row.name, row.depth) == ('c', 'C', 1)
        assert row.has_children is True
        assert row.expanded is False
        assert row.active is True
        assert policy.render(nested_tree['b']).active is False

    def test_rows_follow_visibility(self, nested_tree):
        """Test rows() lists only visible folders, with depth."""
        policy, _, _, _ = make_policy(nested_tree)
        assert [(r.id, r.depth) for r in policy.rows()] == [
            ('a', 0), ('b', 1), ('c', 1), ('e', 0),
        ]
        policy.on_expand('c')
        assert [r.id for r in policy.rows()] == ['a', 'b', 'c', 'd', 'e']
        policy.on_collapse('a')
        assert [r.id for r in policy.rows()] == ['a', 'e']

    def test_row_gesture_shortcuts(self, nested_tree):
        """Test FolderRow click helpers dispatch through the policy."""
        policy, store, _, selections = make_policy(nested_tree)
        row = policy.render(store.tree['c'], depth=1)
        row.click_label()
        row.click_row()
        assert selections == ['c']
        assert store.tree['c'].expanded is True

    def test_empty_tree_has_no_rows(self):
        """Test the root itself is never rendered."""
        policy, _, _, _ = make_policy(None)
        assert policy.rows() == []
