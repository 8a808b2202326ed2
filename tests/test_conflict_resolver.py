#
# Copyright OpenSearch Contributors
# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
#

import logging
import unittest
from unittest.mock import patch, MagicMock

from index_migrator import conflict_resolver
from index_migrator.conflict_resolver import ConflictResolution
from index_migrator.doc_count import DocCount
from index_migrator.exceptions import IndexManagementError
from index_migrator.index_migration import IndexMigration
from index_migrator.index_state import IndexState, MigrationOutcome
from tests import test_constants


class TestConflictResolver(unittest.TestCase):
    def setUp(self) -> None:
        logging.disable(logging.CRITICAL)

    def tearDown(self) -> None:
        logging.disable(logging.NOTSET)

    def test_decide(self):
        known_500 = DocCount.known(500)
        self.assertEqual(ConflictResolution.SKIP, conflict_resolver.decide(known_500, DocCount.known(500), False))
        self.assertEqual(ConflictResolution.SKIP, conflict_resolver.decide(known_500, DocCount.known(500), True))
        self.assertEqual(ConflictResolution.BLOCK,
                         conflict_resolver.decide(DocCount.known(700), DocCount.known(650), False))
        self.assertEqual(ConflictResolution.OVERWRITE,
                         conflict_resolver.decide(DocCount.known(700), DocCount.known(650), True))

    def test_decide_unknown_counts_block(self):
        for source, target in [(DocCount.unknown(), DocCount.known(0)), (DocCount.known(10), DocCount.unknown()),
                               (DocCount.unknown(), DocCount.unknown())]:
            self.assertEqual(ConflictResolution.BLOCK, conflict_resolver.decide(source, target, True))

    @patch('index_migrator.index_operations.delete_index')
    @patch('index_migrator.index_operations.doc_count')
    # Note that mock objects are passed bottom-up from the patch order above
    def test_resolve_already_migrated(self, mock_count: MagicMock, mock_delete: MagicMock):
        mock_count.side_effect = [DocCount.known(500), DocCount.known(500)]
        config = test_constants.create_config(overwrite_if_broken=True)
        migration = IndexMigration(test_constants.INDEX2_NAME)
        self.assertEqual(ConflictResolution.SKIP, conflict_resolver.resolve(migration, config))
        mock_count.assert_any_call(test_constants.INDEX2_NAME, config.source)
        mock_count.assert_any_call(test_constants.INDEX2_NAME, config.target)
        mock_delete.assert_not_called()
        self.assertEqual(IndexState.FINALIZED, migration.state)
        self.assertEqual(MigrationOutcome.ALREADY_MIGRATED, migration.outcome)

    @patch('index_migrator.index_operations.delete_index')
    @patch('index_migrator.index_operations.doc_count')
    def test_resolve_blocked_without_overwrite(self, mock_count: MagicMock, mock_delete: MagicMock):
        mock_count.side_effect = [DocCount.known(700), DocCount.known(650)]
        migration = IndexMigration(test_constants.INDEX1_NAME)
        resolution = conflict_resolver.resolve(migration, test_constants.create_config())
        self.assertEqual(ConflictResolution.BLOCK, resolution)
        mock_delete.assert_not_called()
        self.assertEqual(IndexState.CONFLICT_CHECKED, migration.state)
        self.assertEqual(MigrationOutcome.BLOCKED, migration.outcome)

    @patch('index_migrator.index_operations.delete_index')
    @patch('index_migrator.index_operations.doc_count')
    def test_resolve_blocked_on_unknown_count(self, mock_count: MagicMock, mock_delete: MagicMock):
        mock_count.side_effect = [DocCount.known(700), DocCount.unknown()]
        migration = IndexMigration(test_constants.INDEX1_NAME)
        config = test_constants.create_config(overwrite_if_broken=True)
        self.assertEqual(ConflictResolution.BLOCK, conflict_resolver.resolve(migration, config))
        mock_delete.assert_not_called()
        self.assertEqual(MigrationOutcome.BLOCKED, migration.outcome)
        self.assertIn("could not be determined", migration.reason)

    @patch('index_migrator.index_operations.delete_index')
    @patch('index_migrator.index_operations.doc_count')
    def test_resolve_overwrite(self, mock_count: MagicMock, mock_delete: MagicMock):
        mock_count.side_effect = [DocCount.known(700), DocCount.known(650)]
        migration = IndexMigration(test_constants.INDEX1_NAME)
        config = test_constants.create_config(overwrite_if_broken=True)
        self.assertEqual(ConflictResolution.OVERWRITE, conflict_resolver.resolve(migration, config))
        # Only the target copy is deleted
        mock_delete.assert_called_once_with(test_constants.INDEX1_NAME, config.target)
        # Migration may proceed
        self.assertIsNone(migration.outcome)
        self.assertEqual(IndexState.CONFLICT_CHECKED, migration.state)

    @patch('index_migrator.index_operations.delete_index')
    @patch('index_migrator.index_operations.doc_count')
    def test_resolve_overwrite_delete_failure(self, mock_count: MagicMock, mock_delete: MagicMock):
        mock_count.side_effect = [DocCount.known(700), DocCount.known(650)]
        mock_delete.side_effect = IndexManagementError("test")
        migration = IndexMigration(test_constants.INDEX1_NAME)
        conflict_resolver.resolve(migration, test_constants.create_config(overwrite_if_broken=True))
        self.assertEqual(IndexState.FAILED, migration.state)
        self.assertEqual(MigrationOutcome.FAILED, migration.outcome)

    @patch('index_migrator.index_operations.delete_index')
    @patch('index_migrator.index_operations.doc_count')
    def test_resolve_overwrite_dryrun(self, mock_count: MagicMock, mock_delete: MagicMock):
        mock_count.side_effect = [DocCount.known(700), DocCount.known(650)]
        migration = IndexMigration(test_constants.INDEX1_NAME)
        config = test_constants.create_config(overwrite_if_broken=True, dryrun=True)
        self.assertEqual(ConflictResolution.OVERWRITE, conflict_resolver.resolve(migration, config))
        mock_delete.assert_not_called()
        self.assertEqual(MigrationOutcome.DRYRUN, migration.outcome)


if __name__ == '__main__':
    unittest.main()
