#
# Copyright OpenSearch Contributors
# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
#

import logging
from enum import Enum

from index_migrator import index_operations
from index_migrator.doc_count import DocCount
from index_migrator.exceptions import IndexManagementError
from index_migrator.index_migration import IndexMigration
from index_migrator.index_state import IndexState, MigrationOutcome
from index_migrator.migration_config import MigrationConfig


class ConflictResolution(Enum):
    # Counts match, the index was migrated by an earlier run
    SKIP = "skip"
    # Counts differ and overwrite is enabled, the target copy is deleted and rebuilt
    OVERWRITE = "overwrite"
    # Counts differ (or cannot be read) and the target copy is left alone for this run
    BLOCK = "block"


def decide(source_count: DocCount, target_count: DocCount, overwrite_if_broken: bool) -> ConflictResolution:
    if source_count.matches(target_count):
        return ConflictResolution.SKIP
    # Never act on a count we could not observe
    if not source_count.is_known() or not target_count.is_known():
        return ConflictResolution.BLOCK
    return ConflictResolution.OVERWRITE if overwrite_if_broken else ConflictResolution.BLOCK


# Handles an index that already exists on the target cluster. On return the migration
# either holds a final outcome (skip/block/failure) or may proceed to a fresh copy.
def resolve(migration: IndexMigration, config: MigrationConfig) -> ConflictResolution:
    migration.update_counts(index_operations.doc_count(migration.name, config.source),
                            index_operations.doc_count(migration.name, config.target))
    migration.transition_to(IndexState.CONFLICT_CHECKED)
    resolution = decide(migration.source_count, migration.target_count, config.overwrite_if_broken)
    if resolution == ConflictResolution.SKIP:
        logging.info(f"Index [{migration.name}] already migrated ({migration.describe_counts()}), skipping")
        migration.transition_to(IndexState.FINALIZED)
        migration.finish(MigrationOutcome.ALREADY_MIGRATED)
    elif resolution == ConflictResolution.BLOCK:
        if migration.source_count.is_known() and migration.target_count.is_known():
            reason = "target copy has a different doc count and overwrite is disabled"
        else:
            reason = "doc count could not be determined on both clusters"
        logging.warning(f"Index [{migration.name}] blocked ({migration.describe_counts()}): {reason}")
        migration.finish(MigrationOutcome.BLOCKED, reason)
    elif config.dryrun:
        logging.info(f"Index [{migration.name}] has a broken target copy ({migration.describe_counts()}), " +
                     "would delete and re-migrate")
        migration.finish(MigrationOutcome.DRYRUN, "target copy would be deleted and re-migrated")
    else:
        logging.warning(f"Index [{migration.name}] has a broken target copy ({migration.describe_counts()}), " +
                        "deleting it before re-migrating")
        try:
            index_operations.delete_index(migration.name, config.target)
        except IndexManagementError as e:
            logging.error(f"Could not delete broken target copy of [{migration.name}]: {e!s}")
            migration.fail(MigrationOutcome.FAILED, "could not delete broken target copy")
    return resolution
