#
# Copyright OpenSearch Contributors
# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
#

import logging

from index_migrator import index_operations
from index_migrator.exceptions import IndexManagementError
from index_migrator.index_migration import IndexMigration
from index_migrator.index_state import IndexState, MigrationOutcome
from index_migrator.migration_config import MigrationConfig


def report_failure(migration: IndexMigration):
    if migration.write_blocked:
        lock_status = "the source index stays write-blocked for manual inspection or a later run"
    else:
        lock_status = "the source index is NOT write-blocked and may have received writes during the copy"
    logging.error(f"Migration of index [{migration.name}] failed ({migration.describe_counts()}): " +
                  f"{migration.reason}. No indices were deleted; {lock_status}.")


# Commits a verified migration by deleting the source index, and optionally closing the
# target index. Anything short of a verified, known, matching count is reported instead.
def finalize(migration: IndexMigration, config: MigrationConfig):
    if migration.state != IndexState.VERIFIED or not migration.counts_match():
        if migration.state != IndexState.FAILED:
            migration.fail(MigrationOutcome.FAILED, "migration was not verified")
        report_failure(migration)
        return
    try:
        index_operations.delete_index(migration.name, config.source)
    except IndexManagementError as e:
        logging.error(f"Index [{migration.name}] was verified but the source could not be deleted: {e!s}")
        migration.finish(MigrationOutcome.FINALIZE_FAILED, "source index could not be deleted")
        return
    logging.info(f"Deleted source index [{migration.name}]")
    reason = ""
    if config.close_on_success:
        try:
            index_operations.close_index(migration.name, config.target)
            logging.info(f"Closed target index [{migration.name}]")
        except IndexManagementError as e:
            # Data is safe on the target at this point, only the close is missing
            logging.warning(f"{e!s}")
            reason = "target index could not be closed"
    migration.transition_to(IndexState.FINALIZED)
    migration.finish(MigrationOutcome.MIGRATED, reason)
