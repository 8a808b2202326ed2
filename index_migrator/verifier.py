#
# Copyright OpenSearch Contributors
# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
#

import logging
import time

from index_migrator import index_operations
from index_migrator.doc_count import DocCount
from index_migrator.exceptions import IndexManagementError
from index_migrator.index_migration import IndexMigration
from index_migrator.index_state import IndexState, MigrationOutcome
from index_migrator.migration_config import MigrationConfig


# Polls doc counts on both clusters until they converge, or until the configured
# number of attempts is used up. Attempts are separated by the configured interval,
# and polling stops as soon as the counts match.
def verify(migration: IndexMigration, config: MigrationConfig) -> bool:
    migration.transition_to(IndexState.VERIFYING)
    # Make freshly copied documents visible to the count API
    try:
        index_operations.flush(migration.name, config.target)
    except IndexManagementError as e:
        logging.warning(f"{e!s}, counts may take longer to converge")
    for attempt in range(1, config.verify_retries + 1):
        migration.update_counts(index_operations.doc_count(migration.name, config.source),
                                index_operations.doc_count(migration.name, config.target))
        if migration.counts_match():
            logging.info(f"Index [{migration.name}] verified on attempt {attempt}: {migration.source_count} docs")
            migration.transition_to(IndexState.VERIFIED)
            return True
        logging.info(f"Index [{migration.name}] counts differ on attempt {attempt} of {config.verify_retries} " +
                     f"({migration.describe_counts()})")
        if attempt < config.verify_retries:
            time.sleep(config.verify_interval_seconds)
    reason = f"doc counts did not converge after {config.verify_retries} attempts"
    if migration.source_count.matches(DocCount.known(0)) and not migration.target_count.is_known():
        # Reindexing an empty index copies nothing, so the target index is never created
        reason += "; the source index is empty and was not created on the target"
    migration.fail(MigrationOutcome.FAILED, reason)
    return False
