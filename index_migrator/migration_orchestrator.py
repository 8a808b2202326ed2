#
# Copyright OpenSearch Contributors
# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
#

import logging

from index_migrator import conflict_resolver, finalizer, index_filter, index_operations, utils, verifier
from index_migrator.exceptions import IndexManagementError
from index_migrator.index_migration import IndexMigration
from index_migrator.index_state import IndexState, MigrationOutcome
from index_migrator.migration_config import MigrationConfig
from index_migrator.migration_result import MigrationResult


# Returns the ordered source candidates and the set of matching index names already on the target
def discover_candidates(config: MigrationConfig) -> tuple[list[str], set[str]]:
    source_indices = index_filter.filter_indices(index_operations.fetch_indices(config.source,
                                                                                config.include_pattern),
                                                 config.exclude_pattern)
    logging.info("Source candidates: " + utils.string_from_set(source_indices))
    if not source_indices:
        return source_indices, set()
    target_indices = set(index_filter.filter_indices(index_operations.fetch_indices(config.target,
                                                                                    config.include_pattern),
                                                     config.exclude_pattern))
    logging.info("Matching indices already on target: " + utils.string_from_set(target_indices))
    return source_indices, target_indices


def __lock_and_copy(migration: IndexMigration, config: MigrationConfig) -> bool:
    try:
        index_operations.set_read_only(migration.name, config.source)
        migration.write_blocked = True
        logging.info(f"Blocked writes on source index [{migration.name}]")
    except IndexManagementError as e:
        if config.abort_on_lock_failure:
            logging.error(f"{e!s}, skipping index")
            migration.fail(MigrationOutcome.LOCK_FAILED, "source index could not be write-blocked")
            return False
        logging.warning(f"{e!s}, continuing without a write block. Writes made during the copy may be lost.")
    migration.transition_to(IndexState.READ_ONLY_LOCKED)
    logging.info(f"Reindexing [{migration.name}] from remote source cluster...")
    try:
        index_operations.reindex_from_remote(migration.name, config.source, config.target,
                                             config.reindex_timeout_seconds)
    except IndexManagementError as e:
        # Doc count verification decides the outcome, not the reindex response
        logging.warning(f"{e!s}, verifying doc counts anyway")
    migration.transition_to(IndexState.REINDEXED)
    return True


def migrate_index(name: str, exists_on_target: bool, config: MigrationConfig) -> IndexMigration:
    migration = IndexMigration(name)
    logging.info(f"Processing index [{name}]")
    if exists_on_target:
        conflict_resolver.resolve(migration, config)
        # Skipped, blocked, dry-run or failed while clearing the target
        if migration.outcome is not None:
            return migration
    elif config.dryrun:
        migration.source_count = index_operations.doc_count(name, config.source)
        logging.info(f"Index [{name}] would be migrated ({migration.source_count} docs)")
        migration.finish(MigrationOutcome.DRYRUN, "would be migrated")
        return migration
    if __lock_and_copy(migration, config):
        verifier.verify(migration, config)
        finalizer.finalize(migration, config)
    return migration


def print_report(result: MigrationResult):  # pragma no cover
    logging.info("Migrated indices: " + utils.string_from_set(result.get_indices(MigrationOutcome.MIGRATED)))
    logging.info("Already migrated (no action taken): " +
                 utils.string_from_set(result.get_indices(MigrationOutcome.ALREADY_MIGRATED)))
    logging.info("Blocked by an existing target copy (not migrated): " +
                 utils.string_from_set(result.get_indices(MigrationOutcome.BLOCKED)))
    if result.get_indices(MigrationOutcome.DRYRUN):
        logging.info("Dry-run, would be migrated: " +
                     utils.string_from_set(result.get_indices(MigrationOutcome.DRYRUN)))
    for outcome in [MigrationOutcome.LOCK_FAILED, MigrationOutcome.FAILED, MigrationOutcome.FINALIZE_FAILED]:
        for migration in result.get_migrations(outcome):
            logging.error(f"{outcome.value.capitalize()}: [{migration.name}] " +
                          f"({migration.describe_counts()}) - {migration.reason}")


# Migrates every candidate index, strictly one after another. A failure on one
# index is recorded in the result and never stops the remaining candidates.
def run(config: MigrationConfig) -> MigrationResult:
    result = MigrationResult()
    if config.dryrun:
        logging.info("Dry-run flag enabled, no actual changes will be made\n")
    source_indices, target_indices = discover_candidates(config)
    if not source_indices:
        logging.info("No source indices to migrate")
        return result
    for name in source_indices:
        result.add(migrate_index(name, name in target_indices, config))
    print_report(result)
    return result
