#
# Copyright OpenSearch Contributors
# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
#

from enum import Enum


class IndexState(Enum):
    DISCOVERED = "discovered"
    CONFLICT_CHECKED = "conflict_checked"
    READ_ONLY_LOCKED = "read_only_locked"
    REINDEXED = "reindexed"
    VERIFYING = "verifying"
    VERIFIED = "verified"
    FAILED = "failed"
    FINALIZED = "finalized"


# How the run ended for a single index
class MigrationOutcome(Enum):
    MIGRATED = "migrated"
    ALREADY_MIGRATED = "already migrated"
    BLOCKED = "blocked"
    LOCK_FAILED = "lock failed"
    FAILED = "failed"
    FINALIZE_FAILED = "finalize failed"
    DRYRUN = "dry-run"


# Outcomes that should make the overall run report an error
ERROR_OUTCOMES = frozenset({MigrationOutcome.LOCK_FAILED, MigrationOutcome.FAILED,
                            MigrationOutcome.FINALIZE_FAILED})

# Allowed forward transitions. FAILED is additionally reachable from any non-terminal state.
TRANSITIONS: dict[IndexState, frozenset] = {
    IndexState.DISCOVERED: frozenset({IndexState.CONFLICT_CHECKED, IndexState.READ_ONLY_LOCKED}),
    IndexState.CONFLICT_CHECKED: frozenset({IndexState.READ_ONLY_LOCKED, IndexState.FINALIZED}),
    IndexState.READ_ONLY_LOCKED: frozenset({IndexState.REINDEXED}),
    IndexState.REINDEXED: frozenset({IndexState.VERIFYING}),
    IndexState.VERIFYING: frozenset({IndexState.VERIFIED}),
    IndexState.VERIFIED: frozenset({IndexState.FINALIZED}),
    IndexState.FAILED: frozenset(),
    IndexState.FINALIZED: frozenset(),
}

TERMINAL_STATES = frozenset({IndexState.FAILED, IndexState.FINALIZED})
