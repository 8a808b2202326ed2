#
# Copyright OpenSearch Contributors
# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
#

from dataclasses import dataclass, field
from typing import Optional

from index_migrator.doc_count import DocCount
from index_migrator.exceptions import InvalidStateTransitionError
from index_migrator.index_state import IndexState, MigrationOutcome, TERMINAL_STATES, TRANSITIONS


# Tracks a single index through one migration run. Instances are never persisted;
# the next run reconstructs everything it needs from the clusters themselves.
@dataclass
class IndexMigration:
    name: str
    source_count: DocCount = field(default_factory=DocCount.unknown)
    target_count: DocCount = field(default_factory=DocCount.unknown)
    state: IndexState = IndexState.DISCOVERED
    outcome: Optional[MigrationOutcome] = None
    reason: str = ""
    # Set once the source index has actually been write-blocked
    write_blocked: bool = False

    def transition_to(self, new_state: IndexState):
        allowed = TRANSITIONS[self.state]
        if new_state == IndexState.FAILED and self.state not in TERMINAL_STATES:
            allowed = allowed | {IndexState.FAILED}
        if new_state not in allowed:
            raise InvalidStateTransitionError(
                f"Index [{self.name}] cannot move from {self.state.name} to {new_state.name}")
        self.state = new_state

    def update_counts(self, source_count: DocCount, target_count: DocCount):
        self.source_count = source_count
        self.target_count = target_count

    def counts_match(self) -> bool:
        return self.source_count.matches(self.target_count)

    def finish(self, outcome: MigrationOutcome, reason: str = ""):
        self.outcome = outcome
        self.reason = reason

    def fail(self, outcome: MigrationOutcome, reason: str):
        self.transition_to(IndexState.FAILED)
        self.finish(outcome, reason)

    def describe_counts(self) -> str:
        return f"source={self.source_count}, target={self.target_count}"
