#
# Copyright OpenSearch Contributors
# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
#

from dataclasses import dataclass, field

from index_migrator.index_migration import IndexMigration
from index_migrator.index_state import ERROR_OUTCOMES, MigrationOutcome


@dataclass
class MigrationResult:
    # Processed indices, in the order they were handled
    migrations: list[IndexMigration] = field(default_factory=list)

    def add(self, migration: IndexMigration):
        self.migrations.append(migration)

    def get_migrations(self, outcome: MigrationOutcome) -> list[IndexMigration]:
        return [m for m in self.migrations if m.outcome == outcome]

    def get_indices(self, outcome: MigrationOutcome) -> set[str]:
        return {m.name for m in self.get_migrations(outcome)}

    def has_errors(self) -> bool:
        return any(m.outcome in ERROR_OUTCOMES for m in self.migrations)
