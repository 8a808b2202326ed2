#
# Copyright OpenSearch Contributors
# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
#

import re
from dataclasses import dataclass, replace
from typing import Optional

import yaml

from index_migrator import endpoint_utils
from index_migrator.endpoint_info import EndpointInfo
from index_migrator.exceptions import MigrationConfigError
from index_migrator.index_filter import default_exclude_pattern

# Constants
SOURCE_KEY = "source"
TARGET_KEY = "target"
MIGRATION_KEY = "migration"
INCLUDE_KEY = "include"
EXCLUDE_KEY = "exclude"
OVERWRITE_KEY = "overwrite_if_broken"
CLOSE_KEY = "close_on_success"
ABORT_ON_LOCK_FAILURE_KEY = "abort_on_lock_failure"
RETRIES_KEY = "verify_retries"
INTERVAL_KEY = "verify_interval_seconds"
REINDEX_TIMEOUT_KEY = "reindex_timeout_seconds"
DEFAULT_INCLUDE_PATTERN = "*"
DEFAULT_VERIFY_RETRIES = 6
DEFAULT_VERIFY_INTERVAL_SECONDS = 10
__BOOL_KEYS = [OVERWRITE_KEY, CLOSE_KEY, ABORT_ON_LOCK_FAILURE_KEY]


# Process-wide settings for a migration run. Read once at startup and passed
# explicitly to every component; never modified while the run is in progress.
@dataclass(frozen=True)
class MigrationConfig:
    source: EndpointInfo
    target: EndpointInfo
    include_pattern: str = DEFAULT_INCLUDE_PATTERN
    # Regex of names to leave out. None disables exclusion.
    exclude_pattern: Optional[str] = None
    overwrite_if_broken: bool = False
    close_on_success: bool = False
    abort_on_lock_failure: bool = False
    verify_retries: int = DEFAULT_VERIFY_RETRIES
    verify_interval_seconds: float = DEFAULT_VERIFY_INTERVAL_SECONDS
    reindex_timeout_seconds: Optional[int] = None
    dryrun: bool = False

    def __post_init__(self):
        if not isinstance(self.include_pattern, str) or not self.include_pattern:
            raise MigrationConfigError("Include pattern must be a non-empty string")
        if self.exclude_pattern is not None and not isinstance(self.exclude_pattern, str):
            raise MigrationConfigError("Exclude pattern must be a string")
        if self.exclude_pattern:
            try:
                re.compile(self.exclude_pattern)
            except re.error as e:
                raise MigrationConfigError(f"Invalid exclude pattern: {self.exclude_pattern}") from e
        if isinstance(self.verify_retries, bool) or not isinstance(self.verify_retries, int) \
                or self.verify_retries < 1:
            raise MigrationConfigError("verify_retries must be a positive integer")
        if isinstance(self.verify_interval_seconds, bool) \
                or not isinstance(self.verify_interval_seconds, (int, float)) or self.verify_interval_seconds < 0:
            raise MigrationConfigError("verify_interval_seconds must be a non-negative number")
        timeout = self.reindex_timeout_seconds
        if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0):
            raise MigrationConfigError("reindex_timeout_seconds must be a positive integer")

    def with_overrides(self, **overrides) -> "MigrationConfig":
        # Drop unset values so they don't clobber the file configuration
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)


def __get_endpoint(config: dict, key: str) -> EndpointInfo:
    if key not in config:
        raise MigrationConfigError(f"Missing {key} configuration")
    try:
        return endpoint_utils.get_endpoint_info(key, config[key])
    except ValueError as e:
        raise MigrationConfigError(f"Invalid {key} configuration: {e!s}") from e


def parse_config(config: dict) -> MigrationConfig:
    if not isinstance(config, dict):
        raise MigrationConfigError("Configuration must be a mapping")
    source = __get_endpoint(config, SOURCE_KEY)
    target = __get_endpoint(config, TARGET_KEY)
    migration = config.get(MIGRATION_KEY) or dict()
    if not isinstance(migration, dict):
        raise MigrationConfigError(f"Unexpected value for '{MIGRATION_KEY}' configuration")
    for key in __BOOL_KEYS:
        if key in migration and not isinstance(migration[key], bool):
            raise MigrationConfigError(f"'{key}' must be a boolean")
    # An absent exclude key means "skip today's indices"; an explicit empty value disables exclusion
    if EXCLUDE_KEY in migration:
        exclude_pattern = migration[EXCLUDE_KEY] or None
    else:
        exclude_pattern = default_exclude_pattern()
    return MigrationConfig(
        source=source,
        target=target,
        include_pattern=migration.get(INCLUDE_KEY, DEFAULT_INCLUDE_PATTERN),
        exclude_pattern=exclude_pattern,
        overwrite_if_broken=migration.get(OVERWRITE_KEY, False),
        close_on_success=migration.get(CLOSE_KEY, False),
        abort_on_lock_failure=migration.get(ABORT_ON_LOCK_FAILURE_KEY, False),
        verify_retries=migration.get(RETRIES_KEY, DEFAULT_VERIFY_RETRIES),
        verify_interval_seconds=migration.get(INTERVAL_KEY, DEFAULT_VERIFY_INTERVAL_SECONDS),
        reindex_timeout_seconds=migration.get(REINDEX_TIMEOUT_KEY)
    )


def load_config(config_file_path: str) -> MigrationConfig:
    try:
        with open(config_file_path, 'r') as config_file:
            config = yaml.safe_load(config_file)
    except OSError as e:
        raise MigrationConfigError(f"Unable to read configuration file: {config_file_path}") from e
    except yaml.YAMLError as e:
        raise MigrationConfigError(f"Invalid YAML in configuration file: {config_file_path}") from e
    return parse_config(config)
