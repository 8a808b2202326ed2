#
# Copyright OpenSearch Contributors
# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
#

import argparse
import logging
import os
import sys
from typing import Optional

from index_migrator import migration_orchestrator
from index_migrator.exceptions import MigrationConfigError
from index_migrator.migration_config import MigrationConfig, load_config


def build_arg_parser() -> argparse.ArgumentParser:
    arg_parser = argparse.ArgumentParser(
        prog="index-migrator",
        description="Moves indices from a source cluster to a target cluster using reindex-from-remote.\n" +
        "Each source index is write-blocked, copied, and verified by doc count on both clusters. " +
        "The source index is only deleted once the counts match.\nIndices already present on the target " +
        "with a matching doc count are skipped, so the tool can safely be re-run.",
        formatter_class=argparse.RawTextHelpFormatter
    )
    # Required positional argument
    arg_parser.add_argument(
        "config_file_path",
        help="Path to the YAML file with source/target cluster endpoints and migration settings"
    )
    # Overrides for the "migration" section of the config file
    arg_parser.add_argument("--include", help="Index pattern of indices to migrate, e.g. 'wazuh-alerts-4.x-*'")
    arg_parser.add_argument("--exclude",
                            help="Regex of index names to leave out (default: names ending with today's date).\n" +
                            "Patterns starting with '-' need the = form, e.g. --exclude=-old$")
    arg_parser.add_argument("--retries", type=int, help="Number of doc count verification attempts (default: 6)")
    arg_parser.add_argument("--interval", type=float,
                            help="Seconds to wait between verification attempts (default: 10)")
    arg_parser.add_argument("--reindex-timeout", type=int,
                            help="Seconds to wait for each remote reindex to complete (default: no limit)")
    # Flags
    arg_parser.add_argument("--overwrite-if-broken", action="store_true", default=None,
                            help="Delete and re-migrate target indices whose doc count differs from the source")
    arg_parser.add_argument("--close-on-success", action="store_true", default=None,
                            help="Close each target index after a successful migration")
    arg_parser.add_argument("--abort-on-lock-failure", action="store_true", default=None,
                            help="Skip an index if its source copy cannot be write-blocked")
    arg_parser.add_argument("--dryrun", action="store_true", default=None,
                            help="Only report what would be done. No indices are locked, copied or deleted")
    arg_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return arg_parser


def apply_overrides(config: MigrationConfig, args: argparse.Namespace) -> MigrationConfig:
    return config.with_overrides(include_pattern=args.include, exclude_pattern=args.exclude,
                                 verify_retries=args.retries, verify_interval_seconds=args.interval,
                                 reindex_timeout_seconds=args.reindex_timeout,
                                 overwrite_if_broken=args.overwrite_if_broken,
                                 close_on_success=args.close_on_success,
                                 abort_on_lock_failure=args.abort_on_lock_failure,
                                 dryrun=args.dryrun)


def main(argv: Optional[list[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(format="%(asctime)s %(levelname)s %(message)s",
                        level=logging.DEBUG if args.verbose else logging.INFO)
    try:
        config = apply_overrides(load_config(os.path.expandvars(args.config_file_path)), args)
    except MigrationConfigError as e:
        logging.error(f"{e!s}")
        return 2
    logging.info("\n##### Starting index migration... #####\n")
    result = migration_orchestrator.run(config)
    logging.info("\n##### Ending index migration... #####\n")
    return 1 if result.has_errors() else 0


if __name__ == '__main__':  # pragma no cover
    sys.exit(main())
