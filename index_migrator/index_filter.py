#
# Copyright OpenSearch Contributors
# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
#

import datetime
import re
from typing import Iterable, Optional

# Date stamp format used by daily indices, e.g. wazuh-alerts-4.x-2024.01.31
DATE_STAMP_FORMAT = "%Y.%m.%d"


# Indices stamped with today's date are still receiving writes and must not be migrated yet
def default_exclude_pattern(today: Optional[datetime.date] = None) -> str:
    if today is None:
        today = datetime.date.today()
    return re.escape(today.strftime(DATE_STAMP_FORMAT)) + "$"


def filter_indices(names: Iterable[str], exclude_pattern: Optional[str]) -> list[str]:
    if not exclude_pattern:
        return list(names)
    compiled = re.compile(exclude_pattern)
    return [name for name in names if not compiled.search(name)]
