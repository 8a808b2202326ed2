#
# Copyright OpenSearch Contributors
# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
#

from typing import Iterable


# Utility method to make a comma-separated string from a collection of names, in sorted order.
# If the collection is empty, "[]" is returned for clarity.
def string_from_set(s: Iterable[str]) -> str:
    return "[" + ", ".join(sorted(s)) + "]"
