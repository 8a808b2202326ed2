#
# Copyright OpenSearch Contributors
# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
#

from dataclasses import dataclass
from typing import Optional

UNKNOWN_LABEL = "unknown"


# Document count of a single index as observed on one cluster. A count is either
# known (a non-negative integer) or unknown, when the cluster could not be reached
# or its reply could not be parsed. Unknown is never interchangeable with zero.
@dataclass(frozen=True)
class DocCount:
    _value: Optional[int] = None

    @classmethod
    def known(cls, count: int) -> "DocCount":
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ValueError(f"Invalid document count: {count!r}")
        return cls(count)

    @classmethod
    def unknown(cls) -> "DocCount":
        return cls(None)

    def is_known(self) -> bool:
        return self._value is not None

    @property
    def value(self) -> int:
        if self._value is None:
            raise ValueError("Document count is unknown")
        return self._value

    # Counts only match when both sides are known and equal
    def matches(self, other: "DocCount") -> bool:
        return self.is_known() and other.is_known() and self._value == other._value

    def __str__(self) -> str:
        return str(self._value) if self.is_known() else UNKNOWN_LABEL
