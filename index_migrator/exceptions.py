#
# Copyright OpenSearch Contributors
# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
#


# Raised for any transport-level or HTTP failure when talking to a cluster
class RequestError(RuntimeError):
    pass


# Raised when an index operation (lock, reindex, flush, delete, close) fails
class IndexManagementError(RuntimeError):
    pass


class MigrationConfigError(ValueError):
    pass


class InvalidStateTransitionError(RuntimeError):
    pass
