#
# Copyright OpenSearch Contributors
# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
#

import unittest
from unittest.mock import MagicMock

from index_migrator.endpoint_info import EndpointInfo


class TestEndpointInfo(unittest.TestCase):
    def test_normalized_url(self):
        val = EndpointInfo("http://test:9200")
        self.assertEqual("http://test:9200/", val.get_url())
        self.assertEqual("http://test:9200", val.get_host())
        # Leading slash on the path is dropped
        self.assertEqual("http://test:9200/index/_count", val.add_path("/index/_count"))

    def test_basic_auth_credentials(self):
        self.assertEqual(("user", "pass"), EndpointInfo("test", ("user", "pass")).get_basic_auth_credentials())
        self.assertIsNone(EndpointInfo("test").get_basic_auth_credentials())
        # Non-basic auth cannot be forwarded
        self.assertIsNone(EndpointInfo("test", MagicMock()).get_basic_auth_credentials())

    def test_repr_hides_credentials(self):
        self.assertNotIn("secret", repr(EndpointInfo("http://test", ("user", "secret"))))

    def test_equality(self):
        self.assertEqual(EndpointInfo("test", ("u", "p"), False), EndpointInfo("test/", ("u", "p"), False))
        self.assertNotEqual(EndpointInfo("test", ("u", "p")), EndpointInfo("test", ("u", "p"), False))
        self.assertNotEqual(EndpointInfo("test"), "test/")


if __name__ == '__main__':
    unittest.main()
