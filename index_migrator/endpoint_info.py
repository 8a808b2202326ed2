#
# Copyright OpenSearch Contributors
# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
#

from typing import Optional

from requests_aws4auth import AWS4Auth


# Class that encapsulates endpoint information for an OpenSearch/Elasticsearch cluster
class EndpointInfo:
    # Private member variables
    __url: str
    __auth: Optional[tuple] | AWS4Auth
    __verify_ssl: bool

    def __init__(self, url: str, auth: tuple | AWS4Auth = None, verify_ssl: bool = True):
        self.__url = url
        # Normalize url value to have trailing slash
        if not url.endswith("/"):
            self.__url += "/"
        self.__auth = auth
        self.__verify_ssl = verify_ssl

    def __eq__(self, obj):
        return isinstance(obj, EndpointInfo) and \
            self.__url == obj.__url and \
            self.__auth == obj.__auth and \
            self.__verify_ssl == obj.__verify_ssl

    def __repr__(self) -> str:
        # Credentials are never rendered
        return f"EndpointInfo({self.__url!r}, verify_ssl={self.__verify_ssl})"

    def add_path(self, path: str) -> str:
        # Remove leading slash if present
        if path.startswith("/"):
            path = path[1:]
        return self.__url + path

    def get_url(self) -> str:
        return self.__url

    # Remote reindex requests need the bare host URL, without the trailing slash
    def get_host(self) -> str:
        return self.__url.rstrip("/")

    def get_auth(self) -> Optional[tuple] | AWS4Auth:
        return self.__auth

    # Only basic auth can be forwarded to a cluster for a remote reindex
    def get_basic_auth_credentials(self) -> Optional[tuple]:
        if isinstance(self.__auth, tuple):
            return self.__auth
        return None

    def is_verify_ssl(self) -> bool:
        return self.__verify_ssl
