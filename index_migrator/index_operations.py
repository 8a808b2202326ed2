#
# Copyright OpenSearch Contributors
# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
#

import logging
from typing import Optional

import jsonpath_ng
import requests

from index_migrator.doc_count import DocCount
from index_migrator.endpoint_info import EndpointInfo
from index_migrator.exceptions import IndexManagementError, RequestError

# Constants
INDEX_KEY = "index"
COUNT_KEY = "count"
FAILURES_KEY = "failures"
__CAT_INDICES_PATH = "_cat/indices/"
__CAT_INDICES_PARAMS = {"format": "json", "h": "index", "expand_wildcards": "all"}
__COUNT_PATH = "/_count"
__SETTINGS_PATH = "/_settings"
__FLUSH_PATH = "/_flush"
__CLOSE_PATH = "/_close"
__REINDEX_PATH = "_reindex"
__REINDEX_PARAMS = {"wait_for_completion": "true", "refresh": "true"}
# Blocks writes while still permitting reads, which the remote reindex needs
__WRITE_BLOCK_SETTINGS = {"index.blocks.write": True}
__COUNT_JSONPATH = jsonpath_ng.parse("$.count")
__TIMEOUT_SECONDS = 10


def __send_request(method: str, url: str, endpoint: EndpointInfo, payload: Optional[dict] = None,
                   params: Optional[dict] = None, timeout: Optional[int] = __TIMEOUT_SECONDS) -> requests.Response:
    try:
        resp = requests.request(method, url, auth=endpoint.get_auth(), verify=endpoint.is_verify_ssl(),
                                json=payload, params=params, timeout=timeout)
        resp.raise_for_status()
        return resp
    except requests.ConnectionError as e:
        raise RequestError(f"ConnectionError on {method} request to cluster endpoint: {endpoint.get_url()}") from e
    except requests.HTTPError as e:
        raise RequestError(f"HTTPError on {method} request to cluster endpoint: {endpoint.get_url()} - {e!s}") from e
    except requests.Timeout as e:
        raise RequestError(f"Timed out on {method} request to cluster endpoint: {endpoint.get_url()}") from e
    except requests.exceptions.RequestException as e:
        raise RequestError(f"{method} request failure to cluster endpoint: {endpoint.get_url()} - {e!s}") from e


# Returns the sorted names of indices matching the given pattern. System indices are dropped.
# An unreachable cluster yields an empty list, which callers treat the same as "no matches".
def fetch_indices(endpoint: EndpointInfo, pattern: str = "*") -> list[str]:
    url: str = endpoint.add_path(__CAT_INDICES_PATH + pattern)
    try:
        resp = __send_request("GET", url, endpoint, params=__CAT_INDICES_PARAMS)
        entries = resp.json()
    except (RequestError, ValueError) as e:
        logging.error(f"Failed to list indices matching [{pattern}] on {endpoint.get_url()}: {e!s}")
        return []
    names = set()
    for entry in entries:
        if isinstance(entry, dict) and INDEX_KEY in entry and not entry[INDEX_KEY].startswith("."):
            names.add(entry[INDEX_KEY])
    return sorted(names)


def doc_count(index: str, endpoint: EndpointInfo) -> DocCount:
    url: str = endpoint.add_path(index + __COUNT_PATH)
    try:
        resp = __send_request("GET", url, endpoint)
        result = resp.json()
    except RequestError as e:
        logging.warning(f"Could not fetch doc count for index [{index}]: {e!s}")
        return DocCount.unknown()
    except ValueError:
        logging.warning(f"Non-JSON doc count response for index [{index}] from {endpoint.get_url()}")
        return DocCount.unknown()
    matches = __COUNT_JSONPATH.find(result) if isinstance(result, dict) else []
    if not matches:
        logging.warning(f"Doc count response for index [{index}] is missing the [{COUNT_KEY}] field")
        return DocCount.unknown()
    value = matches[0].value
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        logging.warning(f"Unexpected doc count value for index [{index}]: {value!r}")
        return DocCount.unknown()
    return DocCount.known(value)


def set_read_only(index: str, endpoint: EndpointInfo):
    url: str = endpoint.add_path(index + __SETTINGS_PATH)
    try:
        __send_request("PUT", url, endpoint, payload=__WRITE_BLOCK_SETTINGS)
    except RequestError as e:
        raise IndexManagementError(f"Failed to block writes on index [{index}]") from e


def __build_reindex_body(index: str, source: EndpointInfo) -> dict:
    remote = {"host": source.get_host()}
    credentials = source.get_basic_auth_credentials()
    if credentials is not None:
        remote["username"], remote["password"] = credentials
    return {
        "source": {"remote": remote, INDEX_KEY: index},
        "dest": {INDEX_KEY: index}
    }


# Submits a reindex-from-remote request to the target cluster and blocks until the
# target reports completion. A None timeout waits indefinitely.
def reindex_from_remote(index: str, source: EndpointInfo, target: EndpointInfo,
                        timeout: Optional[int] = None) -> dict:
    url: str = target.add_path(__REINDEX_PATH)
    try:
        resp = __send_request("POST", url, target, payload=__build_reindex_body(index, source),
                              params=__REINDEX_PARAMS, timeout=timeout)
    except RequestError as e:
        raise IndexManagementError(f"Remote reindex of index [{index}] failed") from e
    try:
        result = resp.json()
    except ValueError:
        return dict()
    if not isinstance(result, dict):
        logging.warning(f"Unexpected remote reindex response for index [{index}]: {result!r}")
        return dict()
    failures = result.get(FAILURES_KEY, [])
    if failures:
        logging.warning(f"Remote reindex of index [{index}] reported {len(failures)} failures")
    return result


def flush(index: str, endpoint: EndpointInfo):
    url: str = endpoint.add_path(index + __FLUSH_PATH)
    try:
        __send_request("POST", url, endpoint)
    except RequestError as e:
        raise IndexManagementError(f"Failed to flush index [{index}]") from e


def delete_index(index: str, endpoint: EndpointInfo):
    url: str = endpoint.add_path(index)
    try:
        __send_request("DELETE", url, endpoint)
    except RequestError as e:
        raise IndexManagementError(f"Failed to delete index [{index}]") from e


def close_index(index: str, endpoint: EndpointInfo):
    url: str = endpoint.add_path(index + __CLOSE_PATH)
    try:
        __send_request("POST", url, endpoint)
    except RequestError as e:
        raise IndexManagementError(f"Failed to close index [{index}]") from e
