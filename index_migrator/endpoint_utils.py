#
# Copyright OpenSearch Contributors
# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
#

import re
from typing import Union

from botocore.session import Session
from requests_aws4auth import AWS4Auth

from index_migrator.endpoint_info import EndpointInfo

# Constants
HOSTS_KEY = "hosts"
INSECURE_KEY = "insecure"
CONNECTION_KEY = "connection"
DISABLE_AUTH_KEY = "disable_authentication"
USER_KEY = "username"
PWD_KEY = "password"
AWS_SIGV4_KEY = "aws_sigv4"
AWS_REGION_KEY = "aws_region"
AWS_CONFIG_KEY = "aws"
AWS_CONFIG_REGION_KEY = "region"
IS_SERVERLESS_KEY = "serverless"
ES_SERVICE_NAME = "es"
AOSS_SERVICE_NAME = "aoss"
# Matches *.<region>.es.amazonaws.com and *.<region>.aoss.amazonaws.com hosts
URL_REGION_PATTERN = re.compile(r"([\w-]*)\.(es|aoss)\.amazonaws\.com")


# Cluster sections list either a single host string or several hosts. Requests only
# ever go to one of them, so the first listed host is used.
def __first_host(cluster_config: dict) -> str:
    hosts = cluster_config[HOSTS_KEY]
    if not isinstance(hosts, list):
        return hosts
    if not hosts:
        raise ValueError("Empty hosts list in cluster configuration")
    return hosts[0]


def __uses_sigv4(cluster_config: dict) -> bool:
    return bool(cluster_config.get(AWS_SIGV4_KEY, False)) or AWS_CONFIG_KEY in cluster_config


def __aws_config(cluster_config: dict) -> dict:
    aws_config = cluster_config.get(AWS_CONFIG_KEY)
    if aws_config is None:
        return dict()
    if not isinstance(aws_config, dict):
        raise ValueError("Unexpected value for 'aws' configuration")
    return aws_config


def get_aws_region(cluster_config: dict) -> str:
    if cluster_config.get(AWS_SIGV4_KEY, False) and cluster_config.get(AWS_REGION_KEY) is not None:
        return cluster_config[AWS_REGION_KEY]
    region = __aws_config(cluster_config).get(AWS_CONFIG_REGION_KEY)
    if region is not None:
        return region
    match = URL_REGION_PATTERN.search(__first_host(cluster_config))
    if match is None:
        raise ValueError("No region configured for AWS SigV4 auth, or derivable from host URL")
    return match.group(1)


# The "insecure" flag is accepted at the top level of a cluster section, or nested
# under "connection". SSL certificates are verified unless it is set.
def is_insecure(cluster_config: dict) -> bool:
    if INSECURE_KEY in cluster_config:
        return cluster_config[INSECURE_KEY]
    connection = cluster_config.get(CONNECTION_KEY)
    if isinstance(connection, dict):
        return connection.get(INSECURE_KEY, False)
    return False


def validate_auth(cluster_name: str, cluster_config: dict):
    if cluster_config.get(DISABLE_AUTH_KEY, False):
        return
    if __uses_sigv4(cluster_config):
        # Raises a ValueError if the region is neither configured nor derivable
        get_aws_region(cluster_config)
    elif USER_KEY not in cluster_config:
        raise ValueError("Invalid auth configuration (no username) for cluster: " + cluster_name)
    elif PWD_KEY not in cluster_config:
        raise ValueError("Invalid auth configuration (no password for username) for cluster: " + cluster_name)


def get_aws_sigv4_auth(region: str, is_serverless: bool = False) -> AWS4Auth:
    credentials = Session().get_credentials()
    if not credentials:
        raise ValueError("Unable to fetch AWS session credentials for SigV4 auth")
    service = AOSS_SERVICE_NAME if is_serverless else ES_SERVICE_NAME
    return AWS4Auth(region=region, service=service, refreshable_credentials=credentials)


def get_auth(cluster_config: dict) -> Union[AWS4Auth, tuple, None]:
    if cluster_config.get(DISABLE_AUTH_KEY, False):
        return None
    if USER_KEY in cluster_config and PWD_KEY in cluster_config:
        return cluster_config[USER_KEY], cluster_config[PWD_KEY]
    if __uses_sigv4(cluster_config):
        is_serverless = bool(__aws_config(cluster_config).get(IS_SERVERLESS_KEY, False))
        return get_aws_sigv4_auth(get_aws_region(cluster_config), is_serverless)
    return None


def get_endpoint_info(cluster_name: str, cluster_config: dict) -> EndpointInfo:
    if not isinstance(cluster_config, dict):
        raise ValueError("Cluster configuration must be a mapping: " + cluster_name)
    if HOSTS_KEY not in cluster_config:
        raise ValueError("No hosts defined for cluster: " + cluster_name)
    validate_auth(cluster_name, cluster_config)
    return EndpointInfo(__first_host(cluster_config), get_auth(cluster_config),
                        verify_ssl=not is_insecure(cluster_config))
