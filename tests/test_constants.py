# Holds constants for unit tests
from os.path import dirname

TEST_RESOURCES_SUBPATH = "/resources/"
CONFIG_FILE_PATH = dirname(__file__) + TEST_RESOURCES_SUBPATH + "test_config.yaml"

SOURCE_ENDPOINT = "http://source:9200/"
TARGET_ENDPOINT = "http://target:9200/"
SOURCE_AUTH = ("source_user", "source_pass")
TARGET_AUTH = ("target_user", "target_pass")
INDEX1_NAME = "wazuh-alerts-4.x-2024.01.01"
INDEX2_NAME = "wazuh-alerts-4.x-2024.01.02"
INDEX3_NAME = "wazuh-alerts-4.x-2024.01.03"
INCLUDE_PATTERN = "wazuh-alerts-4.x-*"
CAT_INDICES_PATH = "_cat/indices/" + INCLUDE_PATTERN
REINDEX_PATH = "_reindex"


def count_url(endpoint: str, index: str) -> str:
    return endpoint + index + "/_count"


def cat_indices_response(*names: str) -> list:
    return [{"index": name} for name in names]


def create_config(**kwargs):
    # Imported here so the constants above stay usable without the package on the path
    from index_migrator.endpoint_info import EndpointInfo
    from index_migrator.migration_config import MigrationConfig
    kwargs.setdefault("include_pattern", INCLUDE_PATTERN)
    kwargs.setdefault("verify_interval_seconds", 0)
    return MigrationConfig(EndpointInfo(SOURCE_ENDPOINT, SOURCE_AUTH), EndpointInfo(TARGET_ENDPOINT, TARGET_AUTH),
                           **kwargs)
