"""Response Locator — data from the config itself or from an external data file.

Tests cover:
    - dbFile == config file name → node extracted from the config document (identity)
    - external JSON / YAML data files fetched through both candidates
    - YAML data files keyed by integer ids reached through a string path part
    - missing data file, missing path, and null node → DataNotFoundError (404)
"""

import pytest

from mockapi.core.errors import DataNotFoundError
from mockapi.schemas.mock_config import MockApiConfig
from mockapi.services.config_loader import LoadedConfig
from mockapi.services.locate_data import locate_response_data

from tests.services.fake_remote import API_ROOT, RAW_ROOT


def _loaded(document: dict) -> LoadedConfig:
    return LoadedConfig(config=MockApiConfig.model_validate(document), document=document)


async def test_self_document_returns_exact_node(
    config_document, location, fetcher, settings, remote,
):
    loaded = _loaded(config_document)

    value = await locate_response_data(loaded, location, fetcher, settings)

    assert value is config_document["data"]["items"]
    assert remote.requests == []


async def test_external_json_file(location, fetcher, settings, remote):
    remote.serve(f"{RAW_ROOT}/db.json", '{"users": [{"name": "ada"}]}')
    loaded = _loaded({"dbFile": "db.json", "dbDataPath": "users/0", "routes": {}})

    value = await locate_response_data(loaded, location, fetcher, settings)

    assert value == {"name": "ada"}


async def test_external_yaml_file_via_content_api(location, fetcher, settings, remote):
    remote.serve(f"{API_ROOT}/data/db.yml", "users:\n  - name: linus\n")
    loaded = _loaded({"dbFile": "data/db.yml", "dbDataPath": "users.0.name", "routes": {}})

    value = await locate_response_data(loaded, location, fetcher, settings)

    assert value == "linus"


async def test_external_yaml_file_with_integer_keys(location, fetcher, settings, remote):
    remote.serve(f"{RAW_ROOT}/db.yml", "users:\n  1: {name: ada}\n  2: {name: linus}\n")
    loaded = _loaded({"dbFile": "db.yml", "dbDataPath": "users.2", "routes": {}})

    value = await locate_response_data(loaded, location, fetcher, settings)

    assert value == {"name": "linus"}


async def test_missing_data_file_is_not_found(location, fetcher, settings):
    loaded = _loaded({"dbFile": "db.json", "dbDataPath": "users", "routes": {}})

    with pytest.raises(DataNotFoundError) as exc_info:
        await locate_response_data(loaded, location, fetcher, settings)
    assert exc_info.value.http_status == 404


@pytest.mark.parametrize("data_path", ["data.absent", "data.nothing"])
async def test_missing_or_null_node_is_not_found(location, fetcher, settings, data_path):
    loaded = _loaded({"dbDataPath": data_path, "routes": {}, "data": {"nothing": None}})

    with pytest.raises(DataNotFoundError):
        await locate_response_data(loaded, location, fetcher, settings)
