"""Response Locator — finds the data a matched rule answers with.

Invariants:
    - dbFile equal to the config file name means "read from the config document itself"
    - Any other dbFile is fetched through the same two candidate sources as the config
    - Fetch failure, a missing node, and a null node all raise DataNotFoundError (404)
    - The extracted node is returned as-is (identity, not a copy)

Design Decisions:
    - Fetch failure downgraded to a lookup miss, not an upstream error: from the caller's
      view a missing data file and a missing path are the same "not found"
"""

import logging
from typing import Any

from mockapi.config import Settings
from mockapi.core.data_path import extract_sub_value
from mockapi.core.domain_types import MISSING
from mockapi.core.errors import DataNotFoundError, ErrorContext, RawFileFetchError
from mockapi.infrastructure.raw_file_client import (
    RawFileFetcher,
    RepositoryLocation,
    build_candidates,
)
from mockapi.services.config_loader import LoadedConfig, parse_data_document

logger = logging.getLogger(__name__)


async def locate_response_data(
    loaded: LoadedConfig,
    location: RepositoryLocation,
    fetcher: RawFileFetcher,
    settings: Settings,
    context: ErrorContext | None = None,
) -> Any:
    """Return the node at dbDataPath in the configured data source."""
    config = loaded.config
    if config.db_file == settings.config_file_name:
        root = loaded.document
    else:
        try:
            raw_text = await fetcher.fetch(
                config.db_file,
                build_candidates(location, config.db_file, settings),
            )
        except RawFileFetchError as e:
            logger.warning(
                f"Data file {config.db_file} unavailable: {e.errors}",
                extra={"error_code": e.code},
            )
            raise DataNotFoundError(config.db_file, config.db_data_path, context)
        root = parse_data_document(config.db_file, raw_text)

    value = extract_sub_value(config.db_data_path, root)
    if value is MISSING or value is None:
        raise DataNotFoundError(config.db_file, config.db_data_path, context)
    return value
