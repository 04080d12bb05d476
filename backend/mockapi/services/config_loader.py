"""Config Loader — parses raw config and data documents into validated structures.

Invariants:
    - The config document must be a YAML mapping that validates as MockApiConfig
    - Parse and validation failures raise ConfigValidationError (400) with one message per problem
    - The raw parsed document is kept beside the model: response data may live under
      keys the model does not declare
    - Data files ending in .json are parsed as JSON; anything else as YAML (a JSON superset)

Design Decisions:
    - yaml.safe_load only: config documents are user-authored, never trusted with tags
    - Errors formatted "loc: msg" the same way the API validation handler formats them
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

import yaml
from pydantic import ValidationError

from mockapi.core.errors import ConfigValidationError
from mockapi.schemas.mock_config import MockApiConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedConfig:
    config: MockApiConfig
    document: dict[str, Any]


def parse_mock_config(raw_text: str) -> LoadedConfig:
    """YAML text → validated MockApiConfig plus the raw document."""
    try:
        document = yaml.safe_load(raw_text)
    except yaml.YAMLError as e:
        raise ConfigValidationError([f"YAML parse error: {e}"])

    if not isinstance(document, dict):
        raise ConfigValidationError([
            f"config document must be a mapping, found {type(document).__name__}",
        ])

    try:
        config = MockApiConfig.model_validate(document)
    except ValidationError as e:
        raise ConfigValidationError([_format_error(err) for err in e.errors()])

    return LoadedConfig(config=config, document=document)


def parse_data_document(file_name: str, raw_text: str) -> Any:
    """Parse an external data file; format chosen by extension."""
    try:
        if file_name.lower().endswith(".json"):
            return json.loads(raw_text)
        return yaml.safe_load(raw_text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        logger.warning(f"Data file {file_name} could not be parsed: {e}")
        raise ConfigValidationError([f"data file '{file_name}' could not be parsed: {e}"])


def _format_error(err: dict) -> str:
    location = ".".join(str(loc) for loc in err["loc"])
    return f"{location}: {err['msg']}" if location else err["msg"]
