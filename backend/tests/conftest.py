"""Root conftest — shared test configuration and config document builders."""

import os

import pytest

# Ensure tests never pick up a developer's .env overrides for the source hosts
os.environ.setdefault("MOCKAPI_RAW_CONTENT_HOST", "https://raw.test")
os.environ.setdefault("MOCKAPI_CONTENT_API_HOST", "https://api.test")
os.environ.setdefault("MOCKAPI_LOG_FORMAT", "text")


@pytest.fixture
def config_document() -> dict:
    """A config document serving data from itself."""
    return {
        "apiRoutePrefix": "/api",
        "dbFile": ".mockapi.yml",
        "dbDataPath": "data.items",
        "routes": {
            "get": ["/items", "/items/:id"],
            "POST": [
                {
                    "path": "/items",
                    "bodyFields": {"name": True, "tag": False, "callback": False},
                    "restrictedBody": True,
                    "scheduleNotification": {
                        "followProp": "callback",
                        "timeoutInSecond": 2,
                    },
                },
            ],
        },
        "data": {"items": [{"id": 1, "name": "first"}, {"id": 2, "name": "second"}]},
    }
