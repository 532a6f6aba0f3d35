"""Shared fixtures: test settings, a mock-transport client factory and catalog data."""

import os

# Settings are read at import time of app.main
os.environ.setdefault("DEFAULT_LANG", "en")
os.environ.setdefault("BASE_URL", "https://commerce.test")
os.environ.setdefault("BASE_SITE_ID", "electronics")

import httpx
import pytest

from app.config import Settings
from app.services.http_client import CommerceClient

TEST_SETTINGS = Settings(
    base_url="https://commerce.test",
    base_site_id="electronics",
    catalog_id="electronicsProductCatalog",
    catalog_version="Online",
    content_catalog_id="electronicsContentCatalog",
    content_catalog_version="Staged",
    default_lang="en",
    media_cdn_url="https://media.test",
)


def category_forest() -> dict:
    return {
        "id": "electronicsProductCatalog",
        "categories": [
            {
                "id": "cameras",
                "name": "Cameras",
                "url": "/c/cameras",
                "subcategories": [
                    {
                        "id": "digital",
                        "name": "Digital Cameras",
                        "url": "/c/digital",
                        "subcategories": [
                            {"id": "compact", "name": "Compact Cameras", "url": "/c/compact", "subcategories": []},
                        ],
                    },
                    {"id": "film", "name": "Film Cameras", "url": "/c/film"},
                ],
            },
            {
                "id": "accessories",
                "name": "Accessories",
                "url": "/c/accessories",
                "subcategories": [
                    {"id": "bags", "name": "Camera Bags", "url": "/c/bags", "subcategories": []},
                ],
            },
            {
                "id": "placeholder",
                "name": "",
                "url": "/c/placeholder",
                "subcategories": [{"id": "hidden", "name": "Hidden", "url": "/c/hidden"}],
            },
        ],
    }


@pytest.fixture
def forest() -> dict:
    return category_forest()


@pytest.fixture
def make_client():
    """Return a factory building a :class:`CommerceClient` over a mock transport."""

    def _make(handler, settings: Settings = TEST_SETTINGS) -> CommerceClient:
        return CommerceClient(settings, transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def settings() -> Settings:
    return TEST_SETTINGS
