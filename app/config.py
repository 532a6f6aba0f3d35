"""Environment-driven settings for the commerce bridge."""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _env(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


@dataclass(frozen=True)
class Settings:
    """Connection and catalog settings for the remote commerce platform."""

    base_url: str = ""
    base_site_id: str = ""
    occ_path: str = "/occ/v2/"
    cms_path: str = "/cmswebservices/v1/sites/"

    # OAuth2 password grant
    oauth_token_url: str = ""
    client_id: str = ""
    client_secret: str = ""
    api_username: str = ""
    api_password: str = ""
    air_key: Optional[str] = None  # sent as Application-Interface-Key

    catalog_id: str = ""
    catalog_version: str = "Online"
    content_catalog_id: str = ""
    content_catalog_version: str = "Staged"
    default_lang: str = "en"
    media_cdn_url: str = ""

    request_timeout: float = 30.0
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    bridge_username: str = ""
    bridge_password: str = ""

    @property
    def full_occ_path(self) -> str:
        return self.occ_path + self.base_site_id

    @property
    def full_cms_path(self) -> str:
        return self.cms_path + self.base_site_id

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment.

        Raises:
            RuntimeError: if ``DEFAULT_LANG`` is not set.  It must match the
                master language of the commerce platform.
        """
        default_lang = _env("DEFAULT_LANG")
        if not default_lang:
            raise RuntimeError(
                "Please set DEFAULT_LANG to the master language of the commerce platform."
            )

        return cls(
            base_url=_env("BASE_URL"),
            base_site_id=_env("BASE_SITE_ID"),
            occ_path=_env("OCC_PATH", cls.occ_path),
            cms_path=_env("CMS_PATH", cls.cms_path),
            oauth_token_url=_env("OAUTH_TOKEN_URL"),
            client_id=_env("CLIENT_ID"),
            client_secret=_env("CLIENT_SECRET"),
            api_username=_env("API_USERNAME"),
            api_password=_env("API_PASSWORD"),
            air_key=_env("AIR_KEY") or None,
            catalog_id=_env("CATALOG_ID"),
            catalog_version=_env("CATALOG_VERSION", cls.catalog_version),
            content_catalog_id=_env("CONTENT_CATALOG_ID"),
            content_catalog_version=_env("CONTENT_CATALOG_VERSION", cls.content_catalog_version),
            default_lang=default_lang,
            media_cdn_url=_env("MEDIA_CDN_URL"),
            request_timeout=float(_env("REQUEST_TIMEOUT", "30")),
            log_level=_env("LOG_LEVEL", cls.log_level).upper(),
            host=_env("HOST", cls.host),
            port=int(_env("PORT", "8000")),
            bridge_username=_env("BRIDGE_AUTH_USERNAME"),
            bridge_password=_env("BRIDGE_AUTH_PASSWORD"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    return Settings.from_env()
