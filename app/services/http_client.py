"""Authenticated HTTP client for the commerce platform's OCC and CMS APIs."""

import asyncio
import logging
import time
from typing import Any, NamedTuple, Optional

import httpx

from app.config import Settings

logger = logging.getLogger(__name__)

UNKNOWN_IDENTIFIER_ERROR = "UnknownIdentifierError"

# Refresh the access token this many seconds before it actually expires
_TOKEN_EXPIRY_MARGIN = 30


class RemoteResponse(NamedTuple):
    data: Any
    status: int


class RemoteError(Exception):
    """A non-success answer (or no answer at all) from the commerce platform."""

    def __init__(self, status: int, data: Any) -> None:
        super().__init__(f"Remote call failed with status {status}")
        self.status = status
        self.data = data

    @property
    def error_types(self) -> list[str]:
        """Return the ``type`` of every entry in the remote ``errors`` array."""
        if not isinstance(self.data, dict):
            return []
        errors = self.data.get("errors") or []
        return [e.get("type", "") for e in errors if isinstance(e, dict)]

    @property
    def is_unknown_identifier(self) -> bool:
        """True when the platform reported that the requested id does not exist."""
        return UNKNOWN_IDENTIFIER_ERROR in self.error_types

    def to_dict(self) -> dict:
        return {"error": True, "status": self.status, "data": self.data}


class CommerceClient:
    """Thin async wrapper around :class:`httpx.AsyncClient`.

    Every request carries a bearer token obtained through the OAuth2 password
    grant configured in :class:`~app.config.Settings`.  The token is fetched
    lazily and reused until shortly before it expires.

    Non-2xx responses raise :class:`RemoteError`; transport failures raise it
    with status 500 and the exception message as payload.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._settings = settings
        headers = {"Accept": "application/json"}
        if settings.air_key:
            headers["Application-Interface-Key"] = settings.air_key
        self._client = httpx.AsyncClient(
            base_url=settings.base_url,
            headers=headers,
            timeout=settings.request_timeout,
            transport=transport,
        )
        self._token: Optional[str] = None
        self._token_expires_at = 0.0
        self._token_lock = asyncio.Lock()

    @property
    def settings(self) -> Settings:
        return self._settings

    async def __aenter__(self) -> "CommerceClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    async def _access_token(self) -> Optional[str]:
        if not self._settings.oauth_token_url:
            return None

        async with self._token_lock:
            if self._token and time.monotonic() < self._token_expires_at:
                return self._token

            try:
                resp = await self._client.post(
                    self._settings.oauth_token_url,
                    data={
                        "grant_type": "password",
                        "client_id": self._settings.client_id,
                        "client_secret": self._settings.client_secret,
                        "username": self._settings.api_username,
                        "password": self._settings.api_password,
                    },
                )
                resp.raise_for_status()
                payload = resp.json()
            except httpx.HTTPStatusError as exc:
                logger.error("OAuth token request failed - %s", exc.response.status_code)
                raise RemoteError(exc.response.status_code, _body(exc.response)) from exc
            except (httpx.HTTPError, ValueError) as exc:
                logger.error("OAuth token request failed - %s", exc)
                raise RemoteError(500, str(exc)) from exc

            self._token = payload["access_token"]
            expires_in = float(payload.get("expires_in", 0) or 0)
            self._token_expires_at = time.monotonic() + max(expires_in - _TOKEN_EXPIRY_MARGIN, 0)
            return self._token

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        json: Any = None,
    ) -> RemoteResponse:
        headers = {}
        token = await self._access_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            resp = await self._client.request(method, path, params=params, json=json, headers=headers)
        except httpx.HTTPError as exc:
            logger.error(" ↳ %s %s - %s", method, path, exc)
            raise RemoteError(500, str(exc)) from exc

        data = _body(resp)
        if resp.is_success:
            logger.info(" ↳ %s %s - %s %s", method, path, resp.status_code, resp.reason_phrase)
            return RemoteResponse(data=data, status=resp.status_code)

        logger.error(
            " ↳ %s %s - %s %s: %s", method, path, resp.status_code, resp.reason_phrase, data
        )
        raise RemoteError(resp.status_code, data)

    async def get(self, path: str, params: Optional[dict] = None) -> RemoteResponse:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, body: Any, params: Optional[dict] = None) -> RemoteResponse:
        return await self.request("POST", path, params=params, json=body)

    async def put(self, path: str, body: Any, params: Optional[dict] = None) -> RemoteResponse:
        return await self.request("PUT", path, params=params, json=body)

    async def delete(self, path: str) -> RemoteResponse:
        return await self.request("DELETE", path)


def _body(resp: httpx.Response) -> Any:
    """Decode a JSON body, falling back to text (or ``None`` when empty)."""
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return resp.text
