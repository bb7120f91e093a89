"""Dropbox API transport.

This module provides the DbxClient class that owns the aiohttp session and
dispatches the three Dropbox endpoint styles:

 - rpc      (api host, JSON body)
 - upload   (content host, bytes body, arguments in Dropbox-API-Arg)
 - download (content host, arguments in Dropbox-API-Arg, metadata in
   Dropbox-API-Result, file bytes in the body)

plus the unauthenticated notify host used by list_folder/longpoll.

Every call is one POST. HTTP 200 becomes Success, anything else becomes
Failure with the decoded error body. Nothing is retried.
"""
from __future__ import annotations

import asyncio
import json
import logging
import ssl as ssl_module
from typing import Any, Dict, Optional, Union

import aiohttp

from .app import DropboxApp
from .args import WireRecord
from .exceptions import ArgumentError, DbxTimeoutError, DbxTransportError
from .helpers import decode_api_result, encode_api_arg
from .models import DbxResult, DownloadResult, Failure, Success
from .types import JSONType

# --- Constants ---
API_URL = "https://api.dropboxapi.com/2"
CONTENT_URL = "https://content.dropboxapi.com/2"
NOTIFY_URL = "https://notify.dropboxapi.com/2"
API_ARG_HEADER = "Dropbox-API-Arg"
API_RESULT_HEADER = "Dropbox-API-Result"
STREAM_CHUNK_SIZE = 8192

log = logging.getLogger(__name__)


def _wire(arg: Union[WireRecord, Dict[str, Any]]) -> Dict[str, Any]:
    return arg.to_wire() if isinstance(arg, WireRecord) else arg


class DbxClient:
    """Low-level client for the Dropbox v2 HTTP API.

    Holds the credential and the HTTP session; knows nothing about individual
    routes. Use ``DropboxFile`` for the typed endpoint surface.
    """

    def __init__(
        self,
        app: Union[DropboxApp, str],
        *,
        timeout: Optional[float] = None,
        ssl: Union[None, bool, ssl_module.SSLContext] = None,
        conn_limit: Optional[int] = None,
        conn_limit_per_host: Optional[int] = None,
        keepalive_timeout: Optional[float] = None,
        api_url: str = API_URL,
        content_url: str = CONTENT_URL,
        notify_url: str = NOTIFY_URL,
        user_agent: Optional[str] = None,
    ):
        """Initialize the client.

        Args:
            app: DropboxApp, or a raw access token
            timeout: Total per-request timeout in seconds. None keeps aiohttp's
                default; longpoll callers need room for the server timeout plus
                up to 90 seconds of jitter.
            ssl: None for default verification, False to disable verification,
                or an SSLContext (e.g. for certificate pinning)
            conn_limit: Maximum simultaneous connections
            conn_limit_per_host: Maximum simultaneous connections per host
            keepalive_timeout: Seconds an idle connection is kept open
            api_url: Base URL of the RPC host
            content_url: Base URL of the content (upload/download) host
            notify_url: Base URL of the longpoll notification host
            user_agent: Optional User-Agent header

        Raises:
            ArgumentError: If the token is empty or a base URL is not HTTPS
        """
        self.app = app if isinstance(app, DropboxApp) else DropboxApp(app)
        for url in (api_url, content_url, notify_url):
            if not url.lower().startswith("https://"):
                raise ArgumentError(f"HTTPS is required for Dropbox hosts: {url}")
        self.api_url = api_url.rstrip("/")
        self.content_url = content_url.rstrip("/")
        self.notify_url = notify_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent

        self._ssl = ssl
        self._conn_limit = conn_limit
        self._conn_limit_per_host = conn_limit_per_host
        self._keepalive_timeout = keepalive_timeout
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "DbxClient":
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _ensure_session(self) -> None:
        if self._session is None or self._session.closed:
            connector_kwargs: Dict[str, Any] = {"ssl": True if self._ssl is None else self._ssl}
            if self._conn_limit is not None:
                connector_kwargs["limit"] = self._conn_limit
            if self._conn_limit_per_host is not None:
                connector_kwargs["limit_per_host"] = self._conn_limit_per_host
            if self._keepalive_timeout is not None:
                connector_kwargs["keepalive_timeout"] = self._keepalive_timeout
            connector = aiohttp.TCPConnector(**connector_kwargs)
            self._session = aiohttp.ClientSession(connector=connector)

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    # -------------------------
    # Endpoint styles
    # -------------------------
    async def rpc(self, route: str, arg: Union[WireRecord, Dict[str, Any]],
                  result_key: str = "result") -> DbxResult:
        """POST a JSON body to the RPC host."""
        return await self._make_api_request(self.api_url, route, json_body=_wire(arg), result_key=result_key)

    async def content_rpc(self, route: str, arg: Union[WireRecord, Dict[str, Any]]) -> DbxResult:
        """POST a JSON body to the content host (get_thumbnail_batch)."""
        return await self._make_api_request(self.content_url, route, json_body=_wire(arg))

    async def upload(self, route: str, arg: Optional[Union[WireRecord, Dict[str, Any]]], data: bytes) -> DbxResult:
        """POST raw bytes to the content host with arguments in Dropbox-API-Arg."""
        api_arg = _wire(arg) if arg is not None else None
        return await self._make_api_request(self.content_url, route, api_arg=api_arg, data=data)

    async def download(self, route: str, arg: Union[WireRecord, Dict[str, Any]],
                       save_to: Optional[str] = None) -> DbxResult:
        """POST to the content host and return a DownloadResult payload on success."""
        return await self._make_api_request(self.content_url, route, api_arg=_wire(arg),
                                            download=True, save_to=save_to)

    async def notify(self, route: str, arg: Union[WireRecord, Dict[str, Any]]) -> DbxResult:
        """POST a JSON body to the notify host. The route takes no Authorization."""
        return await self._make_api_request(self.notify_url, route, json_body=_wire(arg), auth=False)

    # -------------------------
    # HTTP helper
    # -------------------------
    async def _make_api_request(self, host_url: str, route: str, *,
                                json_body: Any = None, api_arg: Optional[Dict[str, Any]] = None,
                                data: Optional[bytes] = None, auth: bool = True,
                                download: bool = False, save_to: Optional[str] = None,
                                result_key: str = "result") -> DbxResult:
        """
        Issues exactly one POST and classifies the response by status code.
        Raises DbxTransportError only when no HTTP response was received.
        """
        url = f"{host_url}/{route}"
        headers: Dict[str, str] = {}
        if auth:
            headers["Authorization"] = self.app.authorization
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        if api_arg is not None:
            headers[API_ARG_HEADER] = encode_api_arg(api_arg)

        request_kwargs: Dict[str, Any] = {"headers": headers}
        if json_body is not None:
            headers["Content-Type"] = "application/json"
            request_kwargs["json"] = json_body
        elif data is not None:
            headers["Content-Type"] = "application/octet-stream"
            request_kwargs["data"] = data
        if self.timeout is not None:
            request_kwargs["timeout"] = aiohttp.ClientTimeout(total=self.timeout)

        await self._ensure_session()
        log.debug(f"POST {route} (body: {'json' if json_body is not None else len(data) if data is not None else 'none'})")
        try:
            async with self._session.post(url, **request_kwargs) as resp:
                log.debug(f"{route} response - status: {resp.status}, content-type: {resp.content_type}")
                if resp.status != 200:
                    error = await self._read_body(resp, route)
                    summary = error.get("error_summary", error) if isinstance(error, dict) else error
                    log.warning(f"{route} failed with status {resp.status}: {summary}")
                    return Failure(error=error, status=resp.status, route=route)

                if download:
                    payload: Any = await self._read_download(resp, route, save_to)
                else:
                    payload = await self._read_body(resp, route)
                return Success(payload=payload, status=resp.status, route=route, result_key=result_key)
        except asyncio.TimeoutError as e:
            log.error(f"API request timed out for {route}: {e!r}")
            raise DbxTimeoutError(f"API request timed out for {route}: {e!r}") from e
        except aiohttp.ClientError as e:
            log.error(f"API request failed for {route}: {e!r}")
            raise DbxTransportError(f"API request failed for {route}: {e!r}") from e

    async def _read_body(self, resp: aiohttp.ClientResponse, route: str) -> JSONType:
        # JSON for results and 409s, plain text for 400s; undecodable bytes are replaced
        text = await resp.text(errors="replace")
        if not text:
            log.debug(f"{route} returned an empty body")
            return None
        try:
            return json.loads(text)
        except ValueError:
            log.debug(f"{route} body is not JSON, returning text ({len(text)} chars)")
            return text

    async def _read_download(self, resp: aiohttp.ClientResponse, route: str,
                             save_to: Optional[str]) -> DownloadResult:
        metadata = decode_api_result(resp.headers.get(API_RESULT_HEADER))
        if metadata is None:
            log.warning(f"{route} response has no {API_RESULT_HEADER} header")
        if save_to is None:
            content = await resp.read()
            log.debug(f"{route} downloaded {len(content)} bytes")
            return DownloadResult(metadata=metadata, content=content)

        written = 0
        with open(save_to, "wb") as f:
            while True:
                chunk = await resp.content.read(STREAM_CHUNK_SIZE)
                if not chunk:
                    break
                f.write(chunk)
                written += len(chunk)
        log.info(f"{route} saved {written} bytes to {save_to}")
        return DownloadResult(metadata=metadata, saved_to=str(save_to))
