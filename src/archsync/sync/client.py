# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""HTTP client that uploads workspaces to the remote store.

An upload is one fetch followed by one write, strictly in that order:

1. ``GET {api_url}/workspace/{id}`` (404 means "no remote workspace yet");
2. optional merge of remote layout into the local workspace;
3. ``PUT {api_url}/workspace/{id}`` with the next revision number.

The write is a single request, so any failure leaves the remote workspace at
the revision it had before the call.
"""

from __future__ import annotations

import copy
from datetime import datetime, timezone
from enum import Enum

import httpx
from loguru import logger

from archsync.errors import AuthenticationError, ConflictError, NetworkError
from archsync.sync.auth import sign_request
from archsync.sync.merge import merge
from archsync.workspace.config import SyncConfig
from archsync.workspace.document import deserialize, serialize
from archsync.workspace.workspace import Workspace

# ###############
# Public Interface
# ###############

JSON_CONTENT_TYPE = "application/json; charset=UTF-8"


class SyncState(Enum):
    """Progress of a client through its upload protocol."""

    UNAUTHENTICATED = "unauthenticated"
    FETCHED = "fetched"
    UPLOADED = "uploaded"


class SyncClient:
    """Fetches, merges and uploads workspaces keyed by workspace id.

    Args:
        api_url: Base URL of the remote store API.
        merge_from_remote: Keep remote-only layout data when uploading.
        optimistic_lock: Send the fetched revision in ``If-Match`` so the
            store rejects the write if someone else uploaded in between.
        timeout: Network timeout in seconds.
        transport: Optional ``httpx`` transport (used by tests).
    """

    def __init__(
        self,
        api_url: str,
        *,
        merge_from_remote: bool = True,
        optimistic_lock: bool = True,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.merge_from_remote = merge_from_remote
        self.optimistic_lock = optimistic_lock
        self.timeout = timeout
        self._transport = transport
        self._api_key: str | None = None
        self._api_secret: str | None = None
        self._state = SyncState.UNAUTHENTICATED

    @classmethod
    def from_config(cls, config: SyncConfig, transport: httpx.BaseTransport | None = None) -> SyncClient:
        """Create a configured client from a loaded :class:`SyncConfig`."""
        client = cls(
            config.api_url,
            merge_from_remote=config.merge_from_remote,
            timeout=config.timeout,
            transport=transport,
        )
        client.configure(config.api_key, config.api_secret)
        return client

    @property
    def state(self) -> SyncState:
        return self._state

    def configure(self, api_key: str, api_secret: str) -> None:
        """Store the credentials used to sign requests. Nothing is sent."""
        self._api_key = api_key
        self._api_secret = api_secret

    def fetch(self, workspace_id: str) -> Workspace | None:
        """Return the remote workspace, or ``None`` if none is stored yet.

        Raises:
            AuthenticationError: If no credentials are configured or they are rejected.
            NetworkError: On transport failures or unexpected responses.
            DocumentError: If the remote document cannot be decoded.
        """
        self._require_credentials()
        with self._open() as http:
            remote = self._fetch(http, str(workspace_id))
        self._state = SyncState.FETCHED
        return remote

    def upload(self, workspace_id: str, workspace: Workspace) -> int:
        """Store *workspace* as the next revision of remote workspace *workspace_id*.

        On success the local workspace's ``revision`` and ``last_modified``
        are updated and the new revision is returned.

        Raises:
            AuthenticationError: If no credentials are configured or they are rejected.
            NetworkError: On transport failures or unexpected responses.
            ConflictError: If the remote revision changed since it was fetched.
        """
        self._require_credentials()
        workspace_id = str(workspace_id)
        with self._open() as http:
            remote = self._fetch(http, workspace_id)
            self._state = SyncState.FETCHED
            base_revision = remote.revision if remote is not None else 0

            if self.merge_from_remote:
                payload = merge(remote, workspace)
            else:
                payload = copy.deepcopy(workspace)
            payload.revision = base_revision + 1
            payload.last_modified = datetime.now(timezone.utc)

            headers: dict[str, str] = {}
            if self.optimistic_lock:
                headers["If-Match"] = str(base_revision)
            logger.info("Uploading workspace {} as revision {}", workspace_id, payload.revision)
            response = self._send(
                http,
                "PUT",
                workspace_id,
                serialize(payload).encode("utf-8"),
                JSON_CONTENT_TYPE,
                headers,
            )
            _raise_for_status(response, f"upload workspace {workspace_id}")

        workspace.revision = payload.revision
        workspace.last_modified = payload.last_modified
        self._state = SyncState.UPLOADED
        logger.info("Workspace {} stored at revision {}", workspace_id, payload.revision)
        return payload.revision

    # ################
    # Implementation
    # ################

    def _require_credentials(self) -> None:
        if not self._api_key or not self._api_secret:
            raise AuthenticationError("No API key/secret configured; call configure() first")

    def _open(self) -> httpx.Client:
        return httpx.Client(timeout=self.timeout, transport=self._transport)

    def _fetch(self, http: httpx.Client, workspace_id: str) -> Workspace | None:
        logger.debug("Fetching remote workspace {}", workspace_id)
        response = self._send(http, "GET", workspace_id, b"", "")
        if response.status_code == 404:
            logger.info("No remote workspace {}; starting from an empty baseline", workspace_id)
            return None
        _raise_for_status(response, f"fetch workspace {workspace_id}")
        remote = deserialize(response.content)
        logger.debug("Fetched remote workspace {} at revision {}", workspace_id, remote.revision)
        return remote

    def _send(
        self,
        http: httpx.Client,
        method: str,
        workspace_id: str,
        body: bytes,
        content_type: str,
        extra_headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        assert self._api_key is not None and self._api_secret is not None
        url = httpx.URL(f"{self.api_url}/workspace/{workspace_id}")
        headers = sign_request(method, url.path, body, content_type, self._api_key, self._api_secret)
        headers.update(extra_headers or {})
        try:
            return http.request(method, url, content=body or None, headers=headers)
        except httpx.TransportError as exc:
            raise NetworkError(f"{method} {url} failed: {exc}") from exc


def _raise_for_status(response: httpx.Response, action: str) -> None:
    """Translate an error response into the matching sync error."""
    status = response.status_code
    if status in (401, 403):
        raise AuthenticationError(f"Cannot {action}: credentials rejected (HTTP {status})")
    if status in (409, 412):
        raise ConflictError(f"Cannot {action}: remote revision changed since it was fetched (HTTP {status})")
    if response.is_error:
        raise NetworkError(f"Cannot {action}: unexpected response HTTP {status}")
