# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML loader for the remote sync configuration file."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from archsync.errors import SyncConfigError

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".archsync.yaml"

API_KEY_ENV = "ARCHSYNC_API_KEY"
API_SECRET_ENV = "ARCHSYNC_API_SECRET"


class SyncConfig(BaseModel):
    """Connection settings for the remote workspace store.

    Attributes:
        api_url: Base URL of the remote store API.
        api_key: API key identifying the caller.
        api_secret: Secret used to sign requests.
        workspace_id: Identifier of the remote workspace to synchronize.
        merge_from_remote: Whether uploads keep remote-only layout data.
        timeout: Network timeout in seconds.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    api_url: str = Field(alias="api-url")
    api_key: str = Field(alias="api-key")
    api_secret: str = Field(alias="api-secret")
    workspace_id: str = Field(alias="workspace-id")
    merge_from_remote: bool = Field(alias="merge-from-remote", default=True)
    timeout: float = Field(default=30.0, gt=0)


def load_sync_config(path: Path, environ: Mapping[str, str] | None = None) -> SyncConfig:
    """Load and validate a sync configuration file.

    ``api-key`` and ``api-secret`` may be left out of the file, in which case
    they are read from the ``ARCHSYNC_API_KEY`` and ``ARCHSYNC_API_SECRET``
    environment variables.

    Args:
        path: Path to the `.archsync.yaml` file.
        environ: Environment used for credential fallback (defaults to ``os.environ``).

    Returns:
        A validated SyncConfig instance.

    Raises:
        SyncConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise SyncConfigError(f"Sync config file not found: {path}") from None
    except OSError as exc:
        raise SyncConfigError(f"Cannot read sync config file: {exc}") from exc

    return _parse_sync_config(text, environ if environ is not None else os.environ, source_label=str(path))


# ################
# Implementation
# ################


def _parse_sync_config(text: str, environ: Mapping[str, str], source_label: str = "<string>") -> SyncConfig:
    """Parse sync config YAML text into a SyncConfig.

    Raises:
        SyncConfigError: If the YAML is invalid or required fields are missing.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SyncConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SyncConfigError(f"{source_label}: sync config must be a YAML mapping")

    for key, env_name in (("api-key", API_KEY_ENV), ("api-secret", API_SECRET_ENV)):
        if key not in data and env_name in environ:
            data[key] = environ[env_name]

    # Numeric workspace ids are common; treat them as opaque strings.
    if isinstance(data.get("workspace-id"), int):
        data["workspace-id"] = str(data["workspace-id"])

    try:
        return SyncConfig.model_validate(data)
    except ValidationError as exc:
        raise SyncConfigError(f"Invalid sync config {source_label}: {exc}") from exc
