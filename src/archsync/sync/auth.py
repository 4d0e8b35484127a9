# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""HMAC request signing for the remote workspace store."""

from __future__ import annotations

import base64
import hashlib
import hmac
import time

# ###############
# Public Interface
# ###############


def content_md5(body: bytes) -> str:
    """Return the ``Content-MD5`` header value: base64 of the hex MD5 digest."""
    return base64.b64encode(hashlib.md5(body).hexdigest().encode("utf-8")).decode("ascii")


def signature(api_secret: str, message: str) -> str:
    """Return base64 of the hex HMAC-SHA256 of *message* keyed by *api_secret*."""
    digest = hmac.new(api_secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).hexdigest()
    return base64.b64encode(digest.encode("utf-8")).decode("ascii")


def sign_request(
    method: str,
    path: str,
    body: bytes,
    content_type: str,
    api_key: str,
    api_secret: str,
    nonce: str | None = None,
) -> dict[str, str]:
    """Build the authentication headers for one request.

    The signed message is ``METHOD\\npath\\ncontentMd5\\ncontentType\\nnonce\\n``.
    The nonce defaults to the current time in milliseconds.
    """
    if nonce is None:
        nonce = str(int(time.time() * 1000))
    md5 = content_md5(body)
    message = f"{method.upper()}\n{path}\n{md5}\n{content_type}\n{nonce}\n"
    headers = {
        "X-Authorization": f"{api_key}:{signature(api_secret, message)}",
        "Nonce": nonce,
        "Content-MD5": md5,
    }
    if content_type:
        headers["Content-Type"] = content_type
    return headers
