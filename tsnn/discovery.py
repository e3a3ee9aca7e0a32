"""TSN (Tenzorum Service Node) discovery lookup.

Environment variables:
    TSNN_DISCOVERY_URI   – discovery endpoint (default TSN_URI)
    TSNN_HTTP_TIMEOUT    – request timeout in seconds (default 30)
"""

from __future__ import annotations

import logging
import os

import requests

from .errors import DiscoveryError

_LOG = logging.getLogger(__name__)

TSN_URI = "http://tsnn.tenzorum.xyz:1888/tsnn"


def get_tsn(uri: str | None = None, timeout: float | None = None) -> str:
    """Return the endpoint of an active TSN relay node.

    Raises:
        DiscoveryError: On transport failure, non-200 status, invalid JSON,
            a response without a ``tsn`` field, or a non-numeric
            ``TSNN_HTTP_TIMEOUT``.
    """
    uri = uri or os.environ.get("TSNN_DISCOVERY_URI", TSN_URI)
    if timeout is None:
        raw_timeout = os.environ.get("TSNN_HTTP_TIMEOUT", "30")
        try:
            timeout = float(raw_timeout)
        except ValueError as e:
            raise DiscoveryError(f"Invalid TSNN_HTTP_TIMEOUT: {raw_timeout!r}") from e
    try:
        resp = requests.get(uri, timeout=timeout)
    except requests.RequestException as e:
        raise DiscoveryError(f"GET {uri} failed: {e}") from e

    if resp.status_code != 200:
        raise DiscoveryError(f"Discovery error ({resp.status_code}): {resp.text}")

    try:
        data = resp.json()
    except ValueError as e:
        raise DiscoveryError(f"Discovery returned invalid JSON: {e}") from e

    tsn = data.get("tsn") if isinstance(data, dict) else None
    if not isinstance(tsn, str) or not tsn:
        raise DiscoveryError(f"Discovery response missing 'tsn': {data!r}")
    _LOG.info("discovered tsn=%s", tsn)
    return tsn
