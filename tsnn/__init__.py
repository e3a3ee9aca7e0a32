"""Tenzorum TSNN Python client SDK: signed meta-transactions for personal wallets."""

from .client import TsnnClient
from .discovery import TSN_URI, get_tsn
from .identity import Identity, Session
from .intent import NO_DATA, REWARD_TYPE_ETHER, ExecutionIntent
from .payload import SignedPayload, build, payload_digest, personal_digest
from .errors import (
    TsnnError,
    UninitializedSession,
    SessionError,
    MalformedIdentity,
    CounterUnavailable,
    EncodingFailure,
    PayloadError,
    DiscoveryError,
)

__all__ = [
    "TsnnClient",
    "Identity",
    "Session",
    "ExecutionIntent",
    "SignedPayload",
    "build",
    "payload_digest",
    "personal_digest",
    "get_tsn",
    "TSN_URI",
    "NO_DATA",
    "REWARD_TYPE_ETHER",
    "TsnnError",
    "UninitializedSession",
    "SessionError",
    "MalformedIdentity",
    "CounterUnavailable",
    "EncodingFailure",
    "PayloadError",
    "DiscoveryError",
]
