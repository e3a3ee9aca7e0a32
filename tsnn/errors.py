"""Machine-readable error categories for TSNN payload construction."""


class TsnnError(Exception):
    """Base exception for all TSNN client errors."""


class UninitializedSession(TsnnError):
    """A signing operation was attempted before the session was initialized."""


class SessionError(TsnnError):
    """Session lifecycle violation (e.g. initializing a client twice)."""


class MalformedIdentity(TsnnError):
    """Private key or personal wallet address is not usable."""


class CounterUnavailable(TsnnError):
    """The wallet nonce query failed. Safe to retry."""


class EncodingFailure(TsnnError):
    """ABI encoding returned an empty or invalid call-data payload."""


class PayloadError(TsnnError):
    """Invalid execution intent fields or malformed serialized payload."""


class DiscoveryError(TsnnError):
    """TSN discovery lookup failed."""
