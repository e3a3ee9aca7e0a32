"""secp256k1 signing identity and the immutable signing session."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from eth_account import Account
from eth_account.datastructures import SignedMessage
from eth_account.messages import encode_defunct
from hexbytes import HexBytes
from web3 import Web3

from .errors import MalformedIdentity

_LOG = logging.getLogger(__name__)

SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


class Identity:
    """An Ethereum signing identity backed by a private key."""

    def __init__(self, private_key: str | bytes):
        try:
            self._account = Account.from_key(_normalize_key(private_key))
        except MalformedIdentity:
            raise
        except Exception as e:
            raise MalformedIdentity(f"Invalid private key: {e}") from e

    @classmethod
    def generate(cls) -> "Identity":
        """Generate a new random keypair (in-memory only)."""
        return cls(bytes(Account.create().key))

    @property
    def address(self) -> str:
        """EIP-55 checksummed address derived from the private key."""
        return self._account.address

    @property
    def private_key_bytes(self) -> bytes:
        return bytes(self._account.key)

    def sign_personal(self, digest: bytes) -> SignedMessage:
        """Sign a 32-byte digest under the ``\\x19Ethereum Signed Message`` prefix.

        Signing is deterministic (RFC 6979) and v is 27 or 28.
        """
        return self._account.sign_message(encode_defunct(primitive=digest))

    def __repr__(self) -> str:
        return f"Identity(address={self.address})"


def _normalize_key(private_key: str | bytes) -> bytes:
    if isinstance(private_key, (bytes, bytearray)):
        raw = bytes(private_key)
    elif isinstance(private_key, str):
        s = private_key.strip()
        if not s.startswith(("0x", "0X")):
            s = "0x" + s
        try:
            raw = bytes(HexBytes(s))
        except ValueError as e:
            raise MalformedIdentity(f"Private key is not valid hex: {e}") from e
    else:
        raise MalformedIdentity(f"Unsupported private key type: {type(private_key)!r}")

    if len(raw) != 32:
        raise MalformedIdentity(
            f"Invalid private key: expected 32 bytes, got {len(raw)}"
        )
    if not 0 < int.from_bytes(raw, "big") < SECP256K1_N:
        raise MalformedIdentity("Invalid private key: scalar out of secp256k1 range")
    return raw


@dataclass(frozen=True)
class Session:
    """Signing identity bound to the personal wallet it may sign for."""

    identity: Identity
    personal_wallet: str

    @classmethod
    def create(cls, private_key: str | bytes, personal_wallet: str) -> "Session":
        """Derive the signer address and bind it to *personal_wallet*.

        Raises:
            MalformedIdentity: If the key or wallet address is invalid.
        """
        identity = Identity(private_key)
        try:
            wallet = Web3.to_checksum_address(personal_wallet)
        except (TypeError, ValueError) as e:
            raise MalformedIdentity(
                f"Invalid personal wallet address {personal_wallet!r}: {e}"
            ) from e
        _LOG.info("session ready signer=%s wallet=%s", identity.address, wallet)
        return cls(identity=identity, personal_wallet=wallet)

    @property
    def address(self) -> str:
        return self.identity.address
