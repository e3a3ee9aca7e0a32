"""Signed execution payload construction.

The personal wallet verifies, for a payload submitted by a relayer:

    digest = keccak256(abi.encodePacked(
        address(this), from, to, value, data, rewardType, rewardAmount,
        nonces[from]))
    ecrecover(toEthSignedMessageHash(digest), v, r, s) == from

so the field order and packed widths below are part of the protocol.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_utils import keccak, to_hex
from web3 import Web3

from .errors import PayloadError
from .identity import Session
from .intent import ExecutionIntent, to_address, to_data, to_uint256
from .types import SignedPayloadDict

_LOG = logging.getLogger(__name__)

PERSONAL_MESSAGE_PREFIX = b"\x19Ethereum Signed Message:\n32"

DIGEST_TYPES = (
    "address",  # personal wallet
    "address",  # from
    "address",  # to
    "uint256",  # value
    "bytes",  # data
    "address",  # rewardType
    "uint256",  # rewardAmount
    "uint256",  # counter
)

PAYLOAD_FIELDS = (
    "v", "r", "s", "from", "to", "value", "data", "rewardType", "rewardAmount",
)
_DECIMAL_RE = re.compile(r"^[0-9]+$")


def payload_digest(
    target_wallet: str, sender: str, intent: ExecutionIntent, counter: int
) -> bytes:
    """Return the 32-byte packed keccak256 the wallet recomputes on-chain."""
    values = [
        to_address(target_wallet, "target_wallet"),
        to_address(sender, "from"),
        intent.to,
        intent.value,
        intent.data,
        intent.reward_type,
        intent.reward_amount,
        to_uint256(counter, "counter"),
    ]
    return bytes(Web3.solidity_keccak(list(DIGEST_TYPES), values))


def personal_digest(digest: bytes) -> bytes:
    """Apply the ``eth_sign`` personal message prefix to a 32-byte digest."""
    if len(digest) != 32:
        raise PayloadError(f"digest must be 32 bytes, got {len(digest)}")
    return keccak(PERSONAL_MESSAGE_PREFIX + digest)


def _parse_hex32(value: str, field_name: str) -> bytes:
    raw = to_data(value)
    if len(raw) != 32:
        raise PayloadError(f"{field_name} must be 32 bytes, got {len(raw)}")
    return raw


def _parse_decimal(value: str, field_name: str) -> int:
    if not isinstance(value, str) or not _DECIMAL_RE.match(value):
        raise PayloadError(f"{field_name} must be a decimal string, got {value!r}")
    return to_uint256(int(value), field_name)


@dataclass(frozen=True)
class SignedPayload:
    """A signed ``execute`` call ready for a relayer."""

    v: int
    r: bytes
    s: bytes
    sender: str
    to: str
    value: int
    data: bytes
    reward_type: str
    reward_amount: int

    def to_dict(self) -> SignedPayloadDict:
        return {
            "v": "0x" + format(self.v, "02x"),
            "r": to_hex(self.r),
            "s": to_hex(self.s),
            "from": self.sender,
            "to": self.to,
            "value": str(self.value),
            "data": to_hex(self.data),
            "rewardType": self.reward_type,
            "rewardAmount": str(self.reward_amount),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, obj: dict) -> "SignedPayload":
        """Parse the wire shape back into a payload.

        Raises:
            PayloadError: On missing/extra fields or malformed values.
        """
        if not isinstance(obj, dict):
            raise PayloadError("payload must be a JSON object")
        missing = set(PAYLOAD_FIELDS) - set(obj.keys())
        if missing:
            raise PayloadError(f"Missing payload fields: {sorted(missing)}")
        extra = set(obj.keys()) - set(PAYLOAD_FIELDS)
        if extra:
            raise PayloadError(f"Unexpected payload fields: {sorted(extra)}")

        v_raw = to_data(obj["v"])
        if len(v_raw) != 1:
            raise PayloadError(f"v must be 1 byte, got {len(v_raw)}")
        return cls(
            v=v_raw[0],
            r=_parse_hex32(obj["r"], "r"),
            s=_parse_hex32(obj["s"], "s"),
            sender=to_address(obj["from"], "from"),
            to=to_address(obj["to"], "to"),
            value=_parse_decimal(obj["value"], "value"),
            data=to_data(obj["data"]),
            reward_type=to_address(obj["rewardType"], "rewardType"),
            reward_amount=_parse_decimal(obj["rewardAmount"], "rewardAmount"),
        )

    @classmethod
    def from_json(cls, text: str) -> "SignedPayload":
        try:
            obj = json.loads(text)
        except (TypeError, ValueError) as e:
            raise PayloadError(f"payload is not valid JSON: {e}") from e
        return cls.from_dict(obj)

    @property
    def intent(self) -> ExecutionIntent:
        return ExecutionIntent(
            to=self.to,
            value=self.value,
            data=self.data,
            reward_type=self.reward_type,
            reward_amount=self.reward_amount,
        )

    def recover_signer(self, target_wallet: str, counter: int) -> str:
        """Recover the address that signed this payload for *counter*."""
        digest = payload_digest(target_wallet, self.sender, self.intent, counter)
        return Account.recover_message(
            encode_defunct(primitive=digest),
            vrs=(self.v, int.from_bytes(self.r, "big"), int.from_bytes(self.s, "big")),
        )


def build(
    session: Session,
    intent: ExecutionIntent,
    counter: int,
    target_wallet: str | None = None,
    sender: str | None = None,
) -> SignedPayload:
    """Hash, sign and assemble a payload.

    Args:
        session: Signing session; its key signs the payload.
        intent: Execution tuple to authorize.
        counter: The wallet's current ``nonces(sender)``. Must be fresh.
        target_wallet: Wallet that will execute; defaults to the session's.
        sender: ``from`` field; defaults to the session's signer address.

    Returns:
        The signed payload. Identical inputs give identical output.
    """
    target_wallet = to_address(target_wallet or session.personal_wallet, "target_wallet")
    sender = to_address(sender or session.address, "from")

    digest = payload_digest(target_wallet, sender, intent, counter)
    signed = session.identity.sign_personal(digest)
    _LOG.debug(
        "digest=%s personal_digest=%s", to_hex(digest), to_hex(personal_digest(digest))
    )

    return SignedPayload(
        v=signed.v,
        r=signed.r.to_bytes(32, "big"),
        s=signed.s.to_bytes(32, "big"),
        sender=sender,
        to=intent.to,
        value=intent.value,
        data=intent.data,
        reward_type=intent.reward_type,
        reward_amount=intent.reward_amount,
    )
