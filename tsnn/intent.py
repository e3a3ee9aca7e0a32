"""Execution intents and the encoders that build them.

An ``ExecutionIntent`` is the ``(to, value, data, rewardType, rewardAmount)``
tuple a personal wallet executes on behalf of a signer.
"""

from __future__ import annotations

from dataclasses import dataclass

from hexbytes import HexBytes
from web3 import Web3

from .abi import ACCOUNT_INPUTS, TRANSFER_INPUTS, AbiEncoder, encode_call
from .errors import PayloadError

# Plain ether transfers carry a single zero byte of call data, not an empty
# byte string; the wallet hashes exactly what it receives.
NO_DATA = b"\x00"
REWARD_TYPE_ETHER = "0x0000000000000000000000000000000000000000"
ZERO_WEI = 0

UINT256_MAX = 2**256 - 1


def to_address(value: str, field_name: str) -> str:
    """Validate *value* and return it in checksum form."""
    try:
        return Web3.to_checksum_address(value)
    except (TypeError, ValueError) as e:
        raise PayloadError(f"{field_name} is not a valid address: {value!r}") from e


def to_uint256(value: int, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise PayloadError(f"{field_name} must be an int, got {type(value).__name__}")
    if value < 0 or value > UINT256_MAX:
        raise PayloadError(f"{field_name} out of uint256 range: {value}")
    return value


def to_data(value: bytes | str) -> bytes:
    try:
        return bytes(HexBytes(value))
    except (TypeError, ValueError) as e:
        raise PayloadError(f"data is not valid hex or bytes: {value!r}") from e


@dataclass(frozen=True)
class ExecutionIntent:
    to: str
    value: int
    data: bytes
    reward_type: str
    reward_amount: int

    @classmethod
    def create(
        cls,
        to: str,
        value: int,
        data: bytes | str = NO_DATA,
        reward_type: str = REWARD_TYPE_ETHER,
        reward_amount: int = ZERO_WEI,
    ) -> "ExecutionIntent":
        """Validate and normalize fields.

        Raises:
            PayloadError: On an invalid address, data, or uint256 value.
        """
        return cls(
            to=to_address(to, "to"),
            value=to_uint256(value, "value"),
            data=to_data(data),
            reward_type=to_address(reward_type, "reward_type"),
            reward_amount=to_uint256(reward_amount, "reward_amount"),
        )


# ---------------------------------------------------------------------------
# Call data
# ---------------------------------------------------------------------------
def prepare_token_transfer_data(encoder: AbiEncoder, amount: int, to: str) -> bytes:
    """Encode ``transfer(address to, uint256 amount)``."""
    return encode_call(
        encoder,
        "transfer",
        TRANSFER_INPUTS,
        [to_address(to, "to"), to_uint256(amount, "amount")],
    )


def prepare_add_master_data(encoder: AbiEncoder, account: str) -> bytes:
    """Encode ``addMasterAccount(address account)``."""
    return encode_call(
        encoder, "addMasterAccount", ACCOUNT_INPUTS, [to_address(account, "account")]
    )


def prepare_add_action_data(encoder: AbiEncoder, account: str) -> bytes:
    """Encode ``addActionAccount(address account)``."""
    return encode_call(
        encoder, "addActionAccount", ACCOUNT_INPUTS, [to_address(account, "account")]
    )


# ---------------------------------------------------------------------------
# Intents
# ---------------------------------------------------------------------------
def ether_transfer(
    to: str, amount_wei: int, reward_amount: int = ZERO_WEI
) -> ExecutionIntent:
    return ExecutionIntent.create(
        to=to,
        value=amount_wei,
        data=NO_DATA,
        reward_type=REWARD_TYPE_ETHER,
        reward_amount=reward_amount,
    )


def token_transfer(
    encoder: AbiEncoder,
    token: str,
    to: str,
    amount: int,
    reward_type: str = REWARD_TYPE_ETHER,
    reward_amount: int = ZERO_WEI,
) -> ExecutionIntent:
    """The wallet calls ``token.transfer(to, amount)`` with no ether attached."""
    data = prepare_token_transfer_data(encoder, amount, to)
    return ExecutionIntent.create(
        to=token,
        value=ZERO_WEI,
        data=data,
        reward_type=reward_type,
        reward_amount=reward_amount,
    )


def add_master(
    encoder: AbiEncoder,
    personal_wallet: str,
    account: str,
    reward_type: str = REWARD_TYPE_ETHER,
    reward_amount: int = ZERO_WEI,
) -> ExecutionIntent:
    """The wallet calls itself to grant *account* the master role."""
    data = prepare_add_master_data(encoder, account)
    return ExecutionIntent.create(
        to=personal_wallet,
        value=ZERO_WEI,
        data=data,
        reward_type=reward_type,
        reward_amount=reward_amount,
    )


def add_action(
    encoder: AbiEncoder,
    personal_wallet: str,
    account: str,
    reward_type: str = REWARD_TYPE_ETHER,
    reward_amount: int = ZERO_WEI,
) -> ExecutionIntent:
    """The wallet calls itself to grant *account* the action role."""
    data = prepare_add_action_data(encoder, account)
    return ExecutionIntent.create(
        to=personal_wallet,
        value=ZERO_WEI,
        data=data,
        reward_type=reward_type,
        reward_amount=reward_amount,
    )
