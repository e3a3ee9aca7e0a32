"""Personal wallet ABI and function-call encoding.

Call data for token transfers and role changes is produced by an injected
``AbiEncoder``.  ``Web3AbiEncoder`` is the default implementation; tests
substitute a deterministic fake.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Protocol, Sequence

from eth_abi import encode as abi_encode
from eth_utils import function_signature_to_4byte_selector

from ..errors import EncodingFailure

_ABI_PATH = Path(__file__).parent / "PersonalWallet.json"


def load_personal_wallet_abi() -> list[dict[str, Any]]:
    with open(_ABI_PATH) as f:
        raw = json.load(f)

    # Accept either a plain ABI list or a compiler artifact with an `abi` field.
    if isinstance(raw, list):
        return raw
    if isinstance(raw, dict) and isinstance(raw.get("abi"), list):
        return raw["abi"]
    raise ValueError(f"Unsupported ABI JSON shape in {_ABI_PATH}")


# ---------------------------------------------------------------------------
# Function descriptors
# ---------------------------------------------------------------------------
TRANSFER_INPUTS = [
    {"type": "address", "name": "to"},
    {"type": "uint256", "name": "amount"},
]
ACCOUNT_INPUTS = [
    {"type": "address", "name": "account"},
]


def function_signature(function_name: str, inputs: Sequence[dict]) -> str:
    """Return the canonical signature, e.g. ``transfer(address,uint256)``."""
    types = ",".join(item["type"] for item in inputs)
    return f"{function_name}({types})"


class AbiEncoder(Protocol):
    def encode(
        self, function_name: str, inputs: Sequence[dict], args: Sequence[Any]
    ) -> bytes:
        """Return selector-prefixed call data for *function_name*."""
        ...


class Web3AbiEncoder:
    """Standard contract-call encoding: 4-byte selector + ABI-encoded args."""

    def encode(
        self, function_name: str, inputs: Sequence[dict], args: Sequence[Any]
    ) -> bytes:
        if len(inputs) != len(args):
            raise EncodingFailure(
                f"{function_name}: expected {len(inputs)} arguments, got {len(args)}"
            )
        signature = function_signature(function_name, inputs)
        types = [item["type"] for item in inputs]
        try:
            selector = function_signature_to_4byte_selector(signature)
            return selector + abi_encode(types, list(args))
        except Exception as e:
            raise EncodingFailure(f"Encoding {signature} failed: {e}") from e


def encode_call(
    encoder: AbiEncoder,
    function_name: str,
    inputs: Sequence[dict],
    args: Sequence[Any],
) -> bytes:
    """Run *encoder* and reject empty or non-bytes results.

    Raises:
        EncodingFailure: If the encoder raised or returned nothing usable.
    """
    try:
        data = encoder.encode(function_name, inputs, args)
    except EncodingFailure:
        raise
    except Exception as e:
        raise EncodingFailure(f"Encoding {function_name} failed: {e}") from e

    if not isinstance(data, (bytes, bytearray)) or len(data) < 4:
        raise EncodingFailure(
            f"Encoder returned invalid call data for {function_name}: {data!r}"
        )
    return bytes(data)


__all__ = [
    "ACCOUNT_INPUTS",
    "AbiEncoder",
    "TRANSFER_INPUTS",
    "Web3AbiEncoder",
    "encode_call",
    "function_signature",
    "load_personal_wallet_abi",
]
