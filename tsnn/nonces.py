"""Replay-protection counter lookup against the personal wallet contract.

Environment variables (overridable via constructor args):
    TSNN_RPC_URL      – JSON-RPC endpoint  (default http://localhost:8545)
"""

from __future__ import annotations

import logging
import os
from typing import Protocol

from web3 import Web3

from .abi import load_personal_wallet_abi
from .errors import CounterUnavailable
from .intent import to_address

_LOG = logging.getLogger(__name__)


class NonceOracle(Protocol):
    def fetch_counter(self, account: str, sender: str) -> int:
        """Return the next valid counter for *sender* on wallet *account*."""
        ...


class Web3NonceOracle:
    """Reads ``nonces(sender)`` from a personal wallet over JSON-RPC.

    Every call is a fresh query; nothing is cached.
    """

    def __init__(self, w3: Web3 | None = None, rpc_url: str | None = None):
        if w3 is None:
            self.rpc_url = rpc_url or os.environ.get(
                "TSNN_RPC_URL", "http://localhost:8545"
            )
            w3 = Web3(Web3.HTTPProvider(self.rpc_url))
        else:
            self.rpc_url = rpc_url
        self.w3 = w3
        self._abi = load_personal_wallet_abi()

    @classmethod
    def from_env(cls) -> "Web3NonceOracle":
        return cls()

    def fetch_counter(self, account: str, sender: str) -> int:
        """Query the wallet for *sender*'s counter.

        Raises:
            PayloadError: If *account* or *sender* is not a valid address.
            CounterUnavailable: On any transport or contract error, or if the
                node returns something that is not a uint256.
        """
        account = to_address(account, "account")
        sender = to_address(sender, "sender")
        try:
            contract = self.w3.eth.contract(address=account, abi=self._abi)
            counter = contract.functions.nonces(sender).call()
        except Exception as e:
            raise CounterUnavailable(
                f"nonces({sender}) on {account} failed: {e}"
            ) from e

        if isinstance(counter, bool) or not isinstance(counter, int) or counter < 0:
            raise CounterUnavailable(
                f"nonces({sender}) on {account} returned invalid value {counter!r}"
            )
        _LOG.debug("counter wallet=%s sender=%s value=%s", account, sender, counter)
        return counter
