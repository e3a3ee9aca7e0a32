"""High-level TSNN client for building relayable wallet payloads.

Environment variables (used by ``TsnnClient.from_env``):
    TSNN_PRIVATE_KEY       – hex-encoded signer key
    TSNN_PERSONAL_WALLET   – personal wallet address
    TSNN_RPC_URL           – JSON-RPC endpoint for nonce lookups
"""

from __future__ import annotations

import logging
import os

from .abi import AbiEncoder, Web3AbiEncoder
from .errors import SessionError, UninitializedSession
from .identity import Session
from .intent import (
    ExecutionIntent,
    add_action,
    add_master,
    ether_transfer,
    to_address,
    token_transfer,
)
from .nonces import NonceOracle, Web3NonceOracle
from .payload import SignedPayload, build

_LOG = logging.getLogger(__name__)


class TsnnClient:
    """Builds signed payloads for a personal wallet.

    Each build queries the wallet's counter immediately before signing.
    Builds for the same sender are not serialized; callers that need at most
    one payload in flight per sender must serialize calls themselves.
    """

    def __init__(
        self,
        nonce_oracle: NonceOracle | None = None,
        encoder: AbiEncoder | None = None,
    ):
        self._nonces = nonce_oracle or Web3NonceOracle()
        self._encoder = encoder or Web3AbiEncoder()
        self._session: Session | None = None

    @classmethod
    def from_env(cls) -> "TsnnClient":
        """Build and initialize a client from environment variables."""
        client = cls(nonce_oracle=Web3NonceOracle.from_env())
        client.initialize(
            os.environ["TSNN_PRIVATE_KEY"], os.environ["TSNN_PERSONAL_WALLET"]
        )
        return client

    def initialize(self, private_key: str | bytes, personal_wallet: str) -> Session:
        """Bind the signing key and personal wallet. Allowed once per client.

        Raises:
            MalformedIdentity: If the key or wallet address is invalid.
            SessionError: If the client is already initialized.
        """
        if self._session is not None:
            raise SessionError(
                f"Client already initialized for signer {self._session.address}"
            )
        self._session = Session.create(private_key, personal_wallet)
        return self._session

    def _require_session(self) -> Session:
        if self._session is None:
            raise UninitializedSession("SDK not initialized; call initialize() first")
        return self._session

    @property
    def session(self) -> Session:
        return self._require_session()

    @property
    def public_address(self) -> str:
        return self.session.address

    @property
    def personal_wallet(self) -> str:
        return self.session.personal_wallet

    # -- payload construction ------------------------------------------------

    def build_payload(
        self,
        intent: ExecutionIntent,
        target_wallet: str | None = None,
        sender: str | None = None,
    ) -> SignedPayload:
        """Fetch the current counter and sign *intent*."""
        session = self.session
        target_wallet = to_address(target_wallet or session.personal_wallet, "target_wallet")
        sender = to_address(sender or session.address, "from")
        counter = self._nonces.fetch_counter(target_wallet, sender)
        payload = build(session, intent, counter, target_wallet, sender)
        _LOG.info(
            "payload built wallet=%s from=%s to=%s counter=%s",
            target_wallet,
            sender,
            intent.to,
            counter,
        )
        return payload

    def prepare_payload(
        self,
        target_wallet: str,
        sender: str,
        to: str,
        value: int,
        data: bytes | str,
        reward_type: str,
        reward_amount: int,
    ) -> str:
        """Sign an arbitrary execution and return the payload JSON."""
        self._require_session()
        intent = ExecutionIntent.create(to, value, data, reward_type, reward_amount)
        return self.build_payload(intent, target_wallet, sender).to_json()

    def transfer_ether_no_reward(self, amount_wei: int, to: str) -> str:
        self._require_session()
        return self.build_payload(ether_transfer(to, amount_wei)).to_json()

    def transfer_ether_with_ether_reward(
        self, amount_wei: int, to: str, reward_amount: int
    ) -> str:
        self._require_session()
        intent = ether_transfer(to, amount_wei, reward_amount)
        return self.build_payload(intent).to_json()

    def transfer_tokens_no_reward(self, token: str, amount: int, to: str) -> str:
        self._require_session()
        intent = token_transfer(self._encoder, token, to, amount)
        return self.build_payload(intent).to_json()

    def transfer_tokens_with_token_reward(
        self, token: str, amount: int, to: str, reward_amount: int
    ) -> str:
        """Token transfer that pays the relayer in the same token."""
        self._require_session()
        intent = token_transfer(
            self._encoder, token, to, amount, reward_type=token, reward_amount=reward_amount
        )
        return self.build_payload(intent).to_json()

    def add_master_no_reward(self, account: str) -> str:
        session = self.session
        intent = add_master(self._encoder, session.personal_wallet, account)
        return self.build_payload(intent).to_json()

    def add_action_no_reward(self, account: str) -> str:
        session = self.session
        intent = add_action(self._encoder, session.personal_wallet, account)
        return self.build_payload(intent).to_json()
