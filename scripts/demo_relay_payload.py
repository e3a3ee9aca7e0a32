#!/usr/bin/env python3
"""Demo: build every kind of relayable payload for a personal wallet.

Prerequisites
─────────────
1. A JSON-RPC node (e.g. Anvil) at localhost:8545
2. A personal wallet contract deployed, with the signer as master account
3. Environment variables set:
     TSNN_PRIVATE_KEY       – hex key of the signing account
     TSNN_PERSONAL_WALLET   – deployed personal wallet address

Optional env:
     TSNN_RPC_URL           – defaults to http://localhost:8545

Usage:
    python scripts/demo_relay_payload.py [token_address]
"""

from __future__ import annotations

import json
import logging
import sys

from tsnn import TsnnClient

# Anvil default account #1 (recipient / new role holder)
ANVIL_ACCOUNT_1 = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"

ONE_ETHER = 10**18


def _show(title: str, payload_json: str) -> None:
    print(f"--- {title} ---")
    for key, value in json.loads(payload_json).items():
        print(f"  {key:<13}= {value}")
    print()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    token = sys.argv[1] if len(sys.argv) > 1 else None
    client = TsnnClient.from_env()

    print(f"Signer           = {client.public_address}")
    print(f"Personal wallet  = {client.personal_wallet}")
    print()

    _show("transferEtherNoReward", client.transfer_ether_no_reward(ONE_ETHER, ANVIL_ACCOUNT_1))
    _show(
        "transferEtherWithEtherReward",
        client.transfer_ether_with_ether_reward(ONE_ETHER, ANVIL_ACCOUNT_1, 10**15),
    )
    if token:
        _show("transferTokensNoReward", client.transfer_tokens_no_reward(token, 100, ANVIL_ACCOUNT_1))
        _show(
            "transferTokensWithTokenReward",
            client.transfer_tokens_with_token_reward(token, 100, ANVIL_ACCOUNT_1, 1),
        )
    _show("addMasterNoReward", client.add_master_no_reward(ANVIL_ACCOUNT_1))
    _show("addActionNoReward", client.add_action_no_reward(ANVIL_ACCOUNT_1))


if __name__ == "__main__":
    main()
