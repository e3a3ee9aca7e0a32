"""Shared fakes and fixed keys for TSNN tests."""

import pytest

from tsnn.abi import Web3AbiEncoder
from tsnn.client import TsnnClient
from tsnn.errors import CounterUnavailable
from tsnn.identity import Session

# Anvil default accounts #0 and #1.
ANVIL_PK0 = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
ANVIL_ADDR0 = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
ANVIL_PK1 = "0x59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d"
ANVIL_ADDR1 = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"

WALLET = "0x" + "aa" * 20
DEST = "0x" + "bb" * 20
TOKEN = "0x" + "cc" * 20
ONE_ETHER = 10**18


class FakeNonceOracle:
    """Returns queued counters in order and records every query."""

    def __init__(self, *counters):
        self.counters = list(counters) or [0]
        self.calls = []

    def fetch_counter(self, account, sender):
        self.calls.append((account, sender))
        if len(self.calls) <= len(self.counters):
            return self.counters[len(self.calls) - 1]
        return self.counters[-1]


class FailingNonceOracle:
    def __init__(self):
        self.calls = []

    def fetch_counter(self, account, sender):
        self.calls.append((account, sender))
        raise CounterUnavailable("node unreachable")


class RecordingEncoder:
    """Wraps the real encoder and records each requested function call."""

    def __init__(self, result=None):
        self.result = result
        self.calls = []

    def encode(self, function_name, inputs, args):
        self.calls.append((function_name, [i["type"] for i in inputs], list(args)))
        if self.result is not None:
            return self.result
        return Web3AbiEncoder().encode(function_name, inputs, args)


@pytest.fixture
def session():
    return Session.create(ANVIL_PK0, WALLET)


@pytest.fixture
def oracle():
    return FakeNonceOracle(5)


@pytest.fixture
def encoder():
    return RecordingEncoder()


@pytest.fixture
def client(oracle, encoder):
    c = TsnnClient(nonce_oracle=oracle, encoder=encoder)
    c.initialize(ANVIL_PK0, WALLET)
    return c
