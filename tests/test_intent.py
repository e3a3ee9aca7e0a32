"""Tests for execution intents and call-data encoding."""

import pytest
from eth_abi import decode as abi_decode
from eth_utils import function_signature_to_4byte_selector

from tsnn.abi import (
    ACCOUNT_INPUTS,
    TRANSFER_INPUTS,
    Web3AbiEncoder,
    encode_call,
    function_signature,
    load_personal_wallet_abi,
)
from tsnn.errors import EncodingFailure, PayloadError
from tsnn.intent import (
    NO_DATA,
    REWARD_TYPE_ETHER,
    ExecutionIntent,
    add_action,
    add_master,
    ether_transfer,
    token_transfer,
)
from tsnn.nonces import Web3NonceOracle

from conftest import ANVIL_ADDR1, DEST, RecordingEncoder, TOKEN, WALLET


class TestWeb3AbiEncoder:
    def test_transfer_selector(self):
        data = Web3AbiEncoder().encode("transfer", TRANSFER_INPUTS, [DEST, 42])
        assert data[:4] == bytes.fromhex("a9059cbb")
        assert len(data) == 4 + 32 * 2

    def test_transfer_arguments(self):
        data = Web3AbiEncoder().encode("transfer", TRANSFER_INPUTS, [DEST, 42])
        to, amount = abi_decode(["address", "uint256"], data[4:])
        assert to.lower() == DEST
        assert amount == 42

    def test_role_selectors(self):
        enc = Web3AbiEncoder()
        master = enc.encode("addMasterAccount", ACCOUNT_INPUTS, [ANVIL_ADDR1])
        action = enc.encode("addActionAccount", ACCOUNT_INPUTS, [ANVIL_ADDR1])
        assert master[:4] == function_signature_to_4byte_selector("addMasterAccount(address)")
        assert action[:4] == function_signature_to_4byte_selector("addActionAccount(address)")
        assert master[4:] == action[4:]

    def test_function_signature(self):
        assert function_signature("transfer", TRANSFER_INPUTS) == "transfer(address,uint256)"

    def test_argument_count_mismatch(self):
        with pytest.raises(EncodingFailure, match="expected 2 arguments"):
            Web3AbiEncoder().encode("transfer", TRANSFER_INPUTS, [DEST])

    def test_bad_argument_type(self):
        with pytest.raises(EncodingFailure):
            Web3AbiEncoder().encode("transfer", TRANSFER_INPUTS, [DEST, "lots"])


class TestEncodeCall:
    def test_empty_result_rejected(self):
        with pytest.raises(EncodingFailure, match="invalid call data"):
            encode_call(RecordingEncoder(result=b""), "transfer", TRANSFER_INPUTS, [DEST, 1])

    def test_non_bytes_result_rejected(self):
        with pytest.raises(EncodingFailure):
            encode_call(RecordingEncoder(result="0xa9059cbb"), "transfer", TRANSFER_INPUTS, [DEST, 1])

    def test_encoder_exception_wrapped(self):
        class Broken:
            def encode(self, function_name, inputs, args):
                raise RuntimeError("boom")

        with pytest.raises(EncodingFailure, match="boom"):
            encode_call(Broken(), "transfer", TRANSFER_INPUTS, [DEST, 1])


class TestPersonalWalletAbi:
    def test_has_nonces_and_execute(self):
        names = {item.get("name") for item in load_personal_wallet_abi()}
        assert {"nonces", "execute", "isMasterAccount", "isActionAccount"} <= names

    def test_execute_argument_order(self):
        execute = next(i for i in load_personal_wallet_abi() if i.get("name") == "execute")
        assert [i["name"] for i in execute["inputs"]] == [
            "_v", "_r", "_s", "_from", "_to", "_value", "_data", "_rewardType", "_rewardAmount",
        ]

    def test_oracle_uses_bundled_abi(self):
        oracle = Web3NonceOracle(w3=object())
        assert oracle._abi == load_personal_wallet_abi()


class TestExecutionIntent:
    def test_defaults(self):
        intent = ExecutionIntent.create(DEST, 1)
        assert intent.data == NO_DATA
        assert intent.reward_type == REWARD_TYPE_ETHER
        assert intent.reward_amount == 0

    def test_hex_data_normalized(self):
        assert ExecutionIntent.create(DEST, 1, "0xdeadbeef").data == b"\xde\xad\xbe\xef"

    def test_invalid_address(self):
        with pytest.raises(PayloadError, match="to is not a valid address"):
            ExecutionIntent.create("0x1234", 1)

    def test_negative_value(self):
        with pytest.raises(PayloadError, match="uint256"):
            ExecutionIntent.create(DEST, -1)

    def test_value_overflow(self):
        with pytest.raises(PayloadError, match="uint256"):
            ExecutionIntent.create(DEST, 2**256)

    def test_bool_value_rejected(self):
        with pytest.raises(PayloadError, match="must be an int"):
            ExecutionIntent.create(DEST, True)

    def test_invalid_data(self):
        with pytest.raises(PayloadError, match="data"):
            ExecutionIntent.create(DEST, 1, "0xnothex")


class TestActionEncoder:
    def test_ether_transfer(self):
        intent = ether_transfer(DEST, 10, reward_amount=3)
        assert intent.to.lower() == DEST
        assert intent.value == 10
        assert intent.data == NO_DATA
        assert intent.reward_type == REWARD_TYPE_ETHER
        assert intent.reward_amount == 3

    def test_token_transfer_targets_token(self):
        enc = RecordingEncoder()
        intent = token_transfer(enc, TOKEN, DEST, 500)
        assert intent.to.lower() == TOKEN
        assert intent.value == 0
        assert intent.data[:4] == bytes.fromhex("a9059cbb")
        name, types, args = enc.calls[0]
        assert name == "transfer"
        assert types == ["address", "uint256"]
        assert args[0].lower() == DEST and args[1] == 500

    def test_token_transfer_with_token_reward(self):
        intent = token_transfer(RecordingEncoder(), TOKEN, DEST, 500, reward_type=TOKEN, reward_amount=5)
        assert intent.reward_type == intent.to
        assert intent.reward_amount == 5

    def test_add_master_targets_wallet(self):
        enc = RecordingEncoder()
        intent = add_master(enc, WALLET, ANVIL_ADDR1)
        assert intent.to.lower() == WALLET
        assert intent.value == 0
        assert enc.calls[0][0] == "addMasterAccount"
        assert enc.calls[0][2] == [ANVIL_ADDR1]

    def test_add_action_targets_wallet(self):
        enc = RecordingEncoder()
        intent = add_action(enc, WALLET, ANVIL_ADDR1)
        assert intent.to.lower() == WALLET
        assert enc.calls[0][0] == "addActionAccount"

    def test_encoding_failure_surfaces(self):
        with pytest.raises(EncodingFailure):
            add_master(RecordingEncoder(result=b""), WALLET, ANVIL_ADDR1)
