"""Test for the contract client"""

import json
from types import SimpleNamespace

import aiohttp
import pytest
from web3 import Web3
from web3.exceptions import ContractLogicError, Web3Exception

from flightsurety.api.client import DATA, FlightSuretyClient, load_abi, to_hex
from flightsurety.utils.exceptions import ConfigError, RevertError, RpcError

MOCKED_TX_HASH = b"\xab" * 32


class FakeFunction:
    """Contract function whose call and transact are scripted"""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.tx_params = None

    async def call(self, tx_params):
        self.tx_params = tx_params
        if self.error:
            raise self.error
        return self.result

    async def transact(self, tx_params):
        self.tx_params = tx_params
        if self.error:
            raise self.error
        return MOCKED_TX_HASH


def make_client(monkeypatch, function, receipt=None):
    """Client whose contract functions and receipts are faked"""

    async def wait_for_transaction_receipt(tx_hash, timeout):
        return receipt

    w3 = SimpleNamespace(
        eth=SimpleNamespace(wait_for_transaction_receipt=wait_for_transaction_receipt)
    )
    client = FlightSuretyClient(w3, app_contract=None, data_contract=None)
    monkeypatch.setattr(client, "_function", lambda contract, method, args: function)
    return client


class TestLoadAbi:
    """Class to Test ABI loading"""

    def test_packaged_abi(self):
        """Both packaged contracts expose the functions the node uses"""
        app_names = {entry.get("name") for entry in load_abi("FlightSuretyApp")}
        data_names = {entry.get("name") for entry in load_abi("FlightSuretyData")}
        assert {
            "REGISTRATION_FEE",
            "registerOracle",
            "getMyIndexes",
            "submitOracleResponse",
            "fetchFlightStatus",
            "OracleRequest",
        } <= app_names
        assert {"buyInsurance", "isOperational"} <= data_names

    def test_build_dir_artifact(self, tmp_path):
        """A truffle artifact in the build directory takes precedence"""
        abi = [{"type": "function", "name": "custom", "inputs": [], "outputs": []}]
        (tmp_path / "FlightSuretyApp.json").write_text(
            json.dumps({"contractName": "FlightSuretyApp", "abi": abi})
        )
        assert load_abi("FlightSuretyApp", str(tmp_path)) == abi

    def test_missing_abi(self, tmp_path):
        """Unknown contracts are reported with the paths tried"""
        with pytest.raises(FileNotFoundError):
            load_abi("Unknown", str(tmp_path))


@pytest.mark.asyncio
class TestFlightSuretyClient:
    """Class to Test FlightSuretyClient error classification"""

    async def test_call_result(self, monkeypatch):
        """Calls return the decoded value and carry the sender"""
        function = FakeFunction(result=[1, 2, 3])
        client = make_client(monkeypatch, function)

        assert await client.call("getMyIndexes", sender="0xabc") == [1, 2, 3]
        assert function.tx_params == {"from": "0xabc"}

    async def test_call_revert(self, monkeypatch):
        """Contract rejections become RevertError"""
        client = make_client(
            monkeypatch, FakeFunction(error=ContractLogicError("execution reverted"))
        )
        with pytest.raises(RevertError) as error:
            await client.call("requireIsOperational")
        assert error.value.method == "requireIsOperational"

    async def test_call_revert_reported_as_rpc_error(self, monkeypatch):
        """Nodes reporting a revert as a plain RPC error still raise RevertError"""
        client = make_client(
            monkeypatch,
            FakeFunction(
                error=Web3Exception("VM Exception while processing transaction: revert")
            ),
        )
        with pytest.raises(RevertError):
            await client.call("requireIsOperational")

    async def test_call_transport_failure(self, monkeypatch):
        """Unreachable nodes raise RpcError"""
        client = make_client(
            monkeypatch, FakeFunction(error=aiohttp.ClientConnectionError("refused"))
        )
        with pytest.raises(RpcError):
            await client.call("REGISTRATION_FEE")

    async def test_send_returns_receipt(self, monkeypatch):
        """Sends wait for the receipt and pass value and gas"""
        receipt = {"status": 1, "transactionHash": MOCKED_TX_HASH, "blockNumber": 7}
        function = FakeFunction()
        client = make_client(monkeypatch, function, receipt=receipt)

        result = await client.send(
            "registerOracle", sender="0xabc", value=10**18, gas=500000
        )

        assert result is receipt
        assert function.tx_params == {"from": "0xabc", "value": 10**18, "gas": 500000}

    async def test_send_reverted_receipt(self, monkeypatch):
        """A mined transaction with status 0 is a revert"""
        receipt = {"status": 0, "transactionHash": MOCKED_TX_HASH, "blockNumber": 7}
        client = make_client(monkeypatch, FakeFunction(), receipt=receipt)

        with pytest.raises(RevertError) as error:
            await client.send("buyInsurance", sender="0xabc", contract=DATA)
        assert error.value.tx_hash == to_hex(MOCKED_TX_HASH)

    async def test_send_needs_sender(self, monkeypatch):
        """Sends without a sender are refused before reaching the node"""
        client = make_client(monkeypatch, FakeFunction())
        with pytest.raises(ValueError):
            await client.send("registerOracle")


class TestClientSetup:
    """Class to Test building the client from configuration"""

    def test_from_config(self, base_config):
        """Both contracts are bound to the configured addresses"""
        client = FlightSuretyClient.from_config(base_config)

        assert client.network.name == "localhost"
        assert client.app.address == Web3.to_checksum_address(
            base_config["Networks"]["localhost"]["app_address"]
        )
        assert client.data.address == Web3.to_checksum_address(
            base_config["Networks"]["localhost"]["data_address"]
        )

    def test_data_address_fallback(self, base_config):
        """Without a data address the app address serves both contracts"""
        del base_config["Networks"]["localhost"]["data_address"]
        client = FlightSuretyClient.from_config(base_config)

        assert client.data.address == client.app.address

    def test_unknown_network(self, base_config):
        """Selecting a network without an entry fails"""
        with pytest.raises(ConfigError):
            FlightSuretyClient.from_config(base_config, network="mainnet")

    def test_unknown_contract(self, base_config):
        """Only the app and data contracts exist"""
        client = FlightSuretyClient.from_config(base_config)
        with pytest.raises(ValueError):
            client.contract("token")

    def test_to_request(self):
        """Decoded logs become requests carrying their log coordinates"""
        log = {
            "args": {
                "index": 4,
                "airline": "0x00000000000000000000000000000000000000f1",
                "flight": "ND1309",
                "flightTimestamp": 1700000000,
            },
            "blockNumber": 12,
            "transactionHash": MOCKED_TX_HASH,
            "logIndex": 2,
        }

        request = FlightSuretyClient.to_request(log)

        assert request.key == (
            4,
            "0x00000000000000000000000000000000000000f1",
            "ND1309",
            1700000000,
        )
        assert request.event_id == ("0x" + "ab" * 32, 2)
        assert request.block_number == 12
