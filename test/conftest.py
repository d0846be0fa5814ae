"""Pytest fixtures for tests"""

import asyncio
from typing import NamedTuple, Optional

import pytest

from flightsurety.db import database
from flightsurety.utils.config_utils import NetworkConfig
from flightsurety.utils.exceptions import RevertError, RpcError

MOCKED_APP_ADDRESS = "0xF12b5dd4EAD5F743C6BaA640B0216200e89B60Da"
MOCKED_DATA_ADDRESS = "0x345cA3e014Aaf5dcA488057592ee47305D9B3e10"
MOCKED_RPC_URL = "http://127.0.0.1:8545"
MOCKED_FEE = 10**18


class SentTransaction(NamedTuple):
    """A send recorded by FakeClient."""

    method: str
    args: tuple
    sender: str
    value: Optional[int]
    contract: str


class FakeClient:
    """Stands in for FlightSuretyClient with a scripted contract."""

    def __init__(self, accounts=(), indexes=None, head=100):
        self.network = NetworkConfig(
            "test", MOCKED_RPC_URL, MOCKED_APP_ADDRESS, MOCKED_DATA_ADDRESS
        )
        self.account_list = list(accounts)
        self.indexes = dict(indexes or {})
        self.head = head
        self.fee = MOCKED_FEE
        self.balance = 10 * 10**18
        self.delay = 0
        self.operational = True
        self.fail_register = set()
        self.reject_responses = set()
        self.registered = set()
        self.requests_by_block = {}
        self.calls = []
        self.sends = []
        self.block_number_reads = 0
        self.head_error = None
        self.in_flight = 0
        self.max_in_flight = 0

    async def call(self, method, args=(), sender=None, contract="app", gas=None):
        self.calls.append((method, tuple(args), sender))
        if method == "REGISTRATION_FEE":
            return self.fee
        if method == "getMyIndexes":
            if sender not in self.registered:
                raise RevertError(method, "Not registered as an oracle")
            return list(self.indexes.get(sender, (1, 2, 3)))
        if method == "requireIsOperational":
            if not self.operational:
                raise RevertError(method, "Contract is currently not operational")
            return []
        if method == "isAirlineRegistered":
            return args[0] in self.registered
        raise AssertionError(f"unexpected call {method}")

    async def send(
        self, method, args=(), sender=None, value=None, contract="app", gas=None
    ):
        self.sends.append(SentTransaction(method, tuple(args), sender, value, contract))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
        finally:
            self.in_flight -= 1

        if method == "registerOracle":
            if sender in self.fail_register:
                raise RevertError(method, "Registration fee is required")
            self.registered.add(sender)
        if method == "submitOracleResponse" and sender in self.reject_responses:
            raise RevertError(method, "Index does not match oracle request")
        if method == "registerAirline":
            self.registered.add(args[0])
        return {
            "status": 1,
            "transactionHash": bytes([len(self.sends)]) * 32,
            "blockNumber": self.head,
        }

    async def accounts(self):
        return list(self.account_list)

    async def block_number(self):
        self.block_number_reads += 1
        if self.head_error:
            raise RpcError("eth_blockNumber", self.head_error)
        return self.head

    async def get_balance(self, account):
        return self.balance

    async def get_oracle_requests(self, from_block, to_block):
        return [
            request
            for block, requests in sorted(self.requests_by_block.items())
            if from_block <= block <= to_block
            for request in requests
        ]

    def sent(self, method):
        return [tx for tx in self.sends if tx.method == method]


@pytest.fixture
def fake_client():
    """Factory for scripted clients"""
    return FakeClient


@pytest.fixture
def base_config():
    """Minimal valid configuration"""
    return {
        "network": "localhost",
        "Networks": {
            "localhost": {
                "url": MOCKED_RPC_URL,
                "app_address": MOCKED_APP_ADDRESS,
                "data_address": MOCKED_DATA_ADDRESS,
            }
        },
        "Oracles": {"pool_size": 3, "max_concurrency": 2, "workers": 1},
    }


@pytest.fixture
async def failing_db(tmp_path):
    """Configured database whose tables were never created, so every write fails"""
    database.configure_database(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    yield
    await database.close_db()
