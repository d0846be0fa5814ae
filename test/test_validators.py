"""Test for the start-up health and operation checks"""

import aiohttp
import pytest
from aioresponses import aioresponses

from flightsurety.validators import HealthCheckValidator, OperationValidator

MOCKED_RPC_URL = "http://127.0.0.1:8545"


@pytest.mark.asyncio
class TestHealthCheckValidator:
    """Class to Test HealthCheckValidator"""

    async def test_healthy_node(self, base_config):
        """A node answering web3_clientVersion is healthy"""
        with aioresponses() as m:
            m.post(
                MOCKED_RPC_URL,
                payload={"jsonrpc": "2.0", "id": 1, "result": "Ganache/v7.9.1"},
            )
            assert await HealthCheckValidator(base_config).run_health_checks()

    async def test_error_status(self, base_config):
        """Non-200 answers fail the check"""
        with aioresponses() as m:
            m.post(MOCKED_RPC_URL, status=500)
            assert not await HealthCheckValidator(base_config).run_health_checks()

    async def test_rpc_error_body(self):
        """An error body without a result fails the check"""
        with aioresponses() as m:
            m.post(
                MOCKED_RPC_URL,
                payload={"jsonrpc": "2.0", "id": 1, "error": {"code": -32601}},
            )
            async with aiohttp.ClientSession() as session:
                validator = HealthCheckValidator({})
                assert not await validator.check_rpc_health(session, MOCKED_RPC_URL)

    async def test_unreachable_node(self, base_config):
        """Connection failures fail the check"""
        with aioresponses() as m:
            m.post(MOCKED_RPC_URL, exception=aiohttp.ClientConnectionError("refused"))
            assert not await HealthCheckValidator(base_config).run_health_checks()

    async def test_missing_url(self):
        """Without an url there is nothing to check"""
        assert not await HealthCheckValidator({"Networks": {}}).run_health_checks()


@pytest.mark.asyncio
class TestOperationValidator:
    """Class to Test OperationValidator"""

    async def test_operational(self, base_config, fake_client):
        """An operational contract with enough accounts passes"""
        client = fake_client(accounts=["0x1", "0x2", "0x3"])
        assert await OperationValidator(base_config).run_operation_checks(client)

    async def test_paused_contract(self, base_config, fake_client):
        """A paused contract fails the checks"""
        client = fake_client(accounts=["0x1", "0x2", "0x3"])
        client.operational = False
        assert not await OperationValidator(base_config).run_operation_checks(client)

    async def test_no_accounts(self, base_config, fake_client):
        """A node without accounts cannot host oracles"""
        assert not await OperationValidator(base_config).check_accounts(fake_client())
