"""Test for node wiring"""

import pytest

from flightsurety.app_setup import (
    register_oracles,
    setup_alerts_manager,
    setup_responder,
)
from flightsurety.core.oracle import OraclePool
from flightsurety.core.status import StatusCode
from flightsurety.oracle_checker import OracleChecker
from flightsurety.utils.config_utils import OraclesConfig

MOCKED_ACCOUNTS = [f"0x{number:040x}" for number in range(1, 7)]


@pytest.mark.asyncio
class TestAppSetup:
    """Class to Test the setup helpers"""

    async def test_register_oracles_from_first_account(self, fake_client):
        """The pool starts at `first_account`"""
        client = fake_client(accounts=MOCKED_ACCOUNTS)

        pool = await register_oracles(
            OraclesConfig(pool_size=3, first_account=2), client
        )

        assert pool.accounts == MOCKED_ACCOUNTS[2:5]

    async def test_setup_responder(self, base_config, fake_client):
        """Responder settings come from the Oracles section"""
        base_config["Oracles"].update(
            {"status_policy": "late_weather", "poll_interval": 0.5}
        )

        responder = setup_responder(base_config, fake_client(), OraclePool())

        assert responder.poll_interval == 0.5
        assert responder.workers == 1
        assert responder.choose_status(None) == StatusCode.LATE_WEATHER

    def test_alerts_disabled_without_notifications(self, base_config):
        """No notification targets, no AlertManager"""
        assert setup_alerts_manager(base_config, "localhost") is None

    async def test_operation_checks_exit(self, base_config, fake_client):
        """A paused contract stops the node"""
        client = fake_client(accounts=MOCKED_ACCOUNTS)
        client.operational = False

        with pytest.raises(SystemExit):
            await OracleChecker(base_config).run_operation_checks(client)

    async def test_initial_checks_exit(self, caplog):
        """A configuration without networks stops the node before any RPC call"""
        with caplog.at_level("INFO"), pytest.raises(SystemExit):
            await OracleChecker({}).run_initial_checks()
        assert "FlightSurety oracle node" in caplog.text
