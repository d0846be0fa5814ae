"""Test for the alert manager"""

from unittest.mock import AsyncMock

import pytest

from flightsurety.utils.alerts import AlertManager

MOCKED_ACCOUNT = "0x00000000000000000000000000000000000000a1"


@pytest.fixture
def alerts_manager(monkeypatch):
    """AlertManager with a captured notifier"""
    manager = AlertManager(
        "localhost",
        {"cooldown": 1800, "thresholds": {"eth_balance": 1.0, "min_oracles": 3}},
        [{"type": "slack", "config": {"webhook_url": "T000/B000/XXXX"}}],
    )
    monkeypatch.setattr(manager.apprise, "async_notify", AsyncMock(return_value=True))
    return manager


@pytest.mark.asyncio
class TestAlertManager:
    """Class to Test AlertManager"""

    async def test_low_balance(self, alerts_manager):
        """Balances under the threshold alert once per cooldown"""
        await alerts_manager.check_eth_balance(10**17, MOCKED_ACCOUNT)
        await alerts_manager.check_eth_balance(10**17, MOCKED_ACCOUNT)

        assert alerts_manager.apprise.async_notify.await_count == 1
        kwargs = alerts_manager.apprise.async_notify.await_args.kwargs
        assert kwargs["title"] == "FlightSurety Alert: Low Oracle Balance"
        assert MOCKED_ACCOUNT in kwargs["body"]

    async def test_sufficient_balance(self, alerts_manager):
        """Balances over the threshold stay quiet"""
        await alerts_manager.check_eth_balance(5 * 10**18, MOCKED_ACCOUNT)
        alerts_manager.apprise.async_notify.assert_not_awaited()

    async def test_pool_size(self, alerts_manager):
        """Pools under the minimum alert"""
        await alerts_manager.check_pool_size(3, 20)
        alerts_manager.apprise.async_notify.assert_not_awaited()
        await alerts_manager.check_pool_size(2, 20)
        alerts_manager.apprise.async_notify.assert_awaited_once()
