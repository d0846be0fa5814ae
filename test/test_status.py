"""Test for status policies"""

import pytest

from flightsurety.core.oracle import FlightStatusRequest
from flightsurety.core.status import (
    REPORTABLE_STATUSES,
    STATUS_POLICIES,
    StatusCode,
    choose_status_policy,
    random_status,
)
from flightsurety.utils.exceptions import ConfigError

MOCKED_REQUEST = FlightStatusRequest(
    index=3,
    airline="0x00000000000000000000000000000000000000f1",
    flight="ND1309",
    timestamp=1700000000,
)


class TestStatusPolicies:
    """Class to Test status policies"""

    def test_status_codes(self):
        """Codes match the contract constants"""
        assert [int(code) for code in StatusCode] == [0, 10, 20, 30, 40, 50]

    def test_random_status_is_reportable(self):
        """Random picks never report UNKNOWN"""
        for _ in range(50):
            assert random_status(MOCKED_REQUEST) in REPORTABLE_STATUSES

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("on_time", StatusCode.ON_TIME),
            ("late_airline", StatusCode.LATE_AIRLINE),
            ("LATE_WEATHER", StatusCode.LATE_WEATHER),
            ("late_technical", StatusCode.LATE_TECHNICAL),
            ("late_other", StatusCode.LATE_OTHER),
        ],
    )
    def test_fixed_policies(self, name, expected):
        """Fixed policies report their code for any request"""
        assert choose_status_policy(name)(MOCKED_REQUEST) == expected

    def test_random_policy_registered(self):
        """The default policy is available by name"""
        assert choose_status_policy("random") is random_status
        assert set(STATUS_POLICIES) == {
            "random",
            "on_time",
            "late_airline",
            "late_weather",
            "late_technical",
            "late_other",
        }

    def test_unknown_policy(self):
        """Unknown names are configuration errors"""
        with pytest.raises(ConfigError):
            choose_status_policy("always_cancelled")
