"""Flight status codes and the policies that choose which one an oracle reports."""

import random
from enum import IntEnum
from typing import Callable, Dict

from flightsurety.core.oracle import FlightStatusRequest
from flightsurety.utils.exceptions import ConfigError


class StatusCode(IntEnum):
    """Status codes understood by the app contract."""

    UNKNOWN = 0
    ON_TIME = 10
    LATE_AIRLINE = 20
    LATE_WEATHER = 30
    LATE_TECHNICAL = 40
    LATE_OTHER = 50


StatusPolicy = Callable[[FlightStatusRequest], StatusCode]

REPORTABLE_STATUSES = (
    StatusCode.ON_TIME,
    StatusCode.LATE_AIRLINE,
    StatusCode.LATE_WEATHER,
    StatusCode.LATE_TECHNICAL,
    StatusCode.LATE_OTHER,
)


def random_status(request: FlightStatusRequest) -> StatusCode:
    """Placeholder truth: an unweighted pick among the reportable statuses."""
    return random.choice(REPORTABLE_STATUSES)


def fixed_status(code: StatusCode) -> StatusPolicy:
    """Policy that always reports `code`, whatever the request."""

    def choose_status(request: FlightStatusRequest) -> StatusCode:
        return code

    choose_status.__name__ = f"fixed_{code.name.lower()}"
    return choose_status


STATUS_POLICIES: Dict[str, StatusPolicy] = {"random": random_status}
STATUS_POLICIES.update(
    {code.name.lower(): fixed_status(code) for code in REPORTABLE_STATUSES}
)


def choose_status_policy(name: str) -> StatusPolicy:
    """Look up a status policy by its configured name."""
    try:
        return STATUS_POLICIES[name.lower()]
    except KeyError as exc:
        raise ConfigError(
            f"Unknown status policy '{name}'. Options: {', '.join(STATUS_POLICIES)}"
        ) from exc
