"""Oracle domain types and status policies."""

from .oracle import (
    FlightStatusRequest,
    InsurancePurchase,
    Oracle,
    OraclePool,
    OracleResponse,
)
from .status import StatusCode, choose_status_policy
