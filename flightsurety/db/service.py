"""Database service functions."""

import logging
import time
import traceback
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from flightsurety.core.oracle import Oracle, OracleResponse

from .crud.operational_errors_crud import operational_errors_crud
from .crud.oracle_responses_crud import oracle_response_crud
from .crud.oracles_crud import oracle_registration_crud
from .database import get_session
from .models import (
    OperationalErrorCreate,
    OracleRegistrationCreate,
    OracleResponseRecordCreate,
)

# Initialize logging
logger = logging.getLogger("database")
logging.Formatter.converter = time.gmtime


async def record(store: Callable[..., Awaitable[None]], *args, **kwargs) -> bool:
    """Run a store_* helper in its own session.

    Database failures are logged and reported as False instead of raised.
    """
    try:
        async with get_session() as db_session:
            await store(db_session, *args, **kwargs)
    except (SQLAlchemyError, ValueError) as exc:
        logger.error("Could not record %s: %r", store.__name__, exc)
        return False
    return True


def get_traceback_str(exception):
    """Get a formatted traceback string from an exception."""
    return "".join(
        traceback.format_exception(
            type(exception), value=exception, tb=exception.__traceback__
        )
    )


async def store_oracle_registration(
    db_session: AsyncSession,
    network: str,
    oracle: Oracle,
    registration_fee: int,
    tx_hash: str,
) -> None:
    """Record a successful registerOracle transaction and its indexes."""
    registration = OracleRegistrationCreate(
        network=network,
        account=oracle.account,
        indexes=",".join(str(index) for index in oracle.indexes),
        registration_fee=registration_fee,
        tx_hash=tx_hash,
        timestamp=datetime.now(timezone.utc),
    )
    await oracle_registration_crud.create(db_session=db_session, obj_in=registration)


async def store_oracle_response(
    db_session: AsyncSession,
    network: str,
    account: str,
    response: OracleResponse,
    outcome: str,
    tx_hash: Optional[str] = None,
    error: Optional[Exception] = None,
) -> None:
    """Record a submitOracleResponse attempt, accepted or not."""
    record = OracleResponseRecordCreate(
        network=network,
        account=account,
        index=response.index,
        airline=response.airline,
        flight=response.flight,
        flight_timestamp=response.timestamp,
        status_code=int(response.status_code),
        outcome=outcome,
        tx_hash=tx_hash,
        error_message=str(error) if error is not None else None,
        timestamp=datetime.now(timezone.utc),
    )
    await oracle_response_crud.create(db_session=db_session, obj_in=record)


async def store_operational_error(
    db_session: AsyncSession,
    exception: Exception,
    context: Optional[str] = None,
) -> None:
    """Store operational error."""
    operational_error = OperationalErrorCreate(
        error_type=type(exception).__name__,
        error_message=str(exception),
        error_context=context or str(exception.__context__),
        error_traceback=get_traceback_str(exception),
    )
    await operational_errors_crud.create(
        db_session=db_session, obj_in=operational_error
    )
