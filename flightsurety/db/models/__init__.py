"""init file for models directory."""

from .operational_errors import OperationalError, OperationalErrorCreate
from .oracle_responses import OracleResponseRecord, OracleResponseRecordCreate
from .oracles import OracleRegistration, OracleRegistrationCreate
