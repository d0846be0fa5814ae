""" This module is used to import all the crud modules in the db """

from .operational_errors_crud import operational_errors_crud
from .oracle_responses_crud import oracle_response_crud
from .oracles_crud import oracle_registration_crud
