"""Start-up validators."""

from .config_validator import ConfigValidator
from .health_validator import HealthCheckValidator
from .operation_validator import OperationValidator
