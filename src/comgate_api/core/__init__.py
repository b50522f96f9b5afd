"""
Core primitives for the Comgate payment gateway API.
"""

from .client import ComgateClient
from .config import (
    BASE_URL,
    ComgateConfig,
    configure,
    get_configuration,
    load_config,
    reset_configuration,
)
from .errors import (
    ComgateError,
    ConfigError,
    HTTPError,
    RequestValidationError,
    ResponseValidationError,
)
from .payloads import (
    CONVENTIONAL_TO_WIRE,
    CancelPayment,
    CreatePayment,
    PaymentStatus,
    SingleTransfer,
    TransferList,
)
from .response import validate_create_payment

__all__ = [
    "BASE_URL",
    "CONVENTIONAL_TO_WIRE",
    "CancelPayment",
    "ComgateClient",
    "ComgateConfig",
    "ComgateError",
    "ConfigError",
    "CreatePayment",
    "HTTPError",
    "PaymentStatus",
    "RequestValidationError",
    "ResponseValidationError",
    "SingleTransfer",
    "TransferList",
    "configure",
    "get_configuration",
    "load_config",
    "reset_configuration",
    "validate_create_payment",
]
