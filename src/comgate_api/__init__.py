"""
Client library for the Comgate payment gateway API.

The most useful pieces are re-exported here so integrators can
``from comgate_api import ...`` without navigating the package.
"""

from .api import create_client
from .core import (
    BASE_URL,
    CancelPayment,
    ComgateClient,
    ComgateConfig,
    ComgateError,
    ConfigError,
    CreatePayment,
    HTTPError,
    PaymentStatus,
    RequestValidationError,
    ResponseValidationError,
    SingleTransfer,
    TransferList,
    configure,
    get_configuration,
    load_config,
    reset_configuration,
    validate_create_payment,
)

__all__ = (
    "BASE_URL",
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
    "create_client",
    "get_configuration",
    "load_config",
    "reset_configuration",
    "validate_create_payment",
)
