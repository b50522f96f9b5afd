"""
Request models for the Comgate API operations.

Every model is built from caller keyword arguments, checked once with
:meth:`ensure_valid` and turned into the JSON body or path/query values sent
to the gateway. Fields left as ``None`` are absent and never serialized.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import RequestValidationError
from .types import (
    DATE_PATTERN,
    EXPIRATION_TIME_PATTERN,
    Label,
    MinPrice,
    Text,
    is_blank,
    matches_pattern,
)

__all__ = [
    "CONVENTIONAL_TO_WIRE",
    "CancelPayment",
    "CreatePayment",
    "PaymentStatus",
    "SingleTransfer",
    "TransferList",
]

CONVENTIONAL_TO_WIRE = {
    "ref_id": "refId",
    "full_name": "fullName",
    "billing_addr_city": "billingAddrCity",
    "billing_addr_street": "billingAddrStreet",
    "billing_addr_postal_code": "billingAddrPostalCode",
    "billing_addr_country": "billingAddrCountry",
    "home_delivery_city": "homeDeliveryCity",
    "home_delivery_street": "homeDeliveryStreet",
    "home_delivery_postal_code": "homeDeliveryPostalCode",
    "home_delivery_country": "homeDeliveryCountry",
    "init_recurring": "initRecurring",
    "expiration_time": "expirationTime",
    "dynamic_expiration": "dynamicExpiration",
    "charge_unregulated_card_fees": "chargeUnregulatedCardFees",
    "enable_apple_pay_google_pay": "enableApplePayGooglePay",
}

_HOME_DELIVERY_FIELDS = (
    "home_delivery_city",
    "home_delivery_street",
    "home_delivery_postal_code",
    "home_delivery_country",
)

_ModelT = TypeVar("_ModelT", bound="_RequestModel")


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"]) or "request"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


class _RequestModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    @classmethod
    def build(cls: Type[_ModelT], values: Mapping[str, Any]) -> _ModelT:
        """
        Construct the model, reporting field constraint violations as
        :class:`RequestValidationError`.
        """
        try:
            return cls.model_validate(dict(values))
        except ValidationError as exc:
            raise RequestValidationError(
                f"Invalid {cls.__name__} request: {_describe(exc)}"
            ) from exc

    @classmethod
    def from_conventional_names(cls: Type[_ModelT], **attrs: Any) -> _ModelT:
        return cls.build(attrs)

    def ensure_valid(self: _ModelT) -> _ModelT:
        return self

    def _present_fields(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class CreatePayment(_RequestModel):
    """Body of ``POST /v2.0/payment.json``."""

    # Required
    price: MinPrice
    curr: str
    label: Label
    ref_id: str = Field(alias="refId")

    # Contact, at least one of email or phone
    email: Optional[str] = None
    phone: Optional[str] = None
    full_name: Optional[str] = Field(default=None, alias="fullName")

    # Payment configuration
    test: Optional[bool] = None
    method: Optional[str] = None
    account: Optional[str] = None
    country: Optional[str] = None

    # Billing address
    billing_addr_city: Optional[str] = Field(default=None, alias="billingAddrCity")
    billing_addr_street: Optional[str] = Field(default=None, alias="billingAddrStreet")
    billing_addr_postal_code: Optional[str] = Field(
        default=None, alias="billingAddrPostalCode"
    )
    billing_addr_country: Optional[str] = Field(
        default=None, alias="billingAddrCountry"
    )

    # Delivery
    delivery: Optional[str] = None
    home_delivery_city: Optional[str] = Field(default=None, alias="homeDeliveryCity")
    home_delivery_street: Optional[str] = Field(
        default=None, alias="homeDeliveryStreet"
    )
    home_delivery_postal_code: Optional[str] = Field(
        default=None, alias="homeDeliveryPostalCode"
    )
    home_delivery_country: Optional[str] = Field(
        default=None, alias="homeDeliveryCountry"
    )

    # Product information
    category: Optional[str] = None
    name: Optional[str] = None
    lang: Optional[str] = None

    # Payment types
    preauth: Optional[bool] = None
    init_recurring: Optional[bool] = Field(default=None, alias="initRecurring")
    verification: Optional[bool] = None

    # Expiration
    expiration_time: Optional[str] = Field(default=None, alias="expirationTime")
    dynamic_expiration: Optional[bool] = Field(
        default=None, alias="dynamicExpiration"
    )

    # Callback URLs
    url_paid: Optional[str] = None
    url_cancelled: Optional[str] = None
    url_pending: Optional[str] = None

    # Fees
    charge_unregulated_card_fees: Optional[bool] = Field(
        default=None, alias="chargeUnregulatedCardFees"
    )
    enable_apple_pay_google_pay: Optional[bool] = Field(
        default=None, alias="enableApplePayGooglePay"
    )

    @classmethod
    def from_conventional_names(cls, **attrs: Any) -> "CreatePayment":
        """
        Build the request from snake_case keyword arguments.

        Names listed in :data:`CONVENTIONAL_TO_WIRE` are renamed to their
        camelCase API spelling; any other key is passed through as given.
        """
        normalized = {
            CONVENTIONAL_TO_WIRE.get(key, key): value for key, value in attrs.items()
        }
        return cls.build(normalized)

    def ensure_valid(self) -> "CreatePayment":
        if self.email is None and self.phone is None:
            raise RequestValidationError("Either email or phone must be provided")

        if self.delivery == "HOME_DELIVERY":
            missing = [
                field for field in _HOME_DELIVERY_FIELDS if is_blank(getattr(self, field))
            ]
            if missing:
                raise RequestValidationError(
                    f"HOME_DELIVERY requires: {', '.join(missing)}"
                )

        if self.expiration_time is not None and not matches_pattern(
            self.expiration_time, EXPIRATION_TIME_PATTERN
        ):
            raise RequestValidationError(
                "expirationTime must be in format: number + unit (m/h/d), "
                "e.g., '30m', '10h', '2d'"
            )

        return self

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON body with camelCase keys and absent fields dropped."""
        return self._present_fields()


class _TransactionRequest(_RequestModel):
    trans_id: Text = None

    def ensure_valid(self) -> "_TransactionRequest":
        if is_blank(self.trans_id):
            raise RequestValidationError("trans_id is required")
        return self

    def to_params(self) -> Dict[str, Any]:
        return self._present_fields()


class PaymentStatus(_TransactionRequest):
    """Identifies the payment for ``GET /v2.0/payment/transId/{transId}.json``."""


class CancelPayment(_TransactionRequest):
    """Identifies the payment for ``DELETE /v2.0/payment/transId/{transId}.json``."""


class TransferList(_RequestModel):
    date: Text = None
    test: Optional[bool] = None

    def ensure_valid(self) -> "TransferList":
        if is_blank(self.date):
            raise RequestValidationError("date is required")

        if not matches_pattern(self.date, DATE_PATTERN):
            raise RequestValidationError("date must be in YYYY-MM-DD format")

        try:
            datetime.strptime(self.date, "%Y-%m-%d")
        except ValueError as exc:
            raise RequestValidationError(
                "date must be a valid date (e.g., '2026-02-10')"
            ) from exc

        return self

    def to_params(self) -> Dict[str, Any]:
        return self._present_fields()


class SingleTransfer(_RequestModel):
    transfer_id: Text = None
    test: Optional[bool] = None

    def ensure_valid(self) -> "SingleTransfer":
        if is_blank(self.transfer_id):
            raise RequestValidationError("transfer_id is required")
        return self

    def to_params(self) -> Dict[str, Any]:
        return self._present_fields()
