"""
HTTP client for the Comgate payment gateway API.
"""

from __future__ import annotations

import base64
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from .config import ComgateConfig, get_configuration
from .errors import ConfigError, HTTPError, ResponseValidationError
from .payloads import (
    CancelPayment,
    CreatePayment,
    PaymentStatus,
    SingleTransfer,
    TransferList,
)
from .response import validate_create_payment

__all__ = ["ComgateClient"]


def _path_segment(value: Any) -> str:
    return quote(str(value), safe="")


def _parse_json_response(response: requests.Response) -> Any:
    logging.debug("Comgate responded with %s", response.status_code)
    if not 200 <= response.status_code <= 299:
        raise HTTPError(status=response.status_code, body=response.text)
    try:
        return response.json()
    except ValueError as exc:
        raise ResponseValidationError(f"Invalid JSON response: {exc}") from exc


class ComgateClient:
    """
    Synchronous client for the five Comgate v2.0 operations.

    Arguments left as ``None`` are taken from ``config``, or from the
    process-wide default returned by
    :func:`comgate_api.core.config.get_configuration`.
    """

    def __init__(
        self,
        merchant_id: Optional[str] = None,
        secret: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        open_timeout: Optional[float] = None,
        *,
        test_mode: Optional[bool] = None,
        default_method: Optional[str] = None,
        config: Optional[ComgateConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        defaults = config if config is not None else get_configuration()
        self.config = ComgateConfig(
            merchant_id=merchant_id if merchant_id is not None else defaults.merchant_id,
            secret=secret if secret is not None else defaults.secret,
            base_url=(base_url or defaults.base_url).rstrip("/"),
            timeout=timeout if timeout is not None else defaults.timeout,
            open_timeout=(
                open_timeout if open_timeout is not None else defaults.open_timeout
            ),
            test_mode=test_mode if test_mode is not None else defaults.test_mode,
            default_method=(
                default_method if default_method is not None else defaults.default_method
            ),
        )

        missing = self.config.missing_credentials()
        if missing:
            raise ConfigError(f"Missing configuration: {', '.join(missing)}")

        self._session = session
        self._owns_session = session is None

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def close(self) -> None:
        if self._owns_session and self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> "ComgateClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def create_payment(self, **attrs: Any) -> Dict[str, Any]:
        """
        Create a payment and return the parsed response.

        The response carries ``transId`` and the ``redirect`` URL the payer
        should be sent to. Raises :class:`ResponseValidationError` when the
        gateway reports a non-zero ``code``.
        """
        request = CreatePayment.from_conventional_names(**attrs).ensure_valid()
        payload = request.to_payload()

        if not str(payload.get("method") or "").strip():
            default_method = self.config.default_method
            if default_method and default_method.strip():
                payload["method"] = default_method

        # Test mode can switch a missing flag on but never forces it off.
        if "test" not in payload and self.config.test_mode:
            payload["test"] = True

        parsed = self._request("POST", "/v2.0/payment.json", json=payload)
        return dict(validate_create_payment(parsed))

    def payment_status(self, **attrs: Any) -> Any:
        request = PaymentStatus.from_conventional_names(**attrs).ensure_valid()
        trans_id = _path_segment(request.to_params()["trans_id"])
        return self._request("GET", f"/v2.0/payment/transId/{trans_id}.json")

    def cancel_payment(self, **attrs: Any) -> Any:
        """Cancel a pending payment by its transaction id."""
        request = CancelPayment.from_conventional_names(**attrs).ensure_valid()
        trans_id = _path_segment(request.to_params()["trans_id"])
        return self._request("DELETE", f"/v2.0/payment/transId/{trans_id}.json")

    def transfer_list(self, **attrs: Any) -> Any:
        """
        List the transfers sent on ``date`` (``YYYY-MM-DD``).

        The transfer ids in the result can be passed to :meth:`single_transfer`.
        """
        request = TransferList.from_conventional_names(**attrs).ensure_valid()
        params = request.to_params()
        date = _path_segment(params["date"])
        return self._request(
            "GET",
            f"/v2.0/transferList/date/{date}.json",
            params=self._test_params(params.get("test")),
        )

    def single_transfer(self, **attrs: Any) -> Any:
        request = SingleTransfer.from_conventional_names(**attrs).ensure_valid()
        params = request.to_params()
        transfer_id = _path_segment(params["transfer_id"])
        return self._request(
            "GET",
            f"/v2.0/singleTransfer/transferId/{transfer_id}.json",
            params=self._test_params(params.get("test")),
        )

    def _test_params(self, test: Optional[bool]) -> Optional[Dict[str, str]]:
        use_test = self.config.test_mode if test is None else test
        return {"test": "true"} if use_test else None

    def _headers(self) -> Dict[str, str]:
        credentials = f"{self.config.merchant_id}:{self.config.secret}".encode("utf-8")
        token = base64.b64encode(credentials).decode("ascii")
        return {
            "Authorization": f"Basic {token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        url = f"{self.config.base_url}{path}"
        logging.info("Sending %s request to %s", method, url)
        response = self.session.request(
            method,
            url,
            headers=self._headers(),
            json=json,
            params=params,
            timeout=(self.config.open_timeout, self.config.timeout),
            allow_redirects=False,
        )
        return _parse_json_response(response)
