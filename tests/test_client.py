"""Tests for ComgateClient against a stubbed HTTP session."""

import base64
import datetime

import pytest
import requests

from comgate_api import create_client
from comgate_api.core.client import ComgateClient
from comgate_api.core.config import ComgateConfig, configure
from comgate_api.core.errors import (
    ConfigError,
    HTTPError,
    RequestValidationError,
    ResponseValidationError,
)

BASE_URL = "https://payments.comgate.cz"
PAYMENT_URL = f"{BASE_URL}/v2.0/payment.json"
STATUS_URL = f"{BASE_URL}/v2.0/payment/transId/AB12-CD34-EF56.json"
TRANSFERS_URL = f"{BASE_URL}/v2.0/transferList/date/2025-02-10.json"
TRANSFER_URL = f"{BASE_URL}/v2.0/singleTransfer/transferId/1234567.json"

CREATED = {
    "code": 0,
    "message": "OK",
    "transId": "AB12-CD34-EF56",
    "redirect": "https://payments.comgate.cz/client/instructions/index?id=AB12-CD34-EF56",
}


@pytest.fixture
def client(session):
    return ComgateClient(merchant_id="merchant-1", secret="secret-1", session=session)


class TestConfiguration:
    def test_raises_when_credentials_missing(self):
        with pytest.raises(ConfigError, match="merchant_id, secret"):
            ComgateClient(merchant_id=None, secret=None)

    def test_names_only_missing_field(self):
        with pytest.raises(ConfigError) as excinfo:
            ComgateClient(merchant_id="merchant-1", secret="  ")

        assert str(excinfo.value) == "Missing configuration: secret"

    def test_accepts_explicit_credentials(self):
        client = ComgateClient(merchant_id="merchant-1", secret="secret-1")

        assert client.config.merchant_id == "merchant-1"
        assert client.config.base_url == BASE_URL

    def test_uses_global_configuration_by_default(self):
        configure(merchant_id="merchant-2", secret="secret-2", test_mode=True)

        client = ComgateClient()

        assert client.config.merchant_id == "merchant-2"
        assert client.config.test_mode is True

    def test_explicit_arguments_override_global_configuration(self):
        configure(merchant_id="merchant-2", secret="secret-2", timeout=5)

        client = ComgateClient(secret="secret-3", base_url="https://sandbox.example/", open_timeout=3)

        assert client.config.merchant_id == "merchant-2"
        assert client.config.secret == "secret-3"
        assert client.config.base_url == "https://sandbox.example"
        assert client.config.timeout == 5
        assert client.config.open_timeout == 3

    def test_reads_credentials_from_environment(self, monkeypatch):
        monkeypatch.setenv("COMGATE_MERCHANT_ID", "env-merchant")
        monkeypatch.setenv("COMGATE_SECRET", "env-secret")

        assert ComgateClient().config.merchant_id == "env-merchant"

    def test_create_client_with_prebuilt_config(self, session):
        config = ComgateConfig(merchant_id="m", secret="s")

        assert create_client(config=config, session=session).config.merchant_id == "m"

    def test_create_client_rejects_mixed_arguments(self):
        with pytest.raises(ValueError):
            create_client(config=ComgateConfig(merchant_id="m", secret="s"), secret="other")


class TestTransport:
    def test_sends_basic_auth_and_json_headers(self, client, session):
        session.add("GET", STATUS_URL, body={"code": 0})

        client.payment_status(trans_id="AB12-CD34-EF56")

        headers = session.last_call["headers"]
        expected = base64.b64encode(b"merchant-1:secret-1").decode("ascii")
        assert headers["Authorization"] == f"Basic {expected}"
        assert headers["Content-Type"] == "application/json"
        assert headers["Accept"] == "application/json"

    def test_passes_connect_and_read_timeouts(self, session):
        client = ComgateClient(
            merchant_id="m", secret="s", timeout=45, open_timeout=7, session=session
        )
        session.add("GET", STATUS_URL, body={"code": 0})

        client.payment_status(trans_id="AB12-CD34-EF56")

        assert session.last_call["timeout"] == (7, 45)
        assert session.last_call["allow_redirects"] is False

    def test_creates_session_lazily_and_reuses_it(self):
        client = ComgateClient(merchant_id="m", secret="s")

        assert client._session is None
        first = client.session
        assert isinstance(first, requests.Session)
        assert client.session is first
        client.close()
        assert client._session is None

    def test_does_not_close_injected_session(self, client, session):
        with client:
            pass

        assert session.closed is False


class TestCreatePayment:
    def test_creates_payment_and_returns_parsed_response(self, client, session):
        session.add("POST", PAYMENT_URL, status=201, body=CREATED)

        response = client.create_payment(
            price=1000,
            curr="CZK",
            label="Product",
            ref_id="order-1",
            method="ALL",
            email="payer@example.com",
        )

        assert response["code"] == 0
        assert "https://payments.comgate.cz" in response["redirect"]
        assert session.last_call["method"] == "POST"
        assert session.last_call["json"] == {
            "price": 1000,
            "curr": "CZK",
            "label": "Product",
            "refId": "order-1",
            "method": "ALL",
            "email": "payer@example.com",
        }

    def test_raises_on_api_error_code(self, client, session):
        session.add(
            "POST",
            PAYMENT_URL,
            status=201,
            body={"code": 1100, "message": "unknown error", "transId": "", "redirect": ""},
        )

        with pytest.raises(ResponseValidationError, match="API error: 1100"):
            client.create_payment(
                price=1000, curr="CZK", label="Product", ref_id="order-1", email="payer@example.com"
            )

    def test_validation_failure_never_reaches_network(self, client, session):
        with pytest.raises(RequestValidationError, match="email or phone"):
            client.create_payment(price=1000, curr="CZK", label="Product", ref_id="order-1")

        assert session.calls == []

    def test_fills_default_method_when_absent(self, session):
        client = ComgateClient(
            merchant_id="m", secret="s", default_method="CARD_CZ_CSOB_2", session=session
        )
        session.add("POST", PAYMENT_URL, body=CREATED)

        client.create_payment(price=1000, curr="CZK", label="P", ref_id="1", email="a@b.cz", method=" ")

        assert session.last_call["json"]["method"] == "CARD_CZ_CSOB_2"

    def test_blank_default_method_is_not_sent(self, session):
        client = ComgateClient(merchant_id="m", secret="s", default_method="", session=session)
        session.add("POST", PAYMENT_URL, body=CREATED)

        client.create_payment(price=1000, curr="CZK", label="P", ref_id="1", email="a@b.cz")

        assert "method" not in session.last_call["json"]

    def test_test_mode_switches_missing_flag_on(self, session):
        client = ComgateClient(merchant_id="m", secret="s", test_mode=True, session=session)
        session.add("POST", PAYMENT_URL, body=CREATED)

        client.create_payment(price=1000, curr="CZK", label="P", ref_id="1", email="a@b.cz")

        assert session.last_call["json"]["test"] is True

    def test_test_mode_keeps_explicit_false(self, session):
        client = ComgateClient(merchant_id="m", secret="s", test_mode=True, session=session)
        session.add("POST", PAYMENT_URL, body=CREATED)

        client.create_payment(price=1000, curr="CZK", label="P", ref_id="1", email="a@b.cz", test=False)

        assert session.last_call["json"]["test"] is False

    def test_test_flag_omitted_without_test_mode(self, client, session):
        session.add("POST", PAYMENT_URL, body=CREATED)

        client.create_payment(price=1000, curr="CZK", label="P", ref_id="1", email="a@b.cz")

        assert "test" not in session.last_call["json"]


class TestPaymentStatusAndCancel:
    def test_payment_status(self, client, session):
        session.add(
            "GET",
            STATUS_URL,
            body={"code": 0, "message": "OK", "transId": "AB12-CD34-EF56", "status": "PENDING"},
        )

        result = client.payment_status(trans_id="AB12-CD34-EF56")

        assert result["transId"] == "AB12-CD34-EF56"
        assert result["status"] == "PENDING"
        assert session.last_call["method"] == "GET"

    def test_cancel_payment_sends_delete(self, client, session):
        session.add("DELETE", STATUS_URL, body={"code": 0, "message": "OK"})

        result = client.cancel_payment(trans_id="AB12-CD34-EF56")

        assert result == {"code": 0, "message": "OK"}
        assert session.last_call["method"] == "DELETE"
        assert session.last_call["json"] is None

    def test_trans_id_is_percent_encoded(self, client, session):
        url = f"{BASE_URL}/v2.0/payment/transId/AB%2F12.json"
        session.add("GET", url, body={"code": 0})

        client.payment_status(trans_id="AB/12")

        assert session.last_call["url"] == url

    def test_missing_trans_id_is_rejected(self, client, session):
        with pytest.raises(RequestValidationError):
            client.payment_status()

        assert session.calls == []


class TestTransfers:
    def test_transfer_list(self, client, session):
        transfers = [
            {
                "transferId": 1234567,
                "transferDate": "2025-02-10",
                "accountCounterparty": "0/0000",
                "accountOutgoing": "123456789/0000",
                "variableSymbol": "12345678",
            }
        ]
        session.add("GET", TRANSFERS_URL, body=transfers)

        result = client.transfer_list(date="2025-02-10")

        assert result == transfers
        assert session.last_call["params"] is None

    def test_transfer_list_accepts_date_object(self, client, session):
        session.add("GET", TRANSFERS_URL, body=[])

        assert client.transfer_list(date=datetime.date(2025, 2, 10)) == []
        assert session.last_call["url"] == TRANSFERS_URL

    def test_transfer_list_empty(self, client, session):
        session.add("GET", TRANSFERS_URL, body=[])

        assert client.transfer_list(date="2025-02-10") == []

    def test_transfer_list_explicit_test(self, client, session):
        session.add("GET", TRANSFERS_URL, body=[])

        client.transfer_list(date="2025-02-10", test=True)

        assert session.last_call["params"] == {"test": "true"}

    def test_transfer_list_inherits_test_mode(self, session):
        client = ComgateClient(merchant_id="m", secret="s", test_mode=True, session=session)
        session.add("GET", TRANSFERS_URL, body=[])

        client.transfer_list(date="2025-02-10")

        assert session.last_call["params"] == {"test": "true"}

    def test_transfer_list_explicit_false_beats_test_mode(self, session):
        client = ComgateClient(merchant_id="m", secret="s", test_mode=True, session=session)
        session.add("GET", TRANSFERS_URL, body=[])

        client.transfer_list(date="2025-02-10", test=False)

        assert session.last_call["params"] is None

    def test_transfer_list_http_error(self, client, session):
        session.add("GET", TRANSFERS_URL, status=403, body="Forbidden")

        with pytest.raises(HTTPError) as excinfo:
            client.transfer_list(date="2025-02-10")

        assert excinfo.value.status == 403

    def test_transfer_list_invalid_json(self, client, session):
        session.add("GET", TRANSFERS_URL, body="not valid json {[")

        with pytest.raises(ResponseValidationError, match="Invalid JSON response"):
            client.transfer_list(date="2025-02-10")

    def test_transfer_list_rejects_bad_date_locally(self, client, session):
        with pytest.raises(RequestValidationError):
            client.transfer_list(date="2025-13-40")

        assert session.calls == []

    def test_single_transfer(self, client, session):
        detail = [
            {
                "typ": 1,
                "Merchant": "123456",
                "Datum prevodu": "2023-01-10",
                "ID Comgate": "AAAA-BBBB-CCCC",
            }
        ]
        session.add("GET", TRANSFER_URL, body=detail)

        result = client.single_transfer(transfer_id="1234567", test=True)

        assert result[0]["ID Comgate"] == "AAAA-BBBB-CCCC"
        assert result[0]["Datum prevodu"] == "2023-01-10"
        assert session.last_call["params"] == {"test": "true"}

    def test_single_transfer_invalid_json(self, client, session):
        session.add("GET", TRANSFER_URL, body="not valid json {[")

        with pytest.raises(ResponseValidationError):
            client.single_transfer(transfer_id="1234567")


@pytest.mark.parametrize(
    "operation, method, url, kwargs",
    [
        (
            "create_payment",
            "POST",
            PAYMENT_URL,
            {"price": 1000, "curr": "CZK", "label": "Product", "ref_id": "order-1", "email": "payer@example.com"},
        ),
        ("payment_status", "GET", STATUS_URL, {"trans_id": "AB12-CD34-EF56"}),
        ("cancel_payment", "DELETE", STATUS_URL, {"trans_id": "AB12-CD34-EF56"}),
        ("transfer_list", "GET", TRANSFERS_URL, {"date": "2025-02-10"}),
        ("single_transfer", "GET", TRANSFER_URL, {"transfer_id": "1234567"}),
    ],
)
def test_not_found_raises_http_error(client, session, operation, method, url, kwargs):
    session.add(method, url, status=404, body="Not found")

    with pytest.raises(HTTPError) as excinfo:
        getattr(client, operation)(**kwargs)

    assert excinfo.value.status == 404
    assert excinfo.value.body == "Not found"
    assert str(excinfo.value) == "HTTP error: 404"
    assert session.last_call["method"] == method
