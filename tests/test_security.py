import pytest

from ebook_payments.config import DEFAULT_ORIGINS
from ebook_payments.security import SECURITY_HEADERS, is_origin_allowed


@pytest.mark.parametrize("origin", [
    None,
    "",
    "https://donation-jpc.com",
    "https://donation-jpc.com/",
    "https://www.donation-jpc.com",
    "http://localhost:3000",
])
def test_origin_allowed(origin):
    assert is_origin_allowed(origin, DEFAULT_ORIGINS)


@pytest.mark.parametrize("origin", [
    "https://evil.com",
    "https://donation-jpc.com.evil.com",
    "https://donation-jpc.co",
    "http://donation-jpc.com",
    "https://donation-jpc.com//",
    "http://localhost:3001",
    "null",
    "*",
])
def test_origin_rejected(origin):
    assert not is_origin_allowed(origin, DEFAULT_ORIGINS)


def test_disallowed_origin_never_reaches_handler(client, mocker):
    create = mocker.patch("stripe.PaymentIntent.create")

    response = client.post(
        "/create-payment-intent",
        json={"amount": 200},
        headers={"Origin": "https://donation-jpc.com.evil.com"},
    )

    assert response.status_code == 403
    assert response.json() == {"detail": "Not allowed by CORS"}
    create.assert_not_called()


def test_disallowed_origin_response_has_security_headers(client):
    response = client.get("/health", headers={"Origin": "https://evil.com"})

    assert response.status_code == 403
    for name, value in SECURITY_HEADERS.items():
        assert response.headers[name] == value


def test_disallowed_origin_preflight_rejected(client):
    response = client.options(
        "/create-payment-intent",
        headers={"Origin": "https://evil.com", "Access-Control-Request-Method": "POST"},
    )

    assert response.status_code == 403
    assert "access-control-allow-origin" not in response.headers


def test_allowed_origin_gets_cors_headers(client):
    response = client.options(
        "/create-payment-intent",
        headers={"Origin": "https://donation-jpc.com", "Access-Control-Request-Method": "POST"},
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "https://donation-jpc.com"
    assert response.headers["access-control-allow-credentials"] == "true"


def test_request_without_origin_passes(client):
    assert client.get("/health").status_code == 200
