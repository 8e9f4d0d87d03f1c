import pytest
from django.contrib.messages import get_messages
from django.urls import reverse

from apps.payments.outcome import FlowStatus


def _messages(response):
    return [(m.level_tag, str(m)) for m in get_messages(response.wsgi_request)]


def _scheduled(response):
    return response.context["redirect_delay"], response.context["redirect_url"]


# ============================================
# GATEWAY RETURN
# ============================================


def test_callback_success_renders_status_and_schedules_redirect(client):
    res = client.get(reverse("payments:callback"), {"vnp_ResponseCode": "00", "vnp_TxnRef": "ORD123"})

    assert res.status_code == 200
    assert res.context["flow"].status == FlowStatus.SUCCESS
    assert res.context["redirect_url"] == "/payment/success?orderId=ORD123"
    assert _scheduled(res) == ("2", "/payment/success?orderId=ORD123")
    assert _messages(res) == [("success", "Payment successful!")]
    assert b'data-status="success"' in res.content


def test_callback_arms_a_single_browser_navigation(client):
    res = client.get(reverse("payments:callback"), {"vnp_ResponseCode": "00", "vnp_TxnRef": "ORD123"})

    # htmx drives the jump; the meta refresh only applies when scripts are off.
    assert "Refresh" not in res
    assert res.content.count(b"load delay:2s") == 1
    assert b'<noscript><meta http-equiv="refresh" content="2; url=/payment/success?orderId=ORD123"></noscript>' in res.content


def test_callback_huge_amount_still_succeeds(client):
    res = client.get(
        reverse("payments:callback"),
        {"vnp_ResponseCode": "00", "vnp_TxnRef": "ORD1", "vnp_Amount": "1E+99999999"},
    )

    assert res.context["flow"].status == FlowStatus.SUCCESS
    assert res.context["flow"].outcome.amount is None
    assert _scheduled(res) == ("2", "/payment/success?orderId=ORD1")


def test_callback_declared_failure(client):
    res = client.get(reverse("payments:callback"), {"vnp_ResponseCode": "24"})

    assert res.status_code == 200
    assert res.context["flow"].status == FlowStatus.FAILED
    assert _scheduled(res) == ("2", "/payment/failed?orderId=&error=24")
    assert _messages(res) == [("error", "The payment was cancelled.")]


def test_callback_without_params(client):
    res = client.get(reverse("payments:callback"))

    assert res.status_code == 200
    assert res.context["flow"].status == FlowStatus.FAILED
    assert _scheduled(res) == ("2", "/payment/failed?orderId=&error=unknown")


def test_callback_unexpected_error_sends_user_home(client, monkeypatch):
    def broken(params):
        raise RuntimeError("boom")

    monkeypatch.setattr("apps.payments.flow.interpret", broken)

    res = client.get(reverse("payments:callback"), {"vnp_ResponseCode": "00", "vnp_TxnRef": "ORD123"})

    assert res.status_code == 200
    assert res.context["flow"].status == FlowStatus.FAILED
    assert res.context["flow"].message == "An error occurred while processing your payment."
    assert _scheduled(res) == ("3", "/")
    assert _messages(res) == [("error", "Something went wrong.")]


def test_callback_uses_configured_delay(client, settings):
    settings.PAYMENTS = {**settings.PAYMENTS, "REDIRECT_DELAY_SECONDS": 4}

    res = client.get(reverse("payments:callback"), {"vnp_ResponseCode": "00", "vnp_TxnRef": "A1"})

    assert _scheduled(res) == ("4", "/payment/success?orderId=A1")
    assert b"load delay:4s" in res.content


def test_callback_rejects_post(client):
    res = client.post(reverse("payments:callback"), {"vnp_ResponseCode": "00"})
    assert res.status_code == 405


def test_callback_escapes_order_reference_in_redirect(client):
    res = client.get(reverse("payments:callback"), {"vnp_ResponseCode": "00", "vnp_TxnRef": "A&B=1"})

    assert _scheduled(res) == ("2", "/payment/success?orderId=A%26B%3D1")


# ============================================
# RESULT SCREENS
# ============================================


def test_success_page_shows_order(client):
    res = client.get(reverse("payments:success"), {"orderId": "ORD123"})

    assert res.status_code == 200
    assert res.context["is_success"] is True
    assert b"ORD123" in res.content
    assert "payments/result.html" in [t.name for t in res.templates]
    assert res.context["order_details_url"] == "/profile"
    assert b'href="/profile"' in res.content
    assert b"Retry payment" not in res.content


def test_failed_page_shows_error_and_retry_link(client):
    res = client.get(reverse("payments:failed"), {"orderId": "ORD123", "error": "24"})

    assert res.status_code == 200
    assert res.context["is_success"] is False
    assert res.context["error_code"] == "24"
    assert res.context["retry_url"] == "/payment/ORD123"
    assert b'href="/payment/ORD123"' in res.content
    assert b"View order details" not in res.content


@pytest.mark.parametrize("query", [{}, {"orderId": "", "error": "unknown"}])
def test_failed_page_without_order_offers_cart(client, query):
    res = client.get(reverse("payments:failed"), query)

    assert res.status_code == 200
    assert res.context["retry_url"] == "/cart/"


def test_retry_url_quotes_order_reference(client):
    res = client.get(reverse("payments:failed"), {"orderId": "a/b c", "error": "11"})
    assert res.context["retry_url"] == "/payment/a%2Fb%20c"


def test_result_htmx_request_returns_card_fragment(client):
    res = client.get(reverse("payments:success"), {"orderId": "ORD123"}, HTTP_HX_REQUEST="true")

    names = [t.name for t in res.templates]
    assert "payments/_result_card.html" in names
    assert "payments/result.html" not in names
    assert b"<html" not in res.content


def test_order_details_url_is_configurable(client, settings):
    settings.PAYMENTS = {**settings.PAYMENTS, "ORDER_DETAILS_URL": "/account/orders/"}

    res = client.get(reverse("payments:success"), {"orderId": "ORD123"})

    assert b'href="/account/orders/"' in res.content
