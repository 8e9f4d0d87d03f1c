from __future__ import annotations

from urllib.parse import quote

from django.conf import settings
from django.http import HttpRequest, HttpResponse
from django.shortcuts import render
from django.views.decorators.http import require_GET

from .flow import PaymentCallbackFlow
from .navigation import ClientRedirect, MessagesNotifier
from .outcome import FlowStatus


def _retry_url(order_id: str) -> str:
    payments = getattr(settings, "PAYMENTS", {})
    if not order_id:
        return payments.get("CART_URL", "/cart/")
    return payments.get("RETRY_URL", "/payment/{order_id}").format(order_id=quote(order_id, safe=""))


@require_GET
def payment_callback(request: HttpRequest) -> HttpResponse:
    """Landing page for the gateway return: show the status, then move on."""
    redirect = ClientRedirect()

    with PaymentCallbackFlow(
        request.GET,
        scheduler=redirect,
        navigate=redirect.go_to,
        notifier=MessagesNotifier(request),
    ) as flow:
        flow.start()
        redirect.hand_over()

    return render(
        request,
        "payments/callback.html",
        {
            "flow": flow,
            "redirect_url": redirect.url,
            "redirect_delay": redirect.delay_display,
        },
    )


def _result(request: HttpRequest, status: str) -> HttpResponse:
    order_id = (request.GET.get("orderId") or "").strip()
    error_code = (request.GET.get("error") or "").strip()

    context = {
        "status": status,
        "is_success": status == FlowStatus.SUCCESS,
        "order_id": order_id,
        "error_code": error_code,
        "retry_url": _retry_url(order_id),
        "order_details_url": getattr(settings, "PAYMENTS", {}).get("ORDER_DETAILS_URL", "/profile"),
    }

    # Soft navigation from the status page swaps only the card.
    template = "payments/_result_card.html" if request.htmx else "payments/result.html"
    return render(request, template, context)


@require_GET
def payment_success(request: HttpRequest) -> HttpResponse:
    return _result(request, FlowStatus.SUCCESS)


@require_GET
def payment_failed(request: HttpRequest) -> HttpResponse:
    return _result(request, FlowStatus.FAILED)
