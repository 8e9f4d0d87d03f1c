"""Shared types for the payment-return flow.

Keep the outcome, the flow status and the follow-up routes in one module so the
interpreter, the flow and the result views agree on them.

Routes produced after a gateway return:
- success: /payment/success?orderId=<order id or empty>
- failure: /payment/failed?orderId=<order id or empty>&error=<code or "unknown">
- unexpected error: / (home)
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from django.db import models
from django.urls import reverse
from django.utils.http import urlencode
from django.utils.translation import gettext_lazy as _


UNKNOWN_ERROR_CODE = "unknown"


class FlowStatus(models.TextChoices):
    PROCESSING = "processing", _("Processing")
    SUCCESS = "success", _("Success")
    FAILED = "failed", _("Failed")


@dataclass(frozen=True)
class CallbackOutcome:
    success: bool
    order_id: str | None = None
    message: str | None = None
    # Raw gateway code; only used to build the failure route.
    response_code: str | None = None
    amount: Decimal | None = None


def _with_query(path: str, query: dict) -> str:
    return f"{path}?{urlencode(query)}"


def success_route(order_id: str | None) -> str:
    return _with_query(reverse("payments:success"), {"orderId": order_id or ""})


def failed_route(order_id: str | None, error_code: str | None) -> str:
    return _with_query(
        reverse("payments:failed"),
        {"orderId": order_id or "", "error": error_code or UNKNOWN_ERROR_CODE},
    )


def home_route() -> str:
    return reverse("web:home")
