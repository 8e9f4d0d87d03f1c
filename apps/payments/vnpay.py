"""VNPay return-URL interpretation.

The gateway redirects the customer back to ``payments:callback`` with the result
in the query string. Everything in there is untrusted and string typed, so the
raw mapping is narrowed to ``GatewayReturn`` first and only the handful of
fields below are ever read. VNPay field names must not leak past this module.

Signature checking (``vnp_SecureHash``) is not done here; the return is assumed
to be verified by the payments backend through the IPN call.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, DecimalException

from django.conf import settings
from django.utils.http import urlencode
from django.utils.translation import gettext as _
from django.utils.translation import gettext_lazy

from .outcome import CallbackOutcome


RESPONSE_CODE_PARAM = "vnp_ResponseCode"
ORDER_REF_PARAM = "vnp_TxnRef"
AMOUNT_PARAM = "vnp_Amount"
RETURN_URL_PARAM = "vnp_ReturnUrl"

DEFAULT_SUCCESS_CODE = "00"

# VNPay sends amounts in the smallest currency unit multiplied by 100.
AMOUNT_SCALE = Decimal(100)

RESPONSE_CODE_MESSAGES = {
    "07": gettext_lazy("Money was deducted, but the transaction is under review for suspected fraud."),
    "09": gettext_lazy("Your card or account is not registered for internet banking."),
    "10": gettext_lazy("Card or account verification failed more than 3 times."),
    "11": gettext_lazy("The payment window expired. Please try again."),
    "12": gettext_lazy("Your card or account is locked."),
    "13": gettext_lazy("The one-time password (OTP) was incorrect."),
    "24": gettext_lazy("The payment was cancelled."),
    "51": gettext_lazy("Your account balance is insufficient."),
    "65": gettext_lazy("Your account has exceeded its daily transaction limit."),
    "75": gettext_lazy("The paying bank is under maintenance."),
    "79": gettext_lazy("The payment password was entered incorrectly too many times."),
    "99": gettext_lazy("The gateway reported an unspecified error."),
}


@dataclass(frozen=True)
class GatewayReturn:
    """The part of a VNPay return we actually consult."""

    response_code: str | None
    order_ref: str | None
    amount: str | None

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> GatewayReturn:
        return cls(
            response_code=params.get(RESPONSE_CODE_PARAM) or None,
            order_ref=params.get(ORDER_REF_PARAM) or None,
            amount=params.get(AMOUNT_PARAM) or None,
        )


def get_success_code() -> str:
    return getattr(settings, "PAYMENTS", {}).get("SUCCESS_CODE") or DEFAULT_SUCCESS_CODE


def _parse_amount(raw: str | None) -> Decimal | None:
    if raw is None:
        return None
    try:
        value = Decimal(str(raw).strip())
        if not value.is_finite():
            return None
        return value / AMOUNT_SCALE
    except (DecimalException, ValueError):
        return None


def describe_response_code(code: str | None) -> str:
    message = RESPONSE_CODE_MESSAGES.get(code or "")
    if message is None:
        return _("The transaction failed.")
    return str(message)


def interpret(params: Mapping[str, str]) -> CallbackOutcome:
    """Classify a gateway return.

    Pure and deterministic: the same params always produce an equal outcome and the
    mapping is never modified. Missing or malformed fields degrade to a failure; only
    a response code equal to the configured success code counts as success.

    ``message`` is translated into the language active at call time, so equal params
    give equal outcomes under the same active language and ``PAYMENTS`` settings.
    """
    data = GatewayReturn.from_params(params)
    success = data.response_code is not None and data.response_code == get_success_code()

    return CallbackOutcome(
        success=success,
        order_id=data.order_ref,
        message=_("Payment successful!") if success else describe_response_code(data.response_code),
        response_code=data.response_code,
        amount=_parse_amount(data.amount),
    )


def build_return_url(payment_url: str, return_url: str) -> str:
    """Append our return URL to a gateway payment URL."""
    separator = "&" if "?" in payment_url else "?"
    return f"{payment_url}{separator}{urlencode({RETURN_URL_PARAM: return_url})}"
