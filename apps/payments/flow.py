"""Drive the customer from a gateway return to the matching result screen.

The flow is created per page visit, runs the interpreter once, shows a single
notification and arms exactly one delayed navigation:

    processing -> success -> (delay) -> /payment/success?orderId=...
    processing -> failed  -> (delay) -> /payment/failed?orderId=...&error=...
    processing -> failed  -> (longer delay) -> /   (interpreter blew up)

The delay is a cancellable scheduled callback, never a blocking wait. Any object
with ``call_later(delay, callback)`` returning a handle with ``cancel()`` works as a
scheduler, an asyncio event loop included.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Protocol

from django.conf import settings
from django.utils.translation import gettext as _

from .outcome import CallbackOutcome, FlowStatus, failed_route, home_route, success_route
from .vnpay import interpret

logger = logging.getLogger(__name__)


DEFAULT_REDIRECT_DELAY_SECONDS = 2
DEFAULT_ERROR_REDIRECT_DELAY_SECONDS = 3


class Cancellable(Protocol):
    def cancel(self) -> Any: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable: ...


class Notifier(Protocol):
    def success(self, text: str) -> None: ...

    def error(self, text: str) -> None: ...


def _payments_setting(name: str, default):
    return getattr(settings, "PAYMENTS", {}).get(name, default)


class PaymentCallbackFlow:
    def __init__(
        self,
        params: Mapping[str, str],
        *,
        scheduler: Scheduler,
        navigate: Callable[[str], None],
        notifier: Notifier,
        interpreter: Callable[[Mapping[str, str]], CallbackOutcome] | None = None,
        redirect_delay: float | None = None,
        error_redirect_delay: float | None = None,
    ):
        self._params = params
        self._scheduler = scheduler
        self._navigate = navigate
        self._notifier = notifier
        self._interpreter = interpreter or interpret

        if redirect_delay is None:
            redirect_delay = _payments_setting("REDIRECT_DELAY_SECONDS", DEFAULT_REDIRECT_DELAY_SECONDS)
        if error_redirect_delay is None:
            error_redirect_delay = _payments_setting(
                "ERROR_REDIRECT_DELAY_SECONDS", DEFAULT_ERROR_REDIRECT_DELAY_SECONDS
            )
        self.redirect_delay = redirect_delay
        self.error_redirect_delay = error_redirect_delay

        self.status = FlowStatus.PROCESSING
        self.message = _("Processing the payment result...")
        self.outcome: CallbackOutcome | None = None
        self.pending_route: str | None = None
        self.pending_delay: float | None = None
        self.navigated = False

        self._started = False
        self._closed = False
        self._handle: Cancellable | None = None

    def __enter__(self) -> PaymentCallbackFlow:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()

    @property
    def started(self) -> bool:
        return self._started

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> None:
        """Process the gateway return. Only the first call on a live flow does anything."""
        if self._started or self._closed:
            return
        self._started = True

        try:
            outcome = self._interpreter(self._params)
        except Exception:
            logger.exception("Unexpected error while processing a payment gateway return.")
            self._finish(
                FlowStatus.FAILED,
                message=_("An error occurred while processing your payment."),
                notification=_("Something went wrong."),
                route=home_route(),
                delay=self.error_redirect_delay,
            )
            return

        self.outcome = outcome

        if outcome.success:
            logger.info("Payment return accepted (order=%s, code=%s).", outcome.order_id, outcome.response_code)
            message = outcome.message or _("Payment successful!")
            self._finish(
                FlowStatus.SUCCESS,
                message=message,
                notification=message,
                route=success_route(outcome.order_id),
                delay=self.redirect_delay,
            )
        else:
            logger.warning("Payment return declined (order=%s, code=%s).", outcome.order_id, outcome.response_code)
            message = outcome.message or _("Payment failed.")
            self._finish(
                FlowStatus.FAILED,
                message=message,
                notification=message,
                route=failed_route(outcome.order_id, outcome.response_code),
                delay=self.redirect_delay,
            )

    def teardown(self) -> None:
        """Cancel the pending navigation, if any. Safe to call more than once."""
        self._closed = True
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.cancel()
            logger.debug("Cancelled pending navigation to %s.", self.pending_route)

    def _finish(self, status: str, *, message: str, notification: str, route: str, delay: float) -> None:
        self.status = status
        self.message = message
        if status == FlowStatus.SUCCESS:
            self._notifier.success(notification)
        else:
            self._notifier.error(notification)

        self.pending_route = route
        self.pending_delay = delay
        self._handle = self._scheduler.call_later(delay, self._go_to_pending_route)

    def _go_to_pending_route(self) -> None:
        self._handle = None
        if self._closed or self.navigated or self.pending_route is None:
            return
        self.navigated = True
        self._navigate(self.pending_route)
