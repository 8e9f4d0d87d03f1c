"""Adapters that connect ``PaymentCallbackFlow`` to a Django request/response.

The status screen is rendered server side, so the browser owns the actual timer:
``ClientRedirect`` collects the navigation the flow arms and the template hands it
to htmx (``load delay:``), with a ``<noscript>`` meta refresh for clients without
JavaScript. Only one of the two ever runs. If the customer leaves the page first,
the browser simply never follows it.
"""

from __future__ import annotations

from collections.abc import Callable

from django.contrib import messages
from django.http import HttpRequest


class MessagesNotifier:
    """Deliver flow notifications as Django flash messages."""

    def __init__(self, request: HttpRequest):
        self.request = request

    def success(self, text: str) -> None:
        messages.success(self.request, text)

    def error(self, text: str) -> None:
        messages.error(self.request, text)


class ScheduledNavigation:
    def __init__(self, delay: float, callback: Callable[[], None]):
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ClientRedirect:
    """Scheduler + navigator pair whose timer runs in the browser."""

    def __init__(self):
        self._scheduled: list[ScheduledNavigation] = []
        self.url: str | None = None
        self.delay: float | None = None

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledNavigation:
        handle = ScheduledNavigation(delay, callback)
        self._scheduled.append(handle)
        return handle

    def go_to(self, url: str) -> None:
        self.url = url

    def hand_over(self) -> str | None:
        """Pass live scheduled navigations on to the browser and return the target URL."""
        scheduled, self._scheduled = self._scheduled, []
        for handle in scheduled:
            if handle.cancelled:
                continue
            self.delay = handle.delay
            handle.callback()
        return self.url

    @property
    def delay_display(self) -> str:
        return "" if self.delay is None else f"{self.delay:g}"
