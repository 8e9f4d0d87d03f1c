from django.urls import path

from .views import payment_callback, payment_failed, payment_success

app_name = "payments"

urlpatterns = [
    # VNPay return URL; configured on the gateway side, keep it stable.
    path("callback", payment_callback, name="callback"),
    path("success", payment_success, name="success"),
    path("failed", payment_failed, name="failed"),
]
