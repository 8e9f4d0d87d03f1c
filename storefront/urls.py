"""URL Configuration

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/stable/topics/http/urls/
"""

from django.urls import include, path

urlpatterns = [
    path("i18n/", include("django.conf.urls.i18n")),
    # Gateway return URL and result screens; paths are fixed by the gateway configuration.
    path("payment/", include("apps.payments.urls")),
    path("", include("apps.web.urls")),
]
