"""
Django settings for the storefront project.

For more information on this file, see
https://docs.djangoproject.com/en/stable/topics/settings/

For the full list of settings and their values, see
https://docs.djangoproject.com/en/stable/ref/settings/
"""

import os
from pathlib import Path

import environ
from django.utils.translation import gettext_lazy

# Build paths inside the project like this: BASE_DIR / "subdir".
BASE_DIR = Path(__file__).resolve().parent.parent

env = environ.Env()
env.read_env(os.path.join(BASE_DIR, ".env"))

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = env("SECRET_KEY", default="django-insecure-6pQyZt3v0nVb1kR8sWmLx2HfJcA9eDuG4oTiN7rE")

# SECURITY WARNING: don"t run with debug turned on in production!
DEBUG = env.bool("DEBUG", default=True)

# Note: It is not recommended to set ALLOWED_HOSTS to "*" in production
ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["*"])


# Application definition

DJANGO_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
]

PROJECT_METADATA = {
    "NAME": gettext_lazy("Storefront"),
    "URL": "http://localhost:8000",
    "DESCRIPTION": gettext_lazy("Storefront web client."),
}

# Put your third-party apps here
THIRD_PARTY_APPS = [
    "django_htmx",
]

# Put your project-specific apps here
PROJECT_APPS = [
    "apps.web.apps.WebConfig",
    "apps.payments.apps.PaymentsConfig",
]

INSTALLED_APPS = DJANGO_APPS + THIRD_PARTY_APPS + PROJECT_APPS

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django_htmx.middleware.HtmxMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "storefront.urls"

# used to disable the cache in dev, but turn it on in production.
# more here: https://nickjanetakis.com/blog/django-4-1-html-templates-are-cached-by-default-with-debug-true
_DEFAULT_LOADERS = [
    "django.template.loaders.filesystem.Loader",
    "django.template.loaders.app_directories.Loader",
]

_CACHED_LOADERS = [("django.template.loaders.cached.Loader", _DEFAULT_LOADERS)]

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [
            BASE_DIR / "templates",
        ],
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.messages.context_processors.messages",
                "apps.web.context_processors.project_meta",
            ],
            "loaders": _DEFAULT_LOADERS if DEBUG else _CACHED_LOADERS,
        },
    },
]

WSGI_APPLICATION = "storefront.wsgi.application"

# Database
# https://docs.djangoproject.com/en/stable/ref/settings/#databases

DATABASES = {
    "default": env.db("DATABASE_URL", default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}"),
}

# Credentials and the session itself live with the auth service; the storefront only
# needs the session as a carrier for flash messages, so keep it in a signed cookie.
SESSION_ENGINE = "django.contrib.sessions.backends.signed_cookies"
SESSION_COOKIE_DOMAIN = env("SESSION_COOKIE_DOMAIN", default=None)

MESSAGE_STORAGE = "django.contrib.messages.storage.fallback.FallbackStorage"


# Internationalization
# https://docs.djangoproject.com/en/stable/topics/i18n/

LANGUAGE_CODE = "en-us"
LANGUAGES = [
    ("en", gettext_lazy("English")),
    ("vi", gettext_lazy("Vietnamese")),
]
LOCALE_PATHS = (BASE_DIR / "locale",)

TIME_ZONE = "Asia/Ho_Chi_Minh"

USE_I18N = True

USE_TZ = True

# Static files (CSS, JavaScript, Images)
# https://docs.djangoproject.com/en/stable/howto/static-files/

STATIC_ROOT = BASE_DIR / "static_root"
STATIC_URL = env("STATIC_URL", default="/static/")

# Default primary key field type
# https://docs.djangoproject.com/en/stable/ref/settings/#default-auto-field

DEFAULT_AUTO_FIELD = "django.db.models.AutoField"

# Payment gateway return handling
#
# SUCCESS_CODE is the VNPay response code that marks a completed transaction; every
# other value (or no value at all) is a failure. The delays control how long the
# status screen stays visible before the browser moves on.
PAYMENTS = {
    "SUCCESS_CODE": env("VNPAY_SUCCESS_CODE", default="00"),
    "REDIRECT_DELAY_SECONDS": env.int("PAYMENT_REDIRECT_DELAY_SECONDS", default=2),
    "ERROR_REDIRECT_DELAY_SECONDS": env.int("PAYMENT_ERROR_REDIRECT_DELAY_SECONDS", default=3),
    "RETRY_URL": env("PAYMENT_RETRY_URL", default="/payment/{order_id}"),
    "CART_URL": env("CART_URL", default="/cart/"),
    "ORDER_DETAILS_URL": env("PAYMENT_ORDER_DETAILS_URL", default="/profile"),
}


LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": '[{asctime}] {levelname} "{name}" {message}',
            "style": "{",
            "datefmt": "%d/%b/%Y %H:%M:%S",  # match Django server time format
        },
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "verbose"},
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": env("DJANGO_LOG_LEVEL", default="INFO"),
        },
        "apps": {
            "handlers": ["console"],
            "level": env("STOREFRONT_LOG_LEVEL", default="INFO"),
        },
    },
}
