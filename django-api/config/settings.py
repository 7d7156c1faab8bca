"""Django settings for the venue admin API.

Every deployment-specific value comes from the environment:

- VENUE_SECRET_KEY: Django secret key (a development key is used when unset)
- VENUE_DEBUG: "1"/"true" enables debug mode
- VENUE_ALLOWED_HOSTS: comma separated host names
- VENUE_DB_PATH: SQLite database file (default: db.sqlite3 next to manage.py)
- VENUE_KEY_PREFIX: prefix of every storage key (default: "ecn_")
- VENUE_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


SECRET_KEY = os.environ.get("VENUE_SECRET_KEY", "dev-only-insecure-key")
DEBUG = _env_flag("VENUE_DEBUG", False)
ALLOWED_HOSTS = [
    h.strip()
    for h in os.environ.get("VENUE_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")
    if h.strip()
]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "venue",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("VENUE_DB_PATH", str(BASE_DIR / "db.sqlite3")),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "es"
TIME_ZONE = "UTC"
USE_TZ = True
STATIC_URL = "static/"

# Admin access is a flag in the Django session; see venue.handlers.permissions.
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "UNAUTHENTICATED_USER": None,
}

VENUE = {
    "KEY_PREFIX": os.environ.get("VENUE_KEY_PREFIX", "ecn_"),
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "console": {
            "format": "[%(asctime)s] %(levelname)s - %(name)s - %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "console",
        },
    },
    "loggers": {
        "venue": {
            "handlers": ["console"],
            "level": os.environ.get("VENUE_LOG_LEVEL", "INFO").upper(),
            "propagate": False,
        },
    },
}
