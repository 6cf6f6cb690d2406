"""
SariWais – Django Settings (Infrastructure Only)
=================================================
Django serves as the HTTP container for SariWais.
The domain core is framework-free; Django only routes requests to
core/http_api handlers. Nothing is persisted in the database.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("SARIWAIS_SECRET_KEY", "sariwais-dev-key-replace-before-deployment")

DEBUG = os.environ.get("SARIWAIS_DEBUG", "1") == "1"

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "testserver"]

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "core.bootstrap",
]

# ── Middleware ────────────────────────────────────────────────
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL & WSGI ────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"

# ── Database ──────────────────────────────────────────────────
# Unused by the domain; Django's test runner still expects one.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "Asia/Manila"
USE_I18N = False
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Store Rules ───────────────────────────────────────────────
# Keys map onto core.config.rules.StoreRules fields.
SARIWAIS = {
    "currency_tag": "PHP",
    "admin_username": "admin",
    "default_subscription_days": 30,
    "report_product_limit": 5,
}

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    },
    "loggers": {
        "sariwais": {
            "handlers": ["console"],
            "level": os.environ.get("SARIWAIS_LOG_LEVEL", "INFO"),
            "propagate": True,
        },
    },
}
