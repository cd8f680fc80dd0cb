"""
Fleet Core – Django Settings (Infrastructure Only)
==================================================
Django serves as the container for caches, sessions and logging.
The fleetcore packages stay framework-free; only the storage adapters
and the threshold defaults read from here.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("FLEET_SECRET_KEY", "fleet-dev-key-replace-before-deployment")

DEBUG = os.environ.get("FLEET_DEBUG", "1") == "1"

ALLOWED_HOSTS = []

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.sessions",
]

# ── Database ──────────────────────────────────────────────────
# Not used by the core; Django requires one to be declared.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

# ── Caches ────────────────────────────────────────────────────
# default  → durable area (last selected business unit)
# sessions → session area (signed-in identity snapshot)
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "fleet-durable",
    },
    "sessions": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "fleet-sessions",
    },
}

# ── Sessions ──────────────────────────────────────────────────
SESSION_ENGINE = "django.contrib.sessions.backends.cache"
SESSION_CACHE_ALIAS = "sessions"
SESSION_COOKIE_AGE = 60 * 60 * 8

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Validation policy defaults ────────────────────────────────
# Used when a tenant has no thresholds configured.
FLEET_VALIDATION_DEFAULTS = {
    "max_liters": 200,
    "min_liters": 5,
    "require_photos": True,
}

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "loggers": {
        "fleet": {
            "handlers": ["console"],
            "level": os.environ.get("FLEET_LOG_LEVEL", "INFO"),
            "propagate": True,
        },
    },
}
