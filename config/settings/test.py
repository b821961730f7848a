# config/settings/test.py
from .base import *  # noqa

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

SECRET_KEY = "test-secret-key-that-is-long-enough-for-hs256-signing"
PARENT_JWT_SECRET = "test-parent-secret-that-is-long-enough-for-hs256"
SIMPLE_JWT = {**SIMPLE_JWT, "SIGNING_KEY": SECRET_KEY}

LOGGING["root"]["level"] = "WARNING"
LOGGING["loggers"]["vx_core"]["level"] = "WARNING"
