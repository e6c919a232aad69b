"""
Test settings for vaultadmin.
Optimized for fast test execution with an in-memory database.
"""
from .base import *  # noqa: F403, F405
import os

# Override SECRET_KEY for tests (not used in production)
SECRET_KEY = "test-secret-key-not-for-production-use-only"  # pragma: allowlist secret  # noqa: E501

# JWT Settings for tests
SIMPLE_JWT["SIGNING_KEY"] = SECRET_KEY  # noqa: F405

# Use in-memory SQLite for fast tests (override DATABASE_URL if set)
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# If DATABASE_URL is explicitly set (like in CI), use it instead
if "DATABASE_URL" in os.environ:
    import dj_database_url

    DATABASES["default"] = dj_database_url.config(
        default=os.environ["DATABASE_URL"],
        conn_max_age=0,  # Don't reuse connections in tests
    )

# Disable password hashing for faster user creation in tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Never talk to Stripe from tests
STRIPE_SECRET_KEY = "sk_test_placeholder"  # pragma: allowlist secret

# Disable logging during tests to reduce noise
LOGGING = get_logging_config(environment="test", log_level="CRITICAL")  # noqa: F405

DEBUG = False
ALLOWED_HOSTS = ["*"]
