"""
Production settings for vaultadmin.

Inherits from base settings and enforces secure production defaults.
"""

from .base import *  # noqa: F403, F405
from decouple import config, Csv

# =============================================================================
# SECURITY SETTINGS (Production)
# =============================================================================

SECRET_KEY = config("SECRET_KEY")  # Required in production, no default
SIMPLE_JWT["SIGNING_KEY"] = SECRET_KEY  # noqa: F405

DEBUG = False

# No wildcard default
ALLOWED_HOSTS = config("ALLOWED_HOSTS", cast=Csv())

SECURE_SSL_REDIRECT = config("SECURE_SSL_REDIRECT", default=True, cast=bool)
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_HSTS_SECONDS = config("SECURE_HSTS_SECONDS", default=31536000, cast=int)
SECURE_HSTS_INCLUDE_SUBDOMAINS = config(
    "SECURE_HSTS_INCLUDE_SUBDOMAINS", default=True, cast=bool
)

STRIPE_SECRET_KEY = config("STRIPE_SECRET_KEY")

# =============================================================================
# ERROR TRACKING (Sentry)
# =============================================================================

SENTRY_DSN = config("SENTRY_DSN", default=None)

if SENTRY_DSN:
    import sentry_sdk
    from sentry_sdk.integrations.django import DjangoIntegration

    from vaultadmin.logging_filters import scrub_payment_data_from_event

    sentry_sdk.init(
        dsn=SENTRY_DSN,
        integrations=[DjangoIntegration()],
        environment=config("ENVIRONMENT", default="production"),
        traces_sample_rate=config("SENTRY_TRACES_SAMPLE_RATE", default=0.1, cast=float),
        # Card numbers and emails never leave the server
        before_send=scrub_payment_data_from_event,
        send_default_pii=False,
        release=config("SENTRY_RELEASE", default=None),
    )
