"""
Development settings for vaultadmin.
"""

from .base import *  # noqa: F403, F405
from decouple import config

DEBUG = True

SECRET_KEY = config(
    "SECRET_KEY", default="dev-secret-key-change-me"  # pragma: allowlist secret
)
SIMPLE_JWT["SIGNING_KEY"] = SECRET_KEY  # noqa: F405

ALLOWED_HOSTS = ["*"]

LOGGING = get_logging_config(  # noqa: F405
    environment="development",
    log_level=config("LOG_LEVEL", default="DEBUG"),
)
