"""
Centralized logging configuration for vaultadmin.

Builds the ``LOGGING`` dictConfig used by the settings modules:
- Console handler with structured (key=value) output
- Payment data scrubbing on every handler (card numbers, emails)
- Per-environment log levels
"""

from typing import Any, Dict


def get_logging_config(
    environment: str = "production", log_level: str = "INFO"
) -> Dict[str, Any]:
    """
    Build the logging configuration for an environment.

    Args:
        environment: One of "production", "development" or "test"
        log_level: Level applied to the vaultadmin loggers

    Returns:
        Dict suitable for ``logging.config.dictConfig``
    """
    formatter = "structured" if environment == "production" else "verbose"

    # Django's own loggers stay quiet in tests
    django_level = "CRITICAL" if environment == "test" else "INFO"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "payment_scrubber": {
                "()": "vaultadmin.logging_filters.PaymentDataScrubberFilter",
            },
        },
        "formatters": {
            "structured": {
                "()": "vaultadmin.logging_utils.StructuredLogFormatter",
            },
            "verbose": {
                "format": "{asctime} {levelname} {name} {message}",
                "style": "{",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
                "filters": ["payment_scrubber"],
            },
        },
        "loggers": {
            "django": {
                "handlers": ["console"],
                "level": django_level,
                "propagate": False,
            },
            "vaultadmin": {
                "handlers": ["console"],
                "level": log_level,
                "propagate": False,
            },
            "stripe": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
        },
    }
