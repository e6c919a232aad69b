"""
Logging filters for payment data scrubbing.

These filters redact primary account numbers and email addresses from log
messages before they reach any handler. Stripe payloads and customer records
are logged while debugging billing, and raw card data must never land in logs.

Usage:
    # In settings.py LOGGING configuration:
    LOGGING = {
        'filters': {
            'payment_scrubber': {
                '()': 'vaultadmin.logging_filters.PaymentDataScrubberFilter',
            },
        },
        'handlers': {
            'console': {
                'filters': ['payment_scrubber'],
            },
        },
    }
"""

import re
import logging
from typing import Pattern, Tuple


# Card numbers: 13-19 digits, optionally grouped by spaces or dashes
CARD_NUMBER_PATTERN = re.compile(r"\b(?:\d[ -]?){12,18}\d\b")

EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")


class PaymentDataScrubberFilter(logging.Filter):
    """
    Logging filter that redacts card numbers and email addresses.

    The message and its arguments are scrubbed. Records are never dropped,
    only rewritten.
    """

    REDACTION_TEXT = "[REDACTED]"

    def __init__(self, name: str = ""):
        super().__init__(name)
        self.patterns: Tuple[Tuple[str, Pattern], ...] = (
            ("CARD", CARD_NUMBER_PATTERN),
            ("EMAIL", EMAIL_PATTERN),
        )

    def scrub(self, text: str) -> str:
        """Replace every sensitive match in ``text``."""
        for label, pattern in self.patterns:
            text = pattern.sub(f"{self.REDACTION_TEXT}-{label}", text)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = self.scrub(record.msg)

        if record.args:
            if isinstance(record.args, dict):
                record.args = {
                    key: self.scrub(value) if isinstance(value, str) else value
                    for key, value in record.args.items()
                }
            else:
                record.args = tuple(
                    self.scrub(arg) if isinstance(arg, str) else arg
                    for arg in record.args
                )

        return True


def scrub_payment_data_from_event(event, hint):
    """
    Sentry ``before_send`` hook that redacts payment data from error reports.

    Request bodies, cookies and query strings are dropped outright; exception
    messages and the user email go through the same patterns as log records.
    """
    scrubber = PaymentDataScrubberFilter()

    request = event.get("request")
    if request:
        for key in ("data", "cookies", "query_string"):
            if key in request:
                request[key] = scrubber.REDACTION_TEXT

    user = event.get("user")
    if user and "email" in user:
        user["email"] = scrubber.REDACTION_TEXT

    for exc in event.get("exception", {}).get("values", []):
        if isinstance(exc.get("value"), str):
            exc["value"] = scrubber.scrub(exc["value"])

    return event
