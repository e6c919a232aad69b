"""
Tests for logging configuration, context propagation and payment data
scrubbing.
"""

import logging
import logging.config

from django.http import HttpResponse
from django.test import RequestFactory

from vaultadmin.logging_config import get_logging_config
from vaultadmin.logging_filters import (
    PaymentDataScrubberFilter,
    scrub_payment_data_from_event,
)
from vaultadmin.logging_utils import (
    StructuredLogFormatter,
    add_log_context,
    get_log_context,
    get_logger,
    set_log_context,
    clear_log_context,
    extract_request_context,
)
from vaultadmin.middleware import RequestIdMiddleware


def make_record(msg, args=(), **extra):
    record = logging.LogRecord(
        name="vaultadmin.billing",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=args,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestPaymentDataScrubberFilter:
    def setup_method(self):
        self.scrubber = PaymentDataScrubberFilter()

    def test_redacts_card_numbers(self):
        record = make_record("Card 4242 4242 4242 4242 declined")

        assert self.scrubber.filter(record) is True
        assert "4242 4242" not in record.getMessage()
        assert "[REDACTED]-CARD" in record.getMessage()

    def test_redacts_args(self):
        record = make_record("Billing email %s", ("ops@acme.example.com",))

        self.scrubber.filter(record)

        assert record.getMessage() == "Billing email [REDACTED]-EMAIL"

    def test_redacts_dict_args(self):
        record = make_record("Email %(email)s", ({"email": "a@b.io"},))

        self.scrubber.filter(record)

        assert record.getMessage() == "Email [REDACTED]-EMAIL"

    def test_keeps_stripe_ids_and_timestamps(self):
        record = make_record(
            "Charge %s created %d", ("ch_3MmlLrLkdIwHu7ix", 1704067200)
        )

        self.scrubber.filter(record)

        assert record.getMessage() == "Charge ch_3MmlLrLkdIwHu7ix created 1704067200"


class TestLogContext:
    def teardown_method(self):
        clear_log_context()

    def test_add_log_context_restores_previous(self):
        set_log_context(request_id="req-1")

        with add_log_context(organization_id="org-1"):
            assert get_log_context() == {
                "request_id": "req-1",
                "organization_id": "org-1",
            }

        assert get_log_context() == {"request_id": "req-1"}

    def test_adapter_injects_context(self):
        records = []
        handler = logging.Handler()
        handler.emit = records.append
        base_logger = logging.getLogger("vaultadmin.tests.context")
        base_logger.addHandler(handler)
        base_logger.setLevel(logging.INFO)

        try:
            with add_log_context(organization_id="org-7"):
                get_logger("vaultadmin.tests.context").info("Built billing summary")
        finally:
            base_logger.removeHandler(handler)

        assert records[-1].organization_id == "org-7"


class TestStructuredLogFormatter:
    def test_key_value_output(self):
        record = make_record(
            "Built billing summary", organization_id="org-1", request_id="req-9"
        )

        output = StructuredLogFormatter().format(record)

        assert "INFO logger=vaultadmin.billing" in output
        assert "organization_id=org-1" in output
        assert "request_id=req-9" in output
        assert output.endswith('message="Built billing summary"')


class TestGetLoggingConfig:
    def test_config_is_valid(self):
        config = get_logging_config(environment="production", log_level="INFO")

        logging.config.dictConfig(config)

        handler = logging.getLogger("vaultadmin").handlers[0]
        assert isinstance(handler.formatter, StructuredLogFormatter)
        assert any(isinstance(f, PaymentDataScrubberFilter) for f in handler.filters)

        logging.config.dictConfig(
            get_logging_config(environment="test", log_level="CRITICAL")
        )

    def test_test_environment_silences_django(self):
        config = get_logging_config(environment="test", log_level="CRITICAL")

        assert config["loggers"]["django"]["level"] == "CRITICAL"
        assert config["handlers"]["console"]["formatter"] == "verbose"


class TestRequestIdMiddleware:
    def setup_method(self):
        self.middleware = RequestIdMiddleware(lambda request: HttpResponse())
        self.factory = RequestFactory()

    def teardown_method(self):
        clear_log_context()

    def test_header_id_reaches_log_context(self):
        request = self.factory.get("/api/v1/", HTTP_X_REQUEST_ID="req-42")

        self.middleware.process_request(request)

        assert request.request_id == "req-42"
        assert get_log_context() == {"request_id": "req-42"}
        assert extract_request_context(request)["request_id"] == "req-42"

    def test_generates_id_when_header_missing(self):
        request = self.factory.get("/api/v1/")

        self.middleware.process_request(request)

        assert len(request.request_id) == 36
        assert get_log_context()["request_id"] == request.request_id

    def test_response_echoes_id_and_clears_context(self):
        request = self.factory.get("/api/v1/", HTTP_X_REQUEST_ID="req-43")
        self.middleware.process_request(request)

        response = self.middleware.process_response(request, HttpResponse())

        assert response["X-Request-Id"] == "req-43"
        assert get_log_context() == {}


class TestScrubPaymentDataFromEvent:
    def test_redacts_request_user_and_exception(self):
        event = {
            "request": {
                "url": "https://example.com/api/v1/",
                "data": {"card": "4242424242424242"},
                "cookies": {"sessionid": "abc"},
                "query_string": "email=ops@acme.example.com",
            },
            "user": {"id": 7, "email": "ops@acme.example.com"},
            "exception": {
                "values": [
                    {"type": "CardError", "value": "Card 4242 4242 4242 4242 declined"}
                ]
            },
        }

        scrubbed = scrub_payment_data_from_event(event, hint={})

        assert scrubbed["request"]["url"] == "https://example.com/api/v1/"
        assert scrubbed["request"]["data"] == "[REDACTED]"
        assert scrubbed["request"]["cookies"] == "[REDACTED]"
        assert scrubbed["request"]["query_string"] == "[REDACTED]"
        assert scrubbed["user"] == {"id": 7, "email": "[REDACTED]"}
        assert scrubbed["exception"]["values"][0]["value"] == (
            "Card [REDACTED]-CARD declined"
        )

    def test_event_without_request_passes_through(self):
        event = {"message": "Stripe unavailable", "level": "error"}

        assert scrub_payment_data_from_event(event, hint={}) == event
