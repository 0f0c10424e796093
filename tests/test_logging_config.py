import json
import logging

from pythonjsonlogger.json import JsonFormatter

from app.logging_config import configure_logging


def test_application_loggers_emit_json():
    logger = configure_logging("DEBUG")

    assert logger.level == logging.DEBUG
    handler = logger.handlers[0]
    assert isinstance(handler.formatter, JsonFormatter)

    record = logging.getLogger("paystack_verify.verification").makeRecord(
        "paystack_verify.verification", logging.INFO, __file__, 1,
        "Transaction %s verified", ("ref_123",), None,
    )
    payload = json.loads(handler.formatter.format(record))

    assert payload["message"] == "Transaction ref_123 verified"
    assert payload["levelname"] == "INFO"
    assert payload["name"] == "paystack_verify.verification"


def test_child_loggers_use_application_handler():
    configure_logging("INFO")

    child = logging.getLogger("paystack_verify.handler")

    assert child.getEffectiveLevel() == logging.INFO
    assert child.parent.handlers
