"""Unit tests for the loguru logger adaptor."""

from loguru import logger

from document_semaphore.observability.logger_adaptor import get_logger


def test_get_logger_is_cached() -> None:
    assert get_logger("document_semaphore.lock") is get_logger("document_semaphore.lock")


def test_messages_carry_logger_name() -> None:
    records = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    try:
        get_logger("document_semaphore.tests").warning("Lock key not found during release.")
    finally:
        logger.remove(sink_id)

    assert records[-1]["extra"]["logger_name"] == "document_semaphore.tests"
    assert records[-1]["level"].name == "WARNING"
    assert records[-1]["message"] == "Lock key not found during release."
