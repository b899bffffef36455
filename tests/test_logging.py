"""Test the loguru-backed logger service and sink setup."""
import logging

from loguru import logger

from core.config import LoggingSettings, Settings
from core.observability.logging_setup import LoggerService, configure_logging


def _capture():
    records = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    return records, sink_id


def test_logger_service_levels():
    records, sink_id = _capture()
    try:
        service = LoggerService(component="test")
        service.log_info("Authors - List: Attempting call")
        service.log_warn("Authors - Get: missing {id}")
        service.log_error("Authors - Create: boom")
    finally:
        logger.remove(sink_id)

    assert [r["level"].name for r in records] == ["INFO", "WARNING", "ERROR"]
    assert records[1]["message"] == "Authors - Get: missing {id}"
    assert all(r["extra"]["component"] == "test" for r in records)


def test_configure_logging_writes_json_file(tmp_path):
    log_file = tmp_path / "logs" / "api.log"
    settings = Settings(logging=LoggingSettings(file=str(log_file), format="json"))

    configure_logging(settings)
    LoggerService().log_info("hello from the book store")
    logging.getLogger("uvicorn.error").warning("forwarded from stdlib")
    logger.complete()
    logger.remove()

    content = log_file.read_text()
    assert "hello from the book store" in content
    assert "forwarded from stdlib" in content
    assert '"level"' in content
