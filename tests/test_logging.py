import structlog

from backend.app.core.logging import configure_logging, get_logger


def test_configured_logger_is_stdlib_bound():
    configure_logging("DEBUG")
    logger = get_logger("line_items.test")
    assert isinstance(logger.bind(), structlog.stdlib.BoundLogger)
    logger.info("logging_configured", rows=1)
