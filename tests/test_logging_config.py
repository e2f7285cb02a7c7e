import logging

from settings.logging_config import configure_logging
from warrant.json_logger import JsonFormatter, get_json_logger


def test_pipeline_loggers_share_configured_json_handler():
    configure_logging("INFO")
    logger = get_json_logger("warrant.assembler")
    root = logging.getLogger("warrant")

    assert logger.parent is root
    assert not logger.handlers
    assert root.propagate is False
    (handler,) = root.handlers
    assert isinstance(handler.formatter, JsonFormatter)


def test_bare_names_are_placed_under_warrant():
    assert get_json_logger("text_extraction").name == "warrant.text_extraction"
