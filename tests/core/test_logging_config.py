# tests/core/test_logging_config.py
import io
import json
import logging

from dating_dna.core.logging_config import CustomJsonFormatter, setup_logging


def json_handlers(root_logger):
    return [h for h in root_logger.handlers if isinstance(h.formatter, CustomJsonFormatter)]


def test_setup_logging_is_idempotent(restore_root_logging):
    root_logger = restore_root_logging
    for handler in json_handlers(root_logger):
        root_logger.removeHandler(handler)

    setup_logging("DEBUG", stream=io.StringIO())
    setup_logging("WARNING", stream=io.StringIO())
    assert len(json_handlers(root_logger)) == 1
    assert root_logger.level == logging.WARNING


def test_unknown_level_falls_back_to_info(restore_root_logging):
    setup_logging("chatty", stream=io.StringIO())
    assert restore_root_logging.level == logging.INFO


def test_json_record_fields(restore_root_logging):
    root_logger = restore_root_logging
    for handler in json_handlers(root_logger):
        root_logger.removeHandler(handler)
    stream = io.StringIO()
    setup_logging("INFO", stream=stream)

    logging.getLogger("dating_dna.tests").info("Assessment scored", extra={"type_code": "CPLS"})

    line = stream.getvalue().strip().splitlines()[-1]
    record = json.loads(line)
    assert record["message"] == "Assessment scored"
    assert record["level"] == "INFO"
    assert record["name"] == "dating_dna.tests"
    assert record["module"] == "test_logging_config"
    assert record["type_code"] == "CPLS"
    assert isinstance(record["lineno"], int)
    assert record["timestamp"]
