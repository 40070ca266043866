import logging

from pythonjsonlogger.json import JsonFormatter

import openapi_summary.logging_config as logging_config


def test_init_logging_installs_json_formatter():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level

    try:
        logging_config.init_logging("WARNING")
        assert root.level == logging.WARNING
        assert any(isinstance(h.formatter, JsonFormatter) for h in root.handlers)
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)


def test_uvicorn_access_log_is_silenced():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level

    try:
        logging_config.init_logging("INFO")
        access = logging.getLogger("uvicorn.access")
        assert access.propagate is False
        assert not access.isEnabledFor(logging.INFO)
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
