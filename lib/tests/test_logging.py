from __future__ import annotations

import logging

import pytest

from cloco_client import logging_


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    names = ("cloco_client", "httpx", "httpcore")
    levels = {name: logging.getLogger(name).level for name in names}
    root_level = root.level
    root_handlers = list(root.handlers)
    yield
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)
    root.setLevel(root_level)
    for handler in root.handlers[:]:
        if handler not in root_handlers:
            root.removeHandler(handler)


def test_trace_level_is_registered() -> None:
    assert logging.getLevelName(logging_.TRACE) == "TRACE"


def test_get_logger_namespaces_under_package() -> None:
    assert logging_.get_logger("transport").name == "cloco_client.transport"
    assert logging_.get_logger("cloco_client.client").name == "cloco_client.client"
    assert logging_.get_logger().name == "cloco_client"


def test_setup_logging_levels(restore_logging) -> None:
    logging_.setup_logging(2)
    assert logging.getLogger("cloco_client").level == logging_.TRACE
    assert logging.getLogger("httpx").level == logging.DEBUG

    logging_.setup_logging(0)
    assert logging.getLogger("cloco_client").level == logging.WARNING
    assert logging.getLogger("httpx").level == logging.WARNING
