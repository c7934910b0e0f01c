from __future__ import annotations

import logging
from pathlib import Path

import pytest

from blog_api.app.core.config import Settings
from blog_api.app.core.logging_config import setup_logging


@pytest.fixture()
def root_handlers():
    root = logging.getLogger()
    before = list(root.handlers)
    yield root
    for handler in root.handlers[:]:
        if handler not in before:
            root.removeHandler(handler)
            handler.close()


def test_setup_logging_applies_level_to_package_logger(root_handlers) -> None:
    app_logger = setup_logging(Settings(log_level="debug", log_file=""))

    assert app_logger.name == "blog_api"
    assert app_logger.level == logging.DEBUG
    assert logging.getLogger("blog_api.app.services.post_service").getEffectiveLevel() == logging.DEBUG


def test_unknown_level_falls_back_to_info(root_handlers) -> None:
    assert setup_logging(Settings(log_level="verbose", log_file="")).level == logging.INFO


def test_repeated_setup_does_not_duplicate_handlers(root_handlers, tmp_path: Path) -> None:
    settings = Settings(log_level="INFO", log_file=str(tmp_path / "blog.log"))

    setup_logging(settings)
    count = len(root_handlers.handlers)
    setup_logging(settings)

    assert len(root_handlers.handlers) == count


def test_log_file_receives_service_messages(root_handlers, tmp_path: Path) -> None:
    log_path = tmp_path / "blog.log"
    setup_logging(Settings(log_level="INFO", log_file=str(log_path)))

    logging.getLogger("blog_api.app.services.user_service").info("Updated user %s", 2)
    for handler in root_handlers.handlers:
        handler.flush()

    assert "[INFO] blog_api.app.services.user_service: Updated user 2" in log_path.read_text(encoding="utf-8")
