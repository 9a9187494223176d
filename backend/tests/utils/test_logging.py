# tests/utils/test_logging.py
import logging

import pytest

from projectmanager.config import Settings, settings
from projectmanager.main import create_app
from projectmanager.utils.logging import api_logger, configure_logging, service_logger


@pytest.fixture
def restore_logging():
    yield
    configure_logging(settings)


def test_configure_logging_uses_given_directory(tmp_path, restore_logging):
    configure_logging(Settings(STORAGE_PATH=tmp_path))

    api_logger.info("Listing projects", extra={"endpoint": "/projects"})

    log_file = tmp_path / "logs" / "api.log"
    assert log_file.exists()
    assert "Listing projects" in log_file.read_text()


def test_configure_logging_replaces_previous_file(tmp_path, restore_logging):
    configure_logging(Settings(STORAGE_PATH=tmp_path / "first"))
    configure_logging(Settings(STORAGE_PATH=tmp_path / "second"))

    service_logger.info("Second location only")

    assert "Second location only" in (tmp_path / "second" / "logs" / "service.log").read_text()
    assert "Second location only" not in (tmp_path / "first" / "logs" / "service.log").read_text()


def test_configure_logging_applies_level(tmp_path, restore_logging):
    configure_logging(Settings(STORAGE_PATH=tmp_path, LOG_LEVEL="WARNING"))

    assert api_logger.logger.level == logging.WARNING


def test_create_app_moves_logs(tmp_path, restore_logging):
    create_app(Settings(STORAGE_PATH=tmp_path, DATABASE_URL="sqlite:///:memory:"))

    api_logger.warning("Routed by the app settings")

    assert "Routed by the app settings" in (tmp_path / "logs" / "api.log").read_text()


def test_reserved_extra_keys_are_renamed(tmp_path, restore_logging, caplog):
    configure_logging(Settings(STORAGE_PATH=tmp_path))

    with caplog.at_level(logging.INFO, logger="projectmanager.api"):
        api_logger.info("Reserved keys", extra={"module": "documents", "name": "plan.pdf"})

    record = caplog.records[-1]
    assert record.extra_module == "documents"
    assert record.extra_name == "plan.pdf"
