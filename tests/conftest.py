import logging

import pytest

from umbot.config.models import AppConfig, PlatformParams
from umbot.core.app_context import AppContext
from umbot.models.db import FileStorage


@pytest.fixture
def logger():
    test_logger = logging.getLogger("umbot.tests")
    test_logger.setLevel(logging.DEBUG)
    return test_logger


@pytest.fixture
def make_config(tmp_path):
    """AppConfig с json хранилищем во временной директории."""

    def _make(**platform):
        platform.setdefault("utm_text", "")
        return AppConfig(
            json_dir=str(tmp_path / "json"),
            platform=PlatformParams(**platform),
        )

    return _make


@pytest.fixture
def make_context(make_config, logger):
    """Контекст приложения для выбранной платформы."""

    def _make(app_type="alisa", **platform):
        config = make_config(**platform)
        storage = FileStorage(config.json_dir, logger)
        return AppContext(config, logger, storage, app_type)

    return _make


@pytest.fixture
def app_context(make_context):
    return make_context()
