import logging

import pytest

from focuscrop.core import log_setup


@pytest.fixture
def fresh_logging(monkeypatch):
    monkeypatch.setattr(log_setup, "_installed", False)
    root = logging.getLogger()
    app_logger = logging.getLogger("focuscrop")
    handlers_before = list(root.handlers)
    level_before = app_logger.level
    yield handlers_before
    for handler in root.handlers[:]:
        if handler not in handlers_before:
            root.removeHandler(handler)
    app_logger.setLevel(level_before)


def test_installs_one_handler_and_falls_back_to_info(fresh_logging):
    log_setup.install_logging("bogus")
    log_setup.install_logging("bogus")

    added = [h for h in logging.getLogger().handlers if h not in fresh_logging]
    assert len(added) == 1
    assert isinstance(added[0], logging.StreamHandler)
    assert logging.getLogger("focuscrop").level == logging.INFO


def test_rerun_only_changes_level(fresh_logging):
    log_setup.install_logging("warning")
    log_setup.install_logging("debug")

    added = [h for h in logging.getLogger().handlers if h not in fresh_logging]
    assert len(added) == 1
    assert logging.getLogger("focuscrop").level == logging.DEBUG
