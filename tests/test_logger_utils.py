"""
Tests for logger injection and level mapping.
"""

import logging

import pytest

from local_llama_bridge.utils.logger_utils import map_level, with_logger
from local_llama_bridge.utils.logger_utils.logger_injector import _resolve_log_path_from_env


@pytest.mark.parametrize(
    "value, level",
    [
        ("debug", logging.DEBUG),
        ("WARN", logging.WARNING),
        (" error ", logging.ERROR),
        ("10", 10),
        (30, 30),
        (None, logging.INFO),
        ("verbose", logging.INFO),
    ],
)
def test_map_level(value, level):
    assert map_level(value) == level


def test_with_logger_injects_logger():
    @with_logger("LOCAL-LLAMA-BRIDGE-TEST")
    def work(x, *, logger=None):
        return logger

    logger = work(1)
    assert isinstance(logger, logging.Logger)
    assert logger.name == "LOCAL-LLAMA-BRIDGE-TEST"
    assert logger.handlers


def test_with_logger_keeps_explicit_logger():
    mine = logging.getLogger("mine")

    @with_logger("LOCAL-LLAMA-BRIDGE-TEST")
    def work(*, logger=None):
        return logger

    assert work(logger=mine) is mine


def test_log_path_directory_gets_default_name(tmp_path, monkeypatch):
    monkeypatch.setenv("BRIDGE_TEST_LOG", str(tmp_path))
    assert _resolve_log_path_from_env("BRIDGE_TEST_LOG") == tmp_path / "local_llama_bridge.log"


def test_log_path_file_parent_created(tmp_path, monkeypatch):
    target = tmp_path / "nested" / "run.log"
    monkeypatch.setenv("BRIDGE_TEST_LOG", str(target))
    assert _resolve_log_path_from_env("BRIDGE_TEST_LOG") == target
    assert target.parent.is_dir()
