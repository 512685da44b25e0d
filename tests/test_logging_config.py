import logging

from shafttorsion.logging_config import resolve_level, setup_logging


def test_explicit_level_wins(monkeypatch):
    monkeypatch.setenv("SHAFTTORSION_LOG_LEVEL", "ERROR")
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(logging.INFO) == logging.INFO


def test_environment_then_default(monkeypatch):
    monkeypatch.setenv("SHAFTTORSION_LOG_LEVEL", "info")
    assert resolve_level() == logging.INFO
    monkeypatch.delenv("SHAFTTORSION_LOG_LEVEL")
    assert resolve_level() == logging.WARNING
    assert resolve_level("nonsense") == logging.WARNING


def test_setup_is_idempotent(tmp_path):
    log_file = tmp_path / "run.log"
    setup_logging("INFO", str(log_file))
    logger = setup_logging("INFO", str(log_file))
    assert logger.name == "shafttorsion"
    assert len(logger.handlers) == 2
    logging.getLogger("shafttorsion.core.torsion").info("hello")
    for h in logger.handlers:
        h.flush()
    assert "hello" in log_file.read_text(encoding="utf-8")
