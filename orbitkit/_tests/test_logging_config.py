import logging

import pytest

from orbitkit.logging_config import setup_logging


@pytest.fixture
def restore_logging():
    yield
    for name in ("", "orbitkit.algorithms", "orbitkit.models", "orbitkit.utils"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()


def test_setup_logging_writes_files(tmp_path, restore_logging):
    log_dir = tmp_path / "logs"
    config = setup_logging(log_dir=log_dir)
    assert log_dir.is_dir()
    assert set(config["handlers"]) == {"console", "file", "error_file"}

    logging.getLogger("orbitkit.algorithms.core.kepler").debug("solver message")
    for handler in logging.getLogger("orbitkit.algorithms").handlers:
        handler.flush()
    assert "solver message" in (log_dir / "orbitkit.log").read_text(encoding="utf8")
