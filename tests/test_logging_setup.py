import logging

import pytest

from visiontrack.app import logging_setup


@pytest.fixture
def clean_root():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    if hasattr(root, logging_setup._CONFIGURED_FLAG):
        delattr(root, logging_setup._CONFIGURED_FLAG)


def test_setup_logging_writes_file_once(clean_root, tmp_path):
    log_file = tmp_path / "logs" / "debug.log"
    logging_setup.setup_logging(level="debug", log_file=str(log_file))
    logging_setup.setup_logging(level="error")

    assert clean_root.level == logging.DEBUG
    logging.getLogger("visiontrack.test").info("bonjour")
    for h in clean_root.handlers:
        h.flush()
    assert "bonjour" in log_file.read_text(encoding="utf-8")

    logging_setup.clear_log_file(str(log_file))
    assert log_file.read_text(encoding="utf-8") == ""
