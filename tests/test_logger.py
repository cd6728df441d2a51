import logging
import sys
from logging.handlers import RotatingFileHandler
import pytest
from util import logger as logger_module
from util.logger import TEXT_FORMAT, init_logger


@pytest.fixture()
def fresh_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    for h in handlers:
        root.removeHandler(h)
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    if hasattr(root, "_photodrop_inited"):
        del root._photodrop_inited


def test_console_only_by_default(fresh_root):
    init_logger()

    assert len(fresh_root.handlers) == 1
    handler = fresh_root.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert handler.stream is sys.stdout
    assert handler.formatter._fmt == TEXT_FORMAT
    assert logging.getLogger("httpx").level == logging.WARNING


def test_init_is_idempotent(fresh_root):
    first = init_logger()
    second = init_logger()

    assert first is second
    assert len(fresh_root.handlers) == 1


def test_file_handler_when_enabled(fresh_root, tmp_path, monkeypatch):
    monkeypatch.setattr(logger_module.settings, "LOG_TO_FILE", True)
    monkeypatch.setattr(logger_module.settings, "LOG_DIR", str(tmp_path / "logs"))

    init_logger()
    logging.getLogger("photo-drop").warning("upload.ok file=001.jpg")

    files = [h for h in fresh_root.handlers if isinstance(h, RotatingFileHandler)]
    assert len(files) == 1
    files[0].flush()
    written = (tmp_path / "logs" / logger_module.settings.LOG_FILE_NAME).read_text()
    assert "WARNING photo-drop - upload.ok file=001.jpg" in written
